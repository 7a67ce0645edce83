"""
Criteria - Build and check search filters
"""
import asyncio
import json

from qpw import Criteria, CriteriaValidationError, QPWClient


async def main():
    # Trailing week, voice, both directions
    criteria = Criteria.default()

    async with QPWClient("work") as qpw:
        lookups = await qpw.load_lookups()

    criteria = criteria.replace(
        queues=lookups.ids("queues")[:2],
        media_type="chat",
        min_duration_sec=60,
        use_advanced=True,
        use_sentiment=True,
        sentiment_min=-100,
        sentiment_max=-20,
    )

    try:
        criteria.validate()
    except CriteriaValidationError as e:
        print(f"Invalid: {e}")
        return

    print("Unknown ids:", criteria.unknown_ids(lookups))
    print("Advanced in effect:", criteria.active_advanced())
    print(json.dumps(criteria.to_dict(), indent=2))

    # Turning a gate off keeps its values but takes them out of effect
    criteria = criteria.replace(use_sentiment=False)
    print("Advanced in effect:", criteria.active_advanced())


if __name__ == "__main__":
    asyncio.run(main())
