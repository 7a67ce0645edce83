"""
Lookups - Load reference data for the filter pickers
"""
import asyncio
import logging

from qpw import QPWClient, setup_logging


async def main():
    logging.basicConfig()
    setup_logging(logging.INFO)

    async with QPWClient("work") as qpw:
        if not qpw.is_logged_in:
            print("Run 01_login.py first")
            return

        # All eight resources, all or nothing
        lookups = await qpw.load_lookups()
        if not lookups.ok:
            for name, error in lookups.errors.items():
                print(f"{name}: {error}")
            return

        for name, options in lookups.options.items():
            print(f"{name}: {len(options)}")
            for option in options[:3]:
                print(f"  {option.label} ({option.id})")

        # Single resource; errors are raised instead of collected
        queues = await qpw.load_lookup("queues")
        print(f"\n{len(queues)} queues")

        # Any other list resource
        divisions = await qpw.get_all_pages("/api/v2/authorization/divisions", page_size=50)
        print(f"{len(divisions)} divisions")


if __name__ == "__main__":
    asyncio.run(main())
