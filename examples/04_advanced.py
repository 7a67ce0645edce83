"""
Advanced usage - Proxy, config, events, raw requests
"""
import asyncio

from qpw import ApiError, MemorySession, QPWClient


async def main():
    # Custom configuration
    config = QPWClient.create_config(
        proxy="http://proxy.example.com:8080",
        proxy_user="user",
        proxy_pass="pass",
        timeout=60,
        page_size=200,
        max_pages=10,
    )

    # In-memory session seeded with an existing token
    storage = MemorySession({"token": "existing-token", "region": "mypurecloud.de"})

    async with QPWClient(storage, config=config) as qpw:

        # 401/403 clears the session; listen for it too
        qpw.api.on("unauthorized", lambda error: print(f"Rejected: {error.status}"))

        try:
            skills = await qpw.request("/api/v2/routing/skills", {"pageSize": 25})
            print(f"Skills on first page: {len(skills.get('entities', []))}")
        except ApiError as e:
            print(f"API error: {e}")

        print(f"Still logged in: {qpw.is_logged_in}")


if __name__ == "__main__":
    asyncio.run(main())
