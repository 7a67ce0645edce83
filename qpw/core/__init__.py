"""Core building blocks: session, API client, lookups."""
