"""One-shot operator tools for fetching static game data."""
