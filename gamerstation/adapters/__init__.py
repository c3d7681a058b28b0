"""Adapters layer for the GamerStation API service.

This layer contains all adapters that translate between the core domain
and external systems (database, Blizzard and Data Dragon APIs, HTTP).
"""
