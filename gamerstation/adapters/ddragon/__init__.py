"""Data Dragon adapter package."""

from .client import (
    DataDragonClient,
    DataDragonError,
    summarize_champion,
    summarize_champion_detail,
)

__all__ = [
    "DataDragonClient",
    "DataDragonError",
    "summarize_champion",
    "summarize_champion_detail",
]
