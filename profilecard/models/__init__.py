"""Pydantic models for profilecard."""

from profilecard.models.stats import StatsRecord

__all__ = [
    "StatsRecord",
]
