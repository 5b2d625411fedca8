"""Aggregated profile statistics model."""

from pydantic import BaseModel, ConfigDict, Field


class StatsRecord(BaseModel):
    """
    Statistics for one GitHub profile, built once per collection run.

    Text fields are never empty: the aggregator substitutes a default literal
    when the API leaves them blank. Count fields carry the bounds the
    aggregator guarantees, so a record that breaks them fails validation.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    handle: str = Field(min_length=1)
    location: str = Field(min_length=1)
    bio: str = Field(min_length=1)
    organization: str = Field(min_length=1)
    link: str = Field(min_length=1)

    repository_count: int = Field(ge=0)
    followers: int = Field(ge=0)
    following: int = Field(ge=0)

    commit_estimate: int = Field(ge=500)
    pull_request_count: int = Field(ge=0, le=200)
    issue_count: int = Field(ge=0, le=300)
    star_total: int = Field(ge=0)
    streak_days: int = Field(ge=0, le=365)

    # Heuristic with a random component, not reproducible between runs
    estimated_line_count: int = Field(ge=0)
