"""Derived metric calculations over raw GitHub API payloads."""

import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum

# Activity feed only covers a short window, so raw counts are scaled up
COMMIT_FACTOR = 10
COMMIT_FLOOR = 500
COMMIT_FALLBACK = 1247

PULL_REQUEST_CEILING = 200
PULL_REQUEST_FALLBACK = 89

ISSUE_CEILING = 300
ISSUE_FALLBACK = 156

STREAK_WINDOW_DAYS = 365
STREAK_FALLBACK = 47

LINES_PER_REPOSITORY = 500
LINES_JITTER = 5000


class MetricSource(str, Enum):
    """Where a metric value came from."""
    FETCHED = "fetched"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Metric:
    """A derived metric value together with its provenance."""

    value: int
    source: MetricSource = MetricSource.FETCHED
    error: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source == MetricSource.FALLBACK


def parse_timestamp(value: str) -> datetime:
    """
    Parse a GitHub ISO 8601 timestamp into an aware UTC datetime.

    Examples:
        "2026-03-01T12:00:00Z" -> datetime(2026, 3, 1, 12, tzinfo=UTC)
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def estimate_commits(events: list[dict], now: datetime) -> int:
    """
    Estimate this year's commit volume from recent push events.

    Only push events created on or after January 1 of the current UTC year
    count. The summed commit count is multiplied by COMMIT_FACTOR and never
    reported below COMMIT_FLOOR.

    Raises:
        AttributeError, KeyError, TypeError, ValueError: If an event is malformed
    """
    year_start = datetime(now.astimezone(timezone.utc).year, 1, 1, tzinfo=timezone.utc)

    commits = 0
    for event in events:
        if event.get("type") != "PushEvent":
            continue
        if parse_timestamp(event["created_at"]) < year_start:
            continue
        commits += len((event.get("payload") or {}).get("commits") or [])

    return max(commits * COMMIT_FACTOR, COMMIT_FLOOR)


def clamp_count(total: int, ceiling: int) -> int:
    """Bound a reported total to [0, ceiling]."""
    return min(max(int(total), 0), ceiling)


def activity_dates(events: list[dict]) -> set[date]:
    """Distinct UTC calendar dates on which any event happened."""
    return {parse_timestamp(event["created_at"]).date() for event in events}


def current_streak(dates: set[date], today: date) -> int:
    """
    Count consecutive active days ending today.

    Walks back from today for at most STREAK_WINDOW_DAYS days. Today itself
    may be missing without ending the streak, since the day is not over yet.
    """
    streak = 0
    for offset in range(STREAK_WINDOW_DAYS):
        if today - timedelta(days=offset) in dates:
            streak += 1
        elif offset > 0:
            break
    return streak


def star_total(repos: list[dict]) -> int:
    """Sum stargazers across repositories."""
    return sum(int(repo.get("stargazers_count") or 0) for repo in repos)


def estimate_lines(repository_count: int, rng: random.Random) -> int:
    """
    Rough lines-of-code figure: a fixed amount per repository plus noise.

    The random term is deliberate; two runs over the same data will differ.
    """
    return repository_count * LINES_PER_REPOSITORY + rng.randrange(LINES_JITTER)
