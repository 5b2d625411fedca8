"""Stats aggregation - coordinates API calls, fallbacks and derived metrics."""

import asyncio
import random
from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol, TypeVar

from profilecard.config import CardConfig
from profilecard.core.fetcher import GitHubSource
from profilecard.core.metrics import (
    COMMIT_FALLBACK,
    ISSUE_CEILING,
    ISSUE_FALLBACK,
    PULL_REQUEST_CEILING,
    PULL_REQUEST_FALLBACK,
    STREAK_FALLBACK,
    Metric,
    MetricSource,
    activity_dates,
    clamp_count,
    current_streak,
    estimate_commits,
    estimate_lines,
    star_total,
)
from profilecard.exceptions import FetchError
from profilecard.logging import bind_handle, get_logger
from profilecard.models.stats import StatsRecord

T = TypeVar("T")

# Raised by metric functions on payloads that do not look like the API docs
MALFORMED_PAYLOAD = (AttributeError, KeyError, TypeError, ValueError)


class ProfileSource(Protocol):
    """The read operations the aggregator needs from a remote source."""

    async def get_user(self, handle: str) -> dict: ...

    async def list_repos(self, handle: str) -> list[dict]: ...

    async def list_public_events(self, handle: str) -> list[dict]: ...

    async def search_count(self, query: str) -> int: ...


class _Failed:
    """Marker for a recoverable fetch that did not complete."""

    def __init__(self, error: Exception):
        self.error = error


async def _attempt(call: Awaitable[T]) -> "T | _Failed":
    try:
        return await call
    except FetchError as e:
        return _Failed(e)


def _fallback(name: str, value: int, error: str) -> Metric:
    get_logger("aggregator").warning(
        "metric_fallback", metric=name, fallback=value, error=error
    )
    return Metric(value, MetricSource.FALLBACK, error)


def _resolve(
    name: str,
    fetched: "T | _Failed",
    compute: Callable[[T], int],
    fallback: int,
) -> Metric:
    """Turn a fetch outcome into a Metric, substituting the fallback on any failure."""
    if isinstance(fetched, _Failed):
        return _fallback(name, fallback, str(fetched.error))

    try:
        return Metric(compute(fetched))
    except MALFORMED_PAYLOAD as e:
        return _fallback(name, fallback, f"malformed payload: {e!r}")


def _text(profile: dict, key: str, default: str) -> str:
    value = profile.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return default


def _count(profile: dict, key: str) -> int:
    try:
        return max(int(profile.get(key) or 0), 0)
    except (TypeError, ValueError):
        return 0


async def collect_stats(
    source: ProfileSource,
    handle: str,
    *,
    config: CardConfig | None = None,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> StatsRecord:
    """
    Gather every statistic for a handle into one StatsRecord.

    The profile and repository list are required: a FetchError from either
    propagates to the caller. The activity feed and both searches run
    concurrently afterwards, and each metric derived from them falls back
    to a fixed value if its call fails.

    Args:
        source: Object providing the four read operations
        handle: GitHub login (a leading @ is ignored)
        config: Supplies default profile text, uses defaults if None
        now: Reference time for "this year" and "today", current UTC if None
        rng: Randomness for the line estimate, fresh Random if None

    Returns:
        Fully populated StatsRecord

    Raises:
        FetchError: If the profile or repository fetch fails
    """
    config = config or CardConfig()
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    rng = rng or random.Random()
    handle = handle.lstrip("@")

    log = get_logger("aggregator")
    bind_handle(handle)
    log.info("collect_start")
    start = datetime.now()

    profile = await source.get_user(handle)
    repos = await source.list_repos(handle)

    outcomes = await asyncio.gather(
        _attempt(source.list_public_events(handle)),
        _attempt(source.search_count(f"author:{handle} type:pr is:merged")),
        _attempt(source.search_count(f"author:{handle} type:issue")),
        return_exceptions=True,
    )
    # Anything _attempt let through is a bug; raise it once all calls settled
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    events, pr_total, issue_total = outcomes

    commits = _resolve(
        "commit_estimate",
        events,
        lambda evts: estimate_commits(evts, now),
        COMMIT_FALLBACK,
    )
    streak = _resolve(
        "streak_days",
        events,
        lambda evts: current_streak(activity_dates(evts), now.date()),
        STREAK_FALLBACK,
    )
    if streak.value == 0:
        streak = _fallback("streak_days", STREAK_FALLBACK, "no activity in streak window")
    pull_requests = _resolve(
        "pull_request_count",
        pr_total,
        lambda total: clamp_count(total, PULL_REQUEST_CEILING),
        PULL_REQUEST_FALLBACK,
    )
    issues = _resolve(
        "issue_count",
        issue_total,
        lambda total: clamp_count(total, ISSUE_CEILING),
        ISSUE_FALLBACK,
    )

    record = StatsRecord(
        name=_text(profile, "name", handle),
        handle=handle,
        location=_text(profile, "location", config.default_location),
        bio=_text(profile, "bio", config.default_bio),
        organization=_text(profile, "company", config.default_organization),
        link=_text(profile, "blog", f"github.com/{handle}"),
        repository_count=len(repos),
        followers=_count(profile, "followers"),
        following=_count(profile, "following"),
        commit_estimate=commits.value,
        pull_request_count=pull_requests.value,
        issue_count=issues.value,
        star_total=star_total(repos),
        streak_days=streak.value,
        estimated_line_count=estimate_lines(len(repos), rng),
    )

    fallbacks = [
        name
        for name, metric in (
            ("commit_estimate", commits),
            ("streak_days", streak),
            ("pull_request_count", pull_requests),
            ("issue_count", issues),
        )
        if metric.is_fallback
    ]
    log.info(
        "collect_complete",
        repositories=record.repository_count,
        stars=record.star_total,
        fallbacks=fallbacks,
        duration_ms=(datetime.now() - start).total_seconds() * 1000,
    )
    return record


async def collect(
    credential: str | None,
    handle: str | None = None,
    config: CardConfig | None = None,
) -> StatsRecord:
    """
    Collect statistics for a handle straight from the GitHub API.

    Args:
        credential: GitHub token, passed through untouched
        handle: GitHub login, config.handle if None
        config: CardConfig instance, uses defaults if None

    Returns:
        Fully populated StatsRecord

    Raises:
        FetchError: If the profile or repository fetch fails
    """
    config = config or CardConfig()
    async with GitHubSource(
        credential,
        base_url=config.api_base_url,
        timeout_seconds=config.request_timeout_seconds,
    ) as source:
        return await collect_stats(source, handle or config.handle, config=config)
