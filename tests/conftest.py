"""Shared fixtures: canned API payloads and an in-memory profile source."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from profilecard.exceptions import FetchError

FIXTURES_DIR = Path(__file__).parent / "fixtures"

NOW = datetime(2026, 10, 18, 15, 30, tzinfo=timezone.utc)


def load_fixture(name: str):
    """Load a JSON API payload fixture."""
    return json.loads((FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8"))


def iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def push_event(created_at: datetime, commits: int) -> dict:
    """Build a PushEvent payload carrying a number of commits."""
    return {
        "type": "PushEvent",
        "created_at": iso(created_at),
        "payload": {"commits": [{"sha": f"{i:040x}"} for i in range(commits)]},
    }


def other_event(created_at: datetime, event_type: str = "WatchEvent") -> dict:
    return {"type": event_type, "created_at": iso(created_at), "payload": {}}


def events_on_days_ago(*days: int) -> list[dict]:
    """One non-push event on each given number of days before NOW."""
    return [other_event(NOW - timedelta(days=d)) for d in days]


class FakeSource:
    """
    In-memory stand-in for GitHubSource.

    Any payload may be an exception instance, which is raised when that
    operation is called.
    """

    def __init__(
        self,
        user=None,
        repos=None,
        events=None,
        pr_total=0,
        issue_total=0,
    ):
        self.user = load_fixture("user") if user is None else user
        self.repos = load_fixture("repos") if repos is None else repos
        self.events = [] if events is None else events
        self.pr_total = pr_total
        self.issue_total = issue_total
        self.calls: list[tuple[str, str]] = []

    @staticmethod
    def _give(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def get_user(self, handle: str) -> dict:
        self.calls.append(("get_user", handle))
        return self._give(self.user)

    async def list_repos(self, handle: str) -> list[dict]:
        self.calls.append(("list_repos", handle))
        return self._give(self.repos)

    async def list_public_events(self, handle: str) -> list[dict]:
        self.calls.append(("list_public_events", handle))
        return self._give(self.events)

    async def search_count(self, query: str) -> int:
        self.calls.append(("search_count", query))
        if "type:pr" in query:
            return self._give(self.pr_total)
        return self._give(self.issue_total)


@pytest.fixture
def failing_source():
    """Source where every optional call fails."""
    return FakeSource(
        repos=[{"stargazers_count": 3}, {"stargazers_count": 7}],
        events=FetchError("events unavailable"),
        pr_total=FetchError("search unavailable"),
        issue_total=FetchError("search unavailable"),
    )
