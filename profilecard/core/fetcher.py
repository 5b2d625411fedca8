"""httpx-based client for the GitHub REST API."""

from typing import Any

import httpx

from profilecard.exceptions import FetchError, ProfileNotFoundError, RateLimitedError

DEFAULT_BASE_URL = "https://api.github.com"
USER_AGENT = "profilecard/0.1"
API_VERSION = "2022-11-28"

# GitHub caps a single page at 100 items
PAGE_SIZE = 100


class GitHubSource:
    """
    Read-only view of a GitHub user's public data.

    Every call is a single attempt. Failures surface as FetchError (or one of
    its subclasses) and it is up to the caller to decide whether they are
    fatal.

    Example:
        async with GitHubSource(token) as source:
            user = await source.get_user("octocat")
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the source.

        Args:
            token: Personal access token, sent as a Bearer credential
            base_url: API root, overridable for GitHub Enterprise
            timeout_seconds: Per-request timeout
            client: Pre-built client, mainly for tests; not closed by us
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
        )

    async def __aenter__(self) -> "GitHubSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this source created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str, params: dict | None = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {path} failed: {e}") from e

        status = response.status_code
        if status == 404:
            raise ProfileNotFoundError(f"Not found: {path}")
        if status == 429 or (
            status == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            raise RateLimitedError(f"Rate limited (HTTP {status}) on {path}")
        if status >= 400:
            raise FetchError(f"HTTP {status} from {path}")

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {path}") from e

    async def get_user(self, handle: str) -> dict:
        """
        Fetch a user's public profile.

        Raises:
            ProfileNotFoundError: If the user does not exist
            FetchError: On any other failure
        """
        data = await self._get_json(f"/users/{handle}")
        if not isinstance(data, dict):
            raise FetchError(f"Unexpected profile payload for {handle}")
        return data

    async def list_repos(self, handle: str) -> list[dict]:
        """Fetch one page of the user's repositories, most recently updated first."""
        data = await self._get_json(
            f"/users/{handle}/repos",
            params={"per_page": PAGE_SIZE, "sort": "updated"},
        )
        if not isinstance(data, list):
            raise FetchError(f"Unexpected repository payload for {handle}")
        return data

    async def list_public_events(self, handle: str) -> list[dict]:
        """Fetch one page of the user's recent public activity events."""
        data = await self._get_json(
            f"/users/{handle}/events/public",
            params={"per_page": PAGE_SIZE},
        )
        if not isinstance(data, list):
            raise FetchError(f"Unexpected events payload for {handle}")
        return data

    async def search_count(self, query: str) -> int:
        """
        Run an issue/pull-request search and return only its total count.

        Args:
            query: GitHub search qualifiers, e.g. "author:octocat type:issue"
        """
        data = await self._get_json(
            "/search/issues",
            params={"q": query, "per_page": 1},
        )
        try:
            return int(data["total_count"])
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(f"Search response missing total_count: {query}") from e
