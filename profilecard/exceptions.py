"""Custom exception hierarchy for profilecard."""


class ProfileCardError(Exception):
    """Base exception for all profilecard errors."""


class FetchError(ProfileCardError):
    """Failed to fetch data from the GitHub API."""


class ProfileNotFoundError(FetchError):
    """User or resource does not exist."""


class RateLimitedError(FetchError):
    """The API refused the request because the rate limit is exhausted."""


class RenderError(ProfileCardError):
    """Failed to render or write an output document."""


class ConfigError(ProfileCardError):
    """Invalid configuration."""
