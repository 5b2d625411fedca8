"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class CardConfig(BaseSettings):
    """Configuration for the profile card generator."""

    # GitHub access
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "PROFILECARD_GITHUB_TOKEN", "GITHUB_TOKEN"
        ),
    )
    handle: str = Field(
        default="Dineshs737",
        validation_alias=AliasChoices(
            "PROFILECARD_HANDLE", "GITHUB_USERNAME"
        ),
    )
    api_base_url: str = "https://api.github.com"
    request_timeout_seconds: float = 20.0

    # Profile text used when the API leaves a field blank
    default_location: str = "Srilanka, Mannar"
    default_bio: str = "Undergraduate Student"
    default_organization: str = "@Learning"

    # Output
    output_dir: str = "."
    svg_filename: str = "profile.svg"
    readme_filename: str = "README.md"

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "PROFILECARD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
