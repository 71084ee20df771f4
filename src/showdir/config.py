"""showdir configuration.

Settings are read from ``SHOWDIR_*`` environment variables and may be
overridden from the command line. A single instance is built at startup and
never mutated afterwards: the listing middleware takes its options from it.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ACTION_NAME = "Play media with IINA"
DEFAULT_ACTION_LINK_TEMPLATE = "iina://weblink?url={url}"


class Settings(BaseSettings):
    """Server and listing options."""

    model_config = SettingsConfigDict(
        env_prefix="SHOWDIR_",
        frozen=True,
        extra="ignore",
        validate_default=True,
    )

    # Served tree
    root: Path = Field(default_factory=Path.cwd, description="Directory served as /")
    base_dir: str = Field(default="/", description="URL prefix the root is mounted under")

    # Response headers
    cache: str = Field(default="max-age=3600", description="Cache-Control header value")
    weak_etags: bool = Field(default=False, description="Emit weak (W/) etags")

    # Listing display
    human_readable: bool = Field(default=True, description="Humanize file sizes")
    si: bool = Field(default=False, description="Use powers of 1000 instead of 1024")
    hide_permissions: bool = Field(default=False, description="Drop the permissions column")
    show_dotfiles: bool = Field(default=False, description="List names starting with '.'")
    show_unreadable: bool = Field(
        default=True, description="Render entries that failed to stat as unreadable rows"
    )
    handle_error: bool = Field(
        default=True,
        description="Answer directory-level failures with a 500 page instead of passing on",
    )

    # Synthetic "play media" entry
    public_url: str = Field(default="", description="Public base URL used in the player link")
    action_name: str = Field(default=DEFAULT_ACTION_NAME)
    action_link_template: str = Field(default=DEFAULT_ACTION_LINK_TEMPLATE)

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    @field_validator("root", mode="after")
    @classmethod
    def _canonical_root(cls, value: Path) -> Path:
        # Parent-link confinement is a string-prefix test, so the root is
        # resolved once here and never again.
        return value.expanduser().resolve()

    @field_validator("base_dir", mode="after")
    @classmethod
    def _normalize_base_dir(cls, value: str) -> str:
        value = "/" + value.strip("/")
        return value

    @field_validator("action_link_template", mode="after")
    @classmethod
    def _check_template(cls, value: str) -> str:
        if "{url}" not in value:
            raise ValueError("action_link_template must contain '{url}'")
        try:
            value.format(url="")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(f"action_link_template does not format: {e!r}") from e
        return value

    @classmethod
    def load(cls, **overrides: Any) -> Settings:
        """Build settings from the environment, applying non-None *overrides*."""
        return cls(**{k: v for k, v in overrides.items() if v is not None})


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings built from the environment."""
    return Settings.load()
