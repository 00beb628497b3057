"""Scaffolder configuration loaded from NEXTMFE_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nextmfe.scaffold.models.request import DEFAULT_HOST_PORT, DEFAULT_REMOTE_BASE_PORT
from nextmfe.scaffold.planner import DEFAULT_WORKSPACE_NAME


class ScaffoldSettings(BaseSettings):
    """Scaffolder settings.

    All fields are read from environment variables with the ``NEXTMFE_``
    prefix.  For example, ``NEXTMFE_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    CLI options take precedence over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEXTMFE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Ports -----------------------------------------------------------------
    host_port: int = DEFAULT_HOST_PORT
    remote_base_port: int = DEFAULT_REMOTE_BASE_PORT
    """First remote port; remote ``i`` gets ``remote_base_port + i``."""

    # -- Workspace ---------------------------------------------------------------
    workspace_name: str = DEFAULT_WORKSPACE_NAME

    # -- Base app generator ----------------------------------------------------
    generator_command: list[str] = Field(
        default_factory=lambda: [
            "npx",
            "create-next-app@latest",
            "{name}",
            "--typescript",
            "--tailwind",
            "--eslint",
            "--app",
            "--src-dir",
            "--use-npm",
            "--no-git",
        ]
    )
    """Command that creates the base app; ``{name}`` is replaced by the app name.

    Set as JSON, e.g. ``NEXTMFE_GENERATOR_COMMAND='["npx", "create-next-app@14", "{name}"]'``.
    """


@lru_cache(maxsize=1)
def get_settings() -> ScaffoldSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return ScaffoldSettings()
