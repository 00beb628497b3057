"""Shared enumerations used across the scaffolder."""

from __future__ import annotations

from enum import StrEnum


class AppRole(StrEnum):
    """Role an application plays in the federation."""

    HOST = "host"
    REMOTE = "remote"


class Stage(StrEnum):
    """Progress stages reported while a workspace is being created."""

    STARTED = "started"
    APP_STARTED = "app_started"
    APP_COMPLETED = "app_completed"
    COMPLETED = "completed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"
