"""Progress reporting.

The orchestrator reports ``ScaffoldStatus`` values to a ``Reporter``;
how they are shown is up to the implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import click
from loguru import logger

from nextmfe.scaffold.models.enums import Stage
from nextmfe.scaffold.models.status import ScaffoldStatus


@runtime_checkable
class Reporter(Protocol):
    def report(self, status: ScaffoldStatus) -> None: ...


class LogReporter:
    """Sends every status to loguru."""

    def report(self, status: ScaffoldStatus) -> None:
        if status.stage == Stage.FAILED:
            logger.error(status.message)
        else:
            logger.info(status.message)


_STAGE_STYLES: dict[Stage, dict[str, object]] = {
    Stage.COMPLETED: {"fg": "green", "bold": True},
    Stage.FAILED: {"fg": "red", "bold": True},
    Stage.ROLLED_BACK: {"fg": "yellow"},
    Stage.APP_COMPLETED: {"fg": "green"},
}


class ConsoleReporter:
    """Colored terminal output through click."""

    def report(self, status: ScaffoldStatus) -> None:
        style = _STAGE_STYLES.get(status.stage, {"fg": "blue"})
        click.secho(status.message, err=status.stage == Stage.FAILED, **style)
