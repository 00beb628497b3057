"""Base application generators.

A generator produces the skeleton of one application inside the apps
directory (``{apps_dir}/{name}/``) before the scaffolder's own artifacts
are applied on top.  The scaffolder only cares whether it succeeded.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import anyio
from anyio import to_thread
from loguru import logger


class GenerationFailure(RuntimeError):
    """Creating or writing an application failed."""

    def __init__(self, app_name: str, reason: str) -> None:
        self.app_name = app_name
        self.reason = reason
        super().__init__(f"Failed to create app '{app_name}': {reason}")


@runtime_checkable
class AppGenerator(Protocol):
    """Creates the base skeleton of one application."""

    async def generate(self, name: str, cwd: Path) -> None:
        """Create ``cwd / name``.  Raises ``GenerationFailure`` on any error."""
        ...


class NextAppGenerator:
    """Runs ``create-next-app`` (or any configured command) as a subprocess.

    Output is passed through to the terminal so the user sees npm progress.
    """

    def __init__(self, command: Sequence[str]) -> None:
        if not command:
            raise ValueError("Generator command must not be empty")
        self._command = list(command)

    def command_for(self, name: str) -> list[str]:
        return [part.replace("{name}", name) for part in self._command]

    async def generate(self, name: str, cwd: Path) -> None:
        command = self.command_for(name)
        logger.info("Running {} in {}", " ".join(command), cwd)
        try:
            # stdio is inherited so interactive prompts and npm progress reach the terminal
            async with await anyio.open_process(command, cwd=cwd, stdin=None, stdout=None, stderr=None) as process:
                returncode = await process.wait()
        except OSError as exc:
            raise GenerationFailure(name, f"could not run {command[0]!r}: {exc}") from exc

        if returncode != 0:
            raise GenerationFailure(name, f"{command[0]} exited with status {returncode}")


class BareDirectoryGenerator:
    """Creates an empty application directory without invoking any tool."""

    async def generate(self, name: str, cwd: Path) -> None:
        target = cwd / name
        try:
            await to_thread.run_sync(lambda: target.mkdir(parents=True, exist_ok=False))
        except OSError as exc:
            raise GenerationFailure(name, str(exc)) from exc
        logger.debug("Created bare app directory {}", target)
