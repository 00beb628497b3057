"""Workspace orchestration -- the side-effecting half of the scaffolder.

``WorkspaceOrchestrator`` takes already-built artifacts and puts them on
disk: it runs the base app generator for each application, applies the
rendered files on top, and reports progress.

Creation is all-or-nothing across the requested applications.  If any app
fails, every app directory created during the run is removed (and the apps
directory itself, if this run created it) before the error is re-raised.
Nothing is retried.  Applications are processed one at a time so that a
rollback never races a write into the same directory.
"""

from __future__ import annotations

from pathlib import Path

import anyio
from loguru import logger

from nextmfe.scaffold.generator import AppGenerator, GenerationFailure
from nextmfe.scaffold.models.artifacts import APPS_DIR, AppArtifacts, GeneratedArtifactSet
from nextmfe.scaffold.models.enums import Stage
from nextmfe.scaffold.models.status import ScaffoldStatus
from nextmfe.scaffold.planner import DEFAULT_WORKSPACE_NAME, build_workspace_root
from nextmfe.scaffold.reporter import LogReporter, Reporter
from nextmfe.scaffold.writer import ArtifactWriter

PACKAGES_DIR = "packages"


class WorkspaceOrchestrator:
    """Creates workspaces and applications under ``root``."""

    def __init__(
        self,
        root: str | Path,
        *,
        generator: AppGenerator,
        reporter: Reporter | None = None,
        workspace_name: str = DEFAULT_WORKSPACE_NAME,
    ) -> None:
        self._writer = ArtifactWriter(root)
        self._generator = generator
        self._reporter = reporter or LogReporter()
        self._workspace_name = workspace_name

    @property
    def root(self) -> Path:
        return self._writer.root

    # -- init ------------------------------------------------------------------

    async def init_workspace(self, *, force: bool = False) -> bool:
        """Create ``apps/``, ``packages/`` and the root manifest.

        Returns ``False`` if a manifest already existed and was kept.
        """
        self._report(Stage.STARTED, "Initializing micro-frontend workspace...")
        await self._writer.ensure_dir(APPS_DIR)
        await self._writer.ensure_dir(PACKAGES_DIR)

        files = build_workspace_root(self._workspace_name)
        written = True
        for path, content in files.items():
            if not force and await self._writer.exists(path):
                logger.warning("{} already exists, keeping it (use --force to overwrite)", path)
                written = False
                continue
            await self._writer.write_file(path, content)

        self._report(Stage.COMPLETED, "Workspace initialized successfully!")
        return written

    # -- create ----------------------------------------------------------------

    async def create(self, artifacts: GeneratedArtifactSet) -> None:
        """Generate and write every application in ``artifacts``, host first.

        Raises ``GenerationFailure`` after rolling back on any error.  Interrupts
        (``KeyboardInterrupt``, cancellation) are rolled back too and re-raised as is.
        """
        for app in artifacts.apps:
            if await self._writer.exists(app.root):
                exc = GenerationFailure(app.name, f"{app.root} already exists")
                self._report(Stage.FAILED, str(exc), app)
                raise exc

        apps_created = not await self._writer.exists(APPS_DIR)
        created: list[AppArtifacts] = []
        self._report(Stage.STARTED, "Creating micro-frontend applications...")

        try:
            await self._writer.ensure_dir(APPS_DIR)
            for app in artifacts.apps:
                self._report(Stage.APP_STARTED, f"Creating {app.role} app: {app.name}", app)
                created.append(app)
                await self._create_app(app)
                self._report(Stage.APP_COMPLETED, f"Created {app.role} app {app.name} (port {app.port})", app)
        except GenerationFailure as exc:
            await self._abort(created, apps_created, str(exc))
            raise
        except Exception as exc:
            app_name = created[-1].name if created else APPS_DIR
            failure = GenerationFailure(app_name, f"{type(exc).__name__}: {exc}")
            await self._abort(created, apps_created, str(failure))
            raise failure from exc
        except BaseException:
            # Interrupted (Ctrl-C or cancellation): clean up, then let it propagate unchanged.
            await self._abort(created, apps_created, "interrupted")
            raise

        self._report(Stage.COMPLETED, "Successfully created all applications")

    async def _create_app(self, app: AppArtifacts) -> None:
        await self._generator.generate(app.name, self.root / APPS_DIR)
        try:
            await self._writer.write_app(app)
        except (OSError, ValueError) as exc:
            raise GenerationFailure(app.name, str(exc)) from exc

    async def _abort(self, created: list[AppArtifacts], apps_created: bool, reason: str) -> None:
        self._report(Stage.FAILED, f"Error creating micro-frontend applications: {reason}")
        with anyio.CancelScope(shield=True):
            await self._rollback(created, remove_apps_dir=apps_created)

    async def _rollback(self, created: list[AppArtifacts], *, remove_apps_dir: bool) -> None:
        targets = [APPS_DIR] if remove_apps_dir else [app.root for app in created]
        for target in targets:
            logger.debug("Rolling back {}", target)
            await self._writer.remove(target)
        self._report(Stage.ROLLED_BACK, f"Removed {', '.join(targets)}")

    # -- Helpers ---------------------------------------------------------------

    def _report(self, stage: Stage, message: str, app: AppArtifacts | None = None) -> None:
        self._reporter.report(
            ScaffoldStatus(
                stage=stage,
                message=message,
                app_name=app.name if app else None,
                role=app.role if app else None,
            )
        )
