"""Filesystem writer for generated artifacts.

Writes are atomic per file: data goes to a temporary file in the target
directory, then is renamed over the destination.  Uses
``anyio.to_thread.run_sync`` for non-blocking file I/O.
"""

from __future__ import annotations

import contextlib
import json
import os
import shutil
import tempfile
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from nextmfe.scaffold.models.artifacts import AppArtifacts, JsonMerge


class ArtifactWriter:
    """Materializes artifacts under a workspace root.

    Layout::

        {root}/apps/{name}/...
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    # -- Write -----------------------------------------------------------------

    async def write_file(self, relative_path: str, content: str) -> None:
        await to_thread.run_sync(partial(_atomic_write, self._root / relative_path, content))

    async def write_files(self, files: dict[str, str]) -> None:
        for relative_path, content in files.items():
            await self.write_file(relative_path, content)

    async def apply_json_merge(self, app_root: str, merge: JsonMerge) -> None:
        await to_thread.run_sync(partial(_merge_json, self._root / app_root / merge.path, merge))

    async def write_app(self, app: AppArtifacts) -> None:
        """Apply JSON merges, then write every file of ``app``."""
        for merge in app.json_merges:
            await self.apply_json_merge(app.root, merge)
        await self.write_files({f"{app.root}/{path}": content for path, content in app.files.items()})
        logger.debug("Wrote {} files for {}", len(app.files), app.name)

    # -- Utilities -------------------------------------------------------------

    async def ensure_dir(self, relative_path: str) -> None:
        path = self._root / relative_path
        await to_thread.run_sync(partial(path.mkdir, parents=True, exist_ok=True))

    async def exists(self, relative_path: str) -> bool:
        return await to_thread.run_sync((self._root / relative_path).exists)

    async def remove(self, relative_path: str) -> None:
        """Recursively remove a path.  No-op if it doesn't exist."""
        await to_thread.run_sync(partial(_remove, self._root / relative_path))


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _merge_json(path: Path, merge: JsonMerge) -> None:
    """Patch a JSON object file in place; a missing file starts as ``{}``."""
    document: dict = {}
    if path.exists():
        loaded = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            msg = f"{path} does not contain a JSON object"
            raise ValueError(msg)
        document = loaded
    _atomic_write(path, json.dumps(merge.apply(document), indent=2) + "\n")


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
