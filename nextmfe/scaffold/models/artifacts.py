"""Generated artifact data model.

An ``AppArtifacts`` holds everything written into one application
directory after the base app generator has run: whole files that are
created or overwritten, and JSON documents that are patched in place
(``package.json``, ``tsconfig.json``).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from nextmfe.scaffold.models.enums import AppRole
from nextmfe.scaffold.models.request import RemoteDescriptor

APPS_DIR = "apps"


class JsonMerge(BaseModel):
    """In-place update of a JSON document inside an application.

    Applied in order: ``replace`` sets top-level keys, ``merge`` shallow-merges
    into top-level objects, ``append`` extends top-level arrays (skipping
    values already present).
    """

    path: str
    replace: dict[str, object] = Field(default_factory=dict)
    merge: dict[str, dict[str, object]] = Field(default_factory=dict)
    append: dict[str, list[object]] = Field(default_factory=dict)

    def apply(self, document: dict) -> dict:
        """Return a patched copy of ``document``."""
        result = dict(document)
        result.update(self.replace)
        for key, values in self.merge.items():
            current = result.get(key)
            result[key] = {**(current if isinstance(current, dict) else {}), **values}
        for key, values in self.append.items():
            current = result.get(key)
            items = list(current) if isinstance(current, list) else []
            items.extend(v for v in values if v not in items)
            result[key] = items
        return result


class AppArtifacts(BaseModel):
    """Rendered artifacts for a single host or remote application."""

    name: str
    role: AppRole
    port: int
    remotes: list[RemoteDescriptor] = Field(default_factory=list)
    files: dict[str, str] = Field(default_factory=dict, description="Path relative to the app root -> content")
    json_merges: list[JsonMerge] = Field(default_factory=list)

    @property
    def root(self) -> str:
        return f"{APPS_DIR}/{self.name}"


class GeneratedArtifactSet(BaseModel):
    """All applications produced for one request, host first."""

    apps: list[AppArtifacts] = Field(default_factory=list)

    @property
    def host(self) -> AppArtifacts | None:
        return next((app for app in self.apps if app.role == AppRole.HOST), None)

    @property
    def remote_apps(self) -> list[AppArtifacts]:
        return [app for app in self.apps if app.role == AppRole.REMOTE]

    def get(self, name: str) -> AppArtifacts:
        """Return the app called ``name``.  Raises ``KeyError`` if absent."""
        for app in self.apps:
            if app.name == name:
                return app
        raise KeyError(name)

    @property
    def files(self) -> dict[str, str]:
        """Every file keyed by its workspace-relative path (``apps/<name>/...``)."""
        return {f"{app.root}/{path}": content for app in self.apps for path, content in app.files.items()}
