"""Workspace plan builder -- turns a ``WorkspaceRequest`` into artifacts.

The builder is a pure transform: no filesystem access, no clock, no
randomness.  Building the same request twice yields identical output.

Artifacts per application (paths relative to ``apps/<name>/``):

- both roles: ``module-federation.config.js``, ``next.config.js``, ``.env``
  and a merge into ``package.json``
- remote: the two exposed components under ``src/components/exposed/``
- host: the federated page, remote module typings, ``.env.local``,
  bootstrap / init scripts, layout, and a merge into ``tsconfig.json``

Ports and remote names flow from a single ``allocate()`` call into every
host artifact, which keeps the federation config, environment file and
bootstrap script consistent with each other.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from loguru import logger

from nextmfe.scaffold.models.artifacts import AppArtifacts, GeneratedArtifactSet, JsonMerge
from nextmfe.scaffold.models.enums import AppRole
from nextmfe.scaffold.models.request import RemoteDescriptor, WorkspaceRequest
from nextmfe.scaffold.naming import (
    MAX_PORT,
    DuplicateNameError,
    EmptyHostNameError,
    PortConflictError,
    allocate,
    validate_names,
)
from nextmfe.scaffold.rendering import render

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EXPOSED_MODULES: dict[str, str] = {
    "./counter": "./src/components/exposed/Counter.tsx",
    "./card": "./src/components/exposed/Card.tsx",
}
"""Entry points every remote exposes (module name -> source file)."""

FRAMEWORK_DEPENDENCIES: dict[str, str] = {
    "next": "13.5.6",
    "react": "18.2.0",
    "react-dom": "18.2.0",
    "@module-federation/nextjs-mf": "7.0.8",
    "@module-federation/utilities": "3.0.5",
    "webpack": "5.89.0",
    "geist": "^1.2.0",
}
"""Pinned versions merged into each generated ``package.json``."""

REMOTE_TYPES_GLOB = "src/types/**/*.d.ts"

DEFAULT_WORKSPACE_NAME = "nextjs-mfe-workspace"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build(request: WorkspaceRequest) -> GeneratedArtifactSet:
    """Render the host and every remote of ``request``.

    Raises
    ------
    EmptyHostNameError:
        ``host_name`` is empty or blank.
    InvalidNameError:
        Host or remote names fail the naming pattern (all listed at once).
    DuplicateNameError:
        Remote names collide with each other or with the host.
    PortConflictError:
        The host port falls inside the remote port range, or ports exceed 65535.
    """
    if not request.host_name.strip():
        raise EmptyHostNameError()

    validate_names([request.host_name, *request.remote_names])
    clashing = [name for name in request.remote_names if name.lower() == request.host_name.lower()]
    if clashing:
        raise DuplicateNameError([request.host_name, *clashing])

    remotes = allocate(request.remote_names, request.remote_base_port)
    _check_ports(request.host_port, remotes)

    logger.debug(
        "Planning host {} on port {} with remotes {}",
        request.host_name,
        request.host_port,
        [f"{r.name}:{r.port}" for r in remotes],
    )

    apps = [build_app(request.host_name, AppRole.HOST, request.host_port, remotes)]
    apps.extend(build_app(remote.name, AppRole.REMOTE, remote.port) for remote in remotes)
    return GeneratedArtifactSet(apps=apps)


def build_standalone_remote(name: str, port: int) -> GeneratedArtifactSet:
    """Render a single remote application, not wired to any host."""
    if not name.strip():
        raise EmptyHostNameError()
    validate_names([name])
    if not 0 < port <= MAX_PORT:
        raise PortConflictError(f"Port {port} is outside 1..{MAX_PORT}")
    return GeneratedArtifactSet(apps=[build_app(name, AppRole.REMOTE, port)])


def build_app(
    name: str,
    role: AppRole,
    port: int,
    remotes: Sequence[RemoteDescriptor] = (),
) -> AppArtifacts:
    """Render one application.

    ``remotes`` is only meaningful for the host; a remote never consumes
    other remotes, so the argument is ignored for ``AppRole.REMOTE``.
    """
    role = AppRole(role)
    if role == AppRole.REMOTE:
        remotes = ()
    remotes = list(remotes)

    context = {"name": name, "role": role.value, "port": port, "remotes": remotes, "exposes": EXPOSED_MODULES}

    files = {
        "module-federation.config.js": render("common/module-federation.config.js.j2", **context),
        "next.config.js": render("common/next.config.js.j2", **context),
        ".env": render("common/env.j2", **context),
    }
    json_merges = [
        JsonMerge(
            path="package.json",
            replace={"name": name},
            merge={"dependencies": dict(FRAMEWORK_DEPENDENCIES), "scripts": {"dev": "next dev"}},
        )
    ]

    if role == AppRole.REMOTE:
        files["src/components/exposed/Counter.tsx"] = render("remote/Counter.tsx.j2", **context)
        files["src/components/exposed/Card.tsx"] = render("remote/Card.tsx.j2", **context)
    else:
        files.update(_host_files(context))
        json_merges.append(JsonMerge(path="tsconfig.json", append={"include": [REMOTE_TYPES_GLOB]}))

    return AppArtifacts(name=name, role=role, port=port, remotes=remotes, files=files, json_merges=json_merges)


def build_workspace_root(workspace_name: str = DEFAULT_WORKSPACE_NAME) -> dict[str, str]:
    """Render the root workspace manifest (``package.json``)."""
    manifest = {
        "name": workspace_name,
        "private": True,
        "workspaces": ["apps/*", "packages/*"],
        "scripts": {
            "dev": "turbo run dev",
            "build": "turbo run build",
            "start": "turbo run start",
            "lint": "turbo run lint",
        },
        "devDependencies": {"turbo": "^1.10.0"},
    }
    return {"package.json": json.dumps(manifest, indent=2) + "\n"}


def render_next_steps(artifacts: GeneratedArtifactSet) -> str:
    """Instructions printed after a successful ``create``."""
    return render(
        "next_steps.txt.j2",
        apps=artifacts.apps,
        host=artifacts.host,
        remotes=artifacts.remote_apps,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _host_files(context: dict[str, object]) -> dict[str, str]:
    return {
        "src/types/remote-modules.d.ts": render("host/remote-modules.d.ts.j2", **context),
        "src/app/page.tsx": render("host/page.tsx.j2", **context),
        ".env.local": render("host/env.local.j2", **context),
        "src/bootstrap.js": render("host/bootstrap.js.j2", **context),
        "src/app/init-remote.js": render("host/init-remote.js.j2", **context),
        "src/app/layout.tsx": render("host/layout.tsx.j2", **context),
        "public/remoteEntry.js": "",
        "next-env.d.ts": render("host/next-env.d.ts.j2", **context),
    }


def _check_ports(host_port: int, remotes: Sequence[RemoteDescriptor]) -> None:
    if host_port > MAX_PORT:
        raise PortConflictError(f"Host port {host_port} exceeds {MAX_PORT}")
    taken = [remote.name for remote in remotes if remote.port == host_port]
    if taken:
        msg = f"Host port {host_port} is already allocated to remote {taken[0]!r}"
        raise PortConflictError(msg)
