"""Input model for a workspace and the per-remote values derived from it."""

from __future__ import annotations

from pydantic import BaseModel, Field, PositiveInt

DEFAULT_HOST_PORT = 3000
DEFAULT_REMOTE_BASE_PORT = 3001
LOCAL_ORIGIN = "http://localhost"


class WorkspaceRequest(BaseModel):
    """One host application plus an ordered list of remotes.

    Only types are checked on construction.  Naming and port rules are
    enforced by :func:`nextmfe.scaffold.planner.build`, so that every
    offending name can be reported at once.
    """

    host_name: str
    remote_names: list[str] = Field(default_factory=list)
    host_port: PositiveInt = DEFAULT_HOST_PORT
    remote_base_port: PositiveInt = DEFAULT_REMOTE_BASE_PORT


class RemoteDescriptor(BaseModel):
    """A remote with its allocated port and generated identifier base."""

    name: str
    port: int
    identifier_base: str

    @property
    def url(self) -> str:
        return f"{LOCAL_ORIGIN}:{self.port}"

    @property
    def entry_url(self) -> str:
        """URL of the remote entry script published by the remote."""
        return f"{self.url}/remoteEntry.js"

    @property
    def env_var(self) -> str:
        return f"NEXT_PUBLIC_{self.name.upper().replace('-', '_')}_URL"

    @property
    def counter_identifier(self) -> str:
        return f"{self.identifier_base}Counter"

    @property
    def card_identifier(self) -> str:
        return f"{self.identifier_base}Card"
