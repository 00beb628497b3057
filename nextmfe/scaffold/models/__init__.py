"""Pydantic models for workspace requests, artifacts and progress."""

from nextmfe.scaffold.models.artifacts import AppArtifacts, GeneratedArtifactSet, JsonMerge
from nextmfe.scaffold.models.enums import AppRole, Stage
from nextmfe.scaffold.models.request import RemoteDescriptor, WorkspaceRequest
from nextmfe.scaffold.models.status import ScaffoldStatus

__all__ = [
    "AppArtifacts",
    "AppRole",
    "GeneratedArtifactSet",
    "JsonMerge",
    "RemoteDescriptor",
    "ScaffoldStatus",
    "Stage",
    "WorkspaceRequest",
]
