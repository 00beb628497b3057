"""Progress payload passed to reporters."""

from __future__ import annotations

from pydantic import BaseModel

from nextmfe.scaffold.models.enums import AppRole, Stage


class ScaffoldStatus(BaseModel):
    stage: Stage
    message: str
    app_name: str | None = None
    role: AppRole | None = None
