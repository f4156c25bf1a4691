"""Option and result models for get operations."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from repoherd.vcs.base import VCSKind


class CloneOptions(BaseModel):
    """Everything a backend needs for one clone or update.

    Backends never derive ``dir`` from ``url``; the orchestrator computes it.
    """

    url: str | None = Field(default=None, description="Remote URL (clone only)")
    dir: Path = Field(..., description="Absolute working copy root")
    shallow: bool = Field(default=False, description="Fetch the cheapest history depth")
    branch: str = Field(default="", description="Branch or tag; empty means default")
    silent: bool = Field(default=False, description="Suppress tool output")

    model_config = {"frozen": True}

    @field_validator("dir")
    @classmethod
    def _absolute_dir(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"dir must be absolute: {value}")
        return Path(os.path.normpath(value))


class GetOptions(BaseModel):
    """Caller-facing switches for a get operation."""

    update: bool = False
    shallow: bool = False
    branch: str = ""
    private: bool = Field(default=False, description="Rewrite the remote to its SSH form")
    silent: bool = False
    vcs: VCSKind | None = Field(default=None, description="Force a backend for new clones")


class GetAction(str, Enum):
    """What a get operation did to the local directory."""

    CLONED = "cloned"
    UPDATED = "updated"
    SKIPPED = "skipped"  # Working copy exists and no update was requested


class GetResult(BaseModel):
    """Outcome of a single get operation."""

    reference: str
    url: str
    local_dir: Path
    vcs: VCSKind
    action: GetAction
