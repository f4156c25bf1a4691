"""Configuration model for local repository roots and reference defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from repoherd.vcs.base import VCSKind

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/repoherd/config.yaml")
DEFAULT_ROOT = Path("~/repoherd")


class HerdConfig(BaseModel):
    """Roots and defaults shared by the resolver, path mapper and getter."""

    roots: list[Path] = Field(
        default_factory=lambda: [DEFAULT_ROOT.expanduser()],
        description="Ordered local roots; the first receives new clones",
    )
    default_host: str = Field(default="github.com", description="Host for owner/repo shorthand")
    default_user: str | None = Field(
        default=None, description="Owner used when a reference names only a repository"
    )
    vcs_overrides: dict[str, VCSKind] = Field(
        default_factory=dict, description="URL prefix -> backend for new clones"
    )

    @field_validator("roots", mode="before")
    @classmethod
    def _coerce_roots(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return [value]
        return value

    @field_validator("roots")
    @classmethod
    def _expand_roots(cls, value: list[Path]) -> list[Path]:
        return [Path(os.path.abspath(root.expanduser())) for root in value]

    @property
    def primary_root(self) -> Path:
        """Root that receives new clones."""
        return self.roots[0]

    @classmethod
    def from_yaml(cls, path: Path) -> "HerdConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "HerdConfig":
        """Build configuration from defaults, YAML file and environment.

        Environment variables win over the file:
        REPOHERD_ROOT (os.pathsep separated), REPOHERD_HOST,
        REPOHERD_USER or GITHUB_USER.
        """
        if config_path is None:
            env_path = os.environ.get("REPOHERD_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        config_path = config_path.expanduser()

        data: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from {config_path}")

        env_roots = os.environ.get("REPOHERD_ROOT")
        if env_roots:
            data["roots"] = [root for root in env_roots.split(os.pathsep) if root]
        if os.environ.get("REPOHERD_HOST"):
            data["default_host"] = os.environ["REPOHERD_HOST"]
        user = os.environ.get("REPOHERD_USER") or os.environ.get("GITHUB_USER")
        if user:
            data["default_user"] = user

        return cls.model_validate(data)
