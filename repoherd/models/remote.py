"""Remote repository reference model."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

from repoherd.vcs.base import VCSKind


class RemoteReference(BaseModel):
    """Resolved, absolute location of a remote repository."""

    url: str = Field(..., description="Absolute URL with scheme, host and path")
    vcs: VCSKind | None = Field(
        default=None, description="Backend named explicitly by the reference"
    )

    model_config = {"frozen": True}

    @field_validator("url")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        parts = urlsplit(value)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"URL must have a scheme and host: {value}")
        try:
            parts.port
        except ValueError as e:
            raise ValueError(f"URL has an invalid port: {value}") from e
        return value

    @property
    def host(self) -> str:
        """Host as written, with any port, without userinfo."""
        return urlsplit(self.url).netloc.rpartition("@")[2]

    @property
    def path_segments(self) -> list[str]:
        """Non-empty path segments; query and fragment are ignored."""
        return [segment for segment in urlsplit(self.url).path.split("/") if segment]

    def to_ssh(self) -> RemoteReference:
        """SSH form of the same host and path (ssh://git@host/owner/repo)."""
        parts = urlsplit(self.url)
        hostname = self.host.rsplit(":", 1)[0] if parts.port is not None else self.host
        path = "/".join(self.path_segments)
        return RemoteReference(url=f"ssh://git@{hostname}/{path}", vcs=self.vcs)

    def __str__(self) -> str:
        return self.url
