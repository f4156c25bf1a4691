"""Exception classes raised while resolving, cloning and updating repositories."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class RepoHerdError(Exception):
    """Base exception for repoherd operations."""

    pass


class UnsupportedVCSError(RepoHerdError):
    """Raised when a backend cannot perform an operation or honor a modifier."""

    def __init__(self, backend: str, operation: str, reason: str) -> None:
        self.backend = backend
        self.operation = operation
        self.reason = reason
        super().__init__(f"{backend}: cannot {operation}: {reason}")


class UnresolvedReferenceError(RepoHerdError):
    """Raised when a reference cannot be turned into a remote URL."""

    def __init__(self, reference: str, reason: str) -> None:
        self.reference = reference
        self.reason = reason
        super().__init__(f"Cannot resolve {reference!r}: {reason}")


class ExternalCommandFailedError(RepoHerdError):
    """Raised when a VCS command exits with a non-zero status."""

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int,
        *,
        cwd: Path | None = None,
        backend: str | None = None,
        stderr: str = "",
    ) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.cwd = cwd
        self.backend = backend
        self.stderr = stderr

        message = f"Command {' '.join(self.cmd)!r} exited with status {returncode}"
        if backend:
            message = f"{backend}: {message}"
        if cwd is not None:
            message += f" (in {cwd})"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class AmbiguousLocalPathError(RepoHerdError):
    """Raised when the configured roots cannot yield a unique local path."""

    def __init__(self, reason: str, roots: Sequence[Path] = ()) -> None:
        self.reason = reason
        self.roots = list(roots)
        super().__init__(f"{reason} (roots: {', '.join(str(r) for r in self.roots) or 'none'})")


class LocalDirectoryError(RepoHerdError):
    """Raised when a backend cannot create the directory it clones into."""

    def __init__(self, backend: str, operation: str, path: Path, reason: str) -> None:
        self.backend = backend
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(f"{backend}: cannot {operation}: cannot create {path}: {reason}")
