"""Data models for repoherd."""

from repoherd.models.config import HerdConfig
from repoherd.models.options import CloneOptions, GetAction, GetOptions, GetResult
from repoherd.models.remote import RemoteReference

__all__ = [
    # Configuration
    "HerdConfig",
    # Operation models
    "CloneOptions",
    "GetOptions",
    "GetAction",
    "GetResult",
    # Remote
    "RemoteReference",
]
