"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from repoherd.models.config import HerdConfig
from tests.fakes import FakeBackend, FakeRunner


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_backend() -> Callable[..., FakeBackend]:
    """Factory for recording backends: ``fake_backend(VCSKind.MERCURIAL, error=...)``."""
    return FakeBackend


@pytest.fixture
def local_dir(temp_dir: Path) -> Path:
    return temp_dir / "repo"


@pytest.fixture
def root_dir(temp_dir: Path) -> Path:
    root = temp_dir / "root"
    root.mkdir()
    return root


@pytest.fixture
def herd_config(root_dir: Path) -> HerdConfig:
    """Configuration with a single root inside the temp directory."""
    return HerdConfig(roots=[root_dir], default_host="github.com", default_user="motemen")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    """Keep the user's environment and config file out of config loading."""
    for name in ("REPOHERD_ROOT", "REPOHERD_HOST", "REPOHERD_USER", "GITHUB_USER"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("REPOHERD_CONFIG", str(temp_dir / "missing.yaml"))


def pytest_configure(config):
    config.addinivalue_line("markers", "mock: tests using a recording command runner")
