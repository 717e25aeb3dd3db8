import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest
from pytest import FixtureRequest

from scratchdir.core import (
    ProviderRegistry,
    SessionDirectoryProvider,
    StandardDirectoryProvider,
)


@pytest.fixture
def invocation_context(request: FixtureRequest) -> str:
    return request.node.nodeid


@pytest.fixture
def temp_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the system temporary area at a fresh directory for this test."""
    root = tmp_path / "temp_root"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def missing_temp_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the system temporary area at a directory that does not exist."""
    root = tmp_path / "missing"
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def standard_provider(temp_root: Path) -> Iterator[StandardDirectoryProvider]:
    provider = StandardDirectoryProvider()
    yield provider
    provider.release()


@pytest.fixture
def session_provider(temp_root: Path) -> Iterator[SessionDirectoryProvider]:
    provider = SessionDirectoryProvider()
    yield provider
    provider.release()


@pytest.fixture
def registry() -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.register("standard", StandardDirectoryProvider)
    registry.register("session", SessionDirectoryProvider)
    return registry
