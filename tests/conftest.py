"""Shared pytest fixtures for Mosaic tests."""

import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import httpx
import pytest

# The global config (and the app's static mount) is built at import time, so
# point it at a throwaway assets directory before anything imports mosaic.
_SESSION_ASSETS = Path(tempfile.mkdtemp(prefix="mosaic-assets-"))
os.environ["MOSAIC_ASSETS_DIR"] = str(_SESSION_ASSETS)

from fastapi.testclient import TestClient  # noqa: E402

from mosaic.api import main as api_main  # noqa: E402
from mosaic.core.config import MosaicConfig  # noqa: E402
from mosaic.ui.surface import MemorySurface  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_SESSION_ASSETS, ignore_errors=True)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def assets_dir() -> Generator[Path, None, None]:
    """The directory the app lists and serves at ``/``, emptied around each test."""
    assets = api_main.ASSETS_DIR
    assets.mkdir(parents=True, exist_ok=True)
    for child in assets.iterdir():
        if child.is_dir():
            shutil.rmtree(child)
        else:
            child.unlink()
    yield assets
    for child in assets.iterdir():
        if child.is_dir():
            shutil.rmtree(child)
        else:
            child.unlink()


@pytest.fixture
def test_client(assets_dir: Path) -> Generator[TestClient, None, None]:
    """FastAPI TestClient over the real app with an empty assets directory."""
    with TestClient(api_main.app) as client:
        yield client


@pytest.fixture
def test_config(temp_dir: Path) -> MosaicConfig:
    """Create a test configuration with a temporary assets directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        MosaicConfig instance for testing
    """
    return MosaicConfig(
        _env_file=None,
        assets_dir=temp_dir / "public",
        server_port=8080,
    )


@pytest.fixture
def surface() -> MemorySurface:
    """Headless surface with a 10px row height and a 16px row gap."""
    return MemorySurface(grid_auto_rows="10px", grid_row_gap="16px")


@pytest.fixture
def make_client() -> Callable[[Callable], httpx.AsyncClient]:
    """Factory for an AsyncClient whose requests are answered by ``handler``.

    ``handler`` may be sync or async and may raise ``httpx`` transport
    errors to simulate network failures.
    """

    def factory(handler: Callable) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            base_url="http://testserver",
        )

    return factory


@pytest.fixture
def touch() -> Callable[..., None]:
    """Return a helper that creates empty files: ``touch(directory, *names)``."""

    def _touch(directory: Path, *names: str) -> None:
        for name in names:
            (directory / name).write_bytes(b"")

    return _touch
