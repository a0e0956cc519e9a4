"""Shared test fixtures for pexels-cli.

Provides isolated config environments, output state management, a CLI
runner, and sample Pexels response bodies. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import pytest

from pexels_cli.output import reset_output

# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams and the
    test finishes, the cached references become stale. Resetting forces a
    fresh manager to be created on next use. The log handlers installed by
    the root callback hold the same stale stream and are dropped too.
    """
    yield
    reset_output()
    for name in ("pexels_cli", "httpx"):
        logger = logging.getLogger(name)
        logger.handlers = []
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path,
    clears the PEXELS_* environment variables and disables colour so that
    diagnostics are plain text.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr("pexels_cli.config._is_xdg_platform", lambda: True)

    for var in ["PEXELS_TOKEN", "PEXELS_API_KEY", "PEXELS_HOST"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner with separate stdout and stderr."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Sample response bodies
# ---------------------------------------------------------------------------

PHOTO: dict[str, Any] = {
    "id": 2014422,
    "width": 3024,
    "height": 3024,
    "url": "https://www.pexels.com/photo/brown-rocks-during-golden-hour-2014422/",
    "photographer": "Joey Farina",
    "photographer_url": "https://www.pexels.com/@joey",
    "photographer_id": 680589,
    "avg_color": "#978E82",
    "src": {
        "original": "https://images.pexels.com/photos/2014422/pexels-photo-2014422.jpeg",
        "large2x": "https://images.pexels.com/photos/2014422/large2x.jpeg",
        "large": "https://images.pexels.com/photos/2014422/large.jpeg",
        "medium": "https://images.pexels.com/photos/2014422/medium.jpeg",
        "small": "https://images.pexels.com/photos/2014422/small.jpeg",
        "portrait": "https://images.pexels.com/photos/2014422/portrait.jpeg",
        "landscape": "https://images.pexels.com/photos/2014422/landscape.jpeg",
        "tiny": "https://images.pexels.com/photos/2014422/tiny.jpeg",
    },
    "liked": False,
    "alt": "Brown Rocks During Golden Hour",
}

VIDEO: dict[str, Any] = {
    "id": 2499611,
    "width": 1080,
    "height": 1920,
    "duration": 22,
    "url": "https://www.pexels.com/video/2499611/",
    "image": "https://images.pexels.com/videos/2499611/free-video-2499611.jpg",
    "user": {"id": 680589, "name": "Joey Farina", "url": "https://www.pexels.com/@joey"},
    "video_files": [
        {"id": 125004, "quality": "hd", "width": 1080, "link": "https://player.vimeo.com/1.mp4"},
        {"id": 125005, "quality": "sd", "width": 540, "link": "https://player.vimeo.com/2.mp4"},
    ],
    "video_pictures": [
        {"id": 308178, "picture": "https://static-videos.pexels.com/0.jpg", "nr": 0},
    ],
}


@pytest.fixture
def photo() -> dict[str, Any]:
    """A single photo resource."""
    return copy.deepcopy(PHOTO)


@pytest.fixture
def video() -> dict[str, Any]:
    """A single video resource."""
    return copy.deepcopy(VIDEO)


@pytest.fixture
def photo_page() -> dict[str, Any]:
    """First page of a photo search with two results."""
    second = copy.deepcopy(PHOTO)
    second["id"] = 3573351
    second["alt"] = "Lighthouse"
    return {
        "page": 1,
        "per_page": 2,
        "photos": [copy.deepcopy(PHOTO), second],
        "total_results": 8000,
        "next_page": "https://api.pexels.com/v1/search/?page=2&per_page=2&query=nature",
    }


@pytest.fixture
def video_page() -> dict[str, Any]:
    """A page of popular videos."""
    return {
        "page": 1,
        "per_page": 1,
        "videos": [copy.deepcopy(VIDEO)],
        "total_results": 1,
        "url": "https://www.pexels.com/videos/",
    }
