"""
Pytest configuration and shared fixtures.

Every test starts from a default Config so VISIONHELPERS_* variables in the
developer's environment or .env cannot leak into request building.
"""

from pathlib import Path
from typing import Any

import pytest

from visionhelpers.core.config import Config, set_config

FACE_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00face-image-bytes"


class RecordingClient:
    """Stand-in for the generated client; records every batch_annotate_images call."""

    def __init__(self, response: Any = None) -> None:
        self.calls: list[tuple[list[dict[str, Any]], Any]] = []
        self.response = response if response is not None else {"responses": []}

    def batch_annotate_images(self, requests: list[dict[str, Any]], options: Any = None) -> Any:
        self.calls.append((requests, options))
        return self.response


@pytest.fixture(autouse=True)
def default_config():
    set_config(Config())
    yield
    set_config(Config())


@pytest.fixture
def face_path(tmp_path: Path) -> Path:
    path = tmp_path / "face.jpg"
    path.write_bytes(FACE_BYTES)
    return path


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def face_bytes() -> bytes:
    return FACE_BYTES
