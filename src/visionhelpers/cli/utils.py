"""
Utility functions for the CLI.

Exit code constants and the JSON rendering of a request batch.
"""

import base64
from enum import Enum
from typing import Any

from visionhelpers.logging_config import redact_content

EXIT_SUCCESS = 0
EXIT_UNEXPECTED = 1
EXIT_VALIDATION_OR_CONFIG = 2


def batch_to_json(wire: list[dict[str, Any]], truncate: bool = False) -> Any:
    """Return a JSON-safe copy of a wire batch: content as base64 (or a size placeholder), enums by name."""
    if truncate:
        wire = redact_content(wire)
    return _jsonable(wire)


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, Enum):
        return obj.name
    return obj


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_UNEXPECTED",
    "EXIT_VALIDATION_OR_CONFIG",
    "batch_to_json",
]
