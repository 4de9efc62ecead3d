"""
Logging for visionhelpers.

Everything logs under the "visionhelpers" logger, which has no handler until
set_verbosity or configure_logging is called, so library users see nothing
unless they opt in.

Verbosity levels:
- 0 (default): INFO, one line per dispatched batch (feature and image count)
- 1: INFO + the outgoing request payload, with inline image bytes redacted
- 2: DEBUG + how each image reference was classified

The payload dump is the only log line that can carry request data, so it goes
through log_request_payload(), which never writes image bytes.
"""

import json
import logging
import os
from typing import Any

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER_NAME = "visionhelpers"
VERBOSITY_ENV = "VISIONHELPERS_VERBOSITY"

# verbosity -> (logger level, dump request payloads)
_LEVELS: dict[int, tuple[int, bool]] = {
    0: (logging.INFO, False),
    1: (logging.INFO, True),
    2: (logging.DEBUG, True),
}

_payloads_enabled: bool = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under visionhelpers (e.g. "core.registry" -> visionhelpers.core.registry)."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


def set_verbosity(level: int) -> None:
    """Set verbosity 0, 1 or 2; values outside that range are clamped."""
    global _payloads_enabled
    level_no, _payloads_enabled = _LEVELS[max(0, min(level, 2))]
    _root().setLevel(level_no)


def configure_logging(verbose_level: int | None = None, quiet: bool = False) -> None:
    """
    Configure logging for the CLI or an embedding application.

    quiet drops to WARNING and disables payload dumps. When verbose_level is
    None, VISIONHELPERS_VERBOSITY decides.
    """
    global _payloads_enabled
    if quiet:
        _root().setLevel(logging.WARNING)
        _payloads_enabled = False
        return
    set_verbosity(get_verbosity_from_env() if verbose_level is None else verbose_level)


def get_verbosity_from_env() -> int:
    """Read VISIONHELPERS_VERBOSITY; anything but 0, 1 or 2 counts as 0."""
    try:
        level = int(os.environ.get(VERBOSITY_ENV, "0").strip())
    except ValueError:
        return 0
    return level if level in _LEVELS else 0


def payloads_enabled() -> bool:
    """Return True if verbosity asks for request payload dumps."""
    return _payloads_enabled


def redact_content(obj: Any) -> Any:
    """Return a copy of a wire payload with inline image bytes replaced by their size."""
    if isinstance(obj, dict):
        return {k: redact_content(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [redact_content(v) for v in obj]
    if isinstance(obj, (bytes, bytearray)):
        return f"<content, {len(obj)} bytes>"
    return obj


def log_request_payload(
    logger: logging.Logger, requests: list[dict[str, Any]], force: bool = False
) -> bool:
    """
    Log the outgoing batch at INFO with image bytes redacted.

    Logs when force is set (Config.debug_requests) or verbosity is 1 or more.
    Returns True if a line was logged.
    """
    if not (force or _payloads_enabled):
        return False
    logger.info(
        "batch_annotate_images payload (image content redacted): %s",
        json.dumps(redact_content(requests), indent=2, default=str),
    )
    return True


__all__ = [
    "configure_logging",
    "get_logger",
    "get_verbosity_from_env",
    "log_request_payload",
    "payloads_enabled",
    "redact_content",
    "set_verbosity",
]
