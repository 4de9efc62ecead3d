"""
Client facade that puts the helper methods in front of a generated client.

The generated client (the "transport" here) owns credentials, channels and
retries. ImageAnnotatorClient only forwards batch_annotate_images to it and
adds the per-feature helpers on top.
"""

from dataclasses import replace
from typing import Any

from visionhelpers.core.config import AVAILABLE_VERSIONS, Config, get_config
from visionhelpers.core.registry import ImageAnnotatorHelpers
from visionhelpers.core.request_builder import BatchAnnotateClient
from visionhelpers.logging_config import get_logger

logger = get_logger(__name__)


class ImageAnnotatorClient(ImageAnnotatorHelpers):
    """Image annotator with face_detection, label_detection, ... helpers."""

    def __init__(self, transport: BatchAnnotateClient, config: Config | None = None) -> None:
        self._transport = transport
        self.config = config or get_config()

    @property
    def transport(self) -> BatchAnnotateClient:
        return self._transport

    @property
    def version(self) -> str:
        return self.config.api_version

    def batch_annotate_images(self, requests: list[dict[str, Any]], options: Any = None) -> Any:
        """Forward the batch to the generated client; its response and errors pass through."""
        return self._transport.batch_annotate_images(requests, options)

    def __repr__(self) -> str:
        transport_name = type(self._transport).__name__
        return f"ImageAnnotatorClient(version={self.version!r}, transport={transport_name})"


def new_client(
    transport: BatchAnnotateClient,
    version: str | None = None,
    config: Config | None = None,
) -> ImageAnnotatorClient:
    """
    Create an ImageAnnotatorClient for an API version.

    Args:
        transport: Generated client exposing batch_annotate_images(requests, options)
        version: API version (e.g. "v1"); defaults to config.api_version
        config: Optional config; if None, uses get_config()

    Returns:
        ImageAnnotatorClient bound to transport

    Raises:
        UnsupportedVersionError: If version is not one of AVAILABLE_VERSIONS
    """
    cfg = config or get_config()
    if version is not None:
        cfg = replace(cfg, api_version=str(version).strip().lower())
    cfg.validate()
    logger.debug("Creating image annotator client version=%s", cfg.api_version)
    return ImageAnnotatorClient(transport, config=cfg)


__all__ = ["AVAILABLE_VERSIONS", "ImageAnnotatorClient", "new_client"]
