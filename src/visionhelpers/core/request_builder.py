"""
Image reference normalization and batch request construction.

Every helper method funnels through this module: each caller-supplied image
reference is classified into inline content or a remote source, paired with
the requested features, and the finished batch is handed to the client's
batch_annotate_images method. Classification of the whole batch completes
before anything is sent, so a bad reference never results in a partial batch.
"""

from __future__ import annotations

import os
import re
import time
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any, BinaryIO, Protocol, Union
from urllib.parse import urlsplit

from visionhelpers.core.config import Config, get_config
from visionhelpers.core.types import AnnotateImageRequest, Feature, Image
from visionhelpers.logging_config import get_logger, log_request_payload
from visionhelpers.utils.exceptions import (
    ImageProcessingError,
    InvalidImageReference,
    ValidationError,
)

logger = get_logger(__name__)

ImageReference = Union[str, os.PathLike, BinaryIO]
ResponseCallback = Callable[[Any], Any]

GCS_SCHEME = "gs"

# Absolute URI: RFC 3986 scheme, then a non-empty remainder without whitespace.
# Single-letter schemes are excluded so Windows drive paths never match.
_URI_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]+:\S+$")

_REPR_LIMIT = 80


class BatchAnnotateClient(Protocol):
    """Anything exposing the generated client's batch_annotate_images RPC."""

    def batch_annotate_images(self, requests: list[dict[str, Any]], options: Any = None) -> Any:
        """Send the batch and return the response. Errors propagate to the caller."""
        ...


def _describe(ref: object) -> str:
    """Short repr of a reference for error messages and logs."""
    text = repr(ref)
    if len(text) > _REPR_LIMIT:
        text = text[: _REPR_LIMIT - 3] + "..."
    return text


def is_uri(value: str) -> bool:
    """Return True if value is a syntactically valid absolute URI."""
    return bool(_URI_RE.match(value))


def _is_local_file(ref: object) -> bool:
    if not isinstance(ref, (str, os.PathLike)):
        return False
    try:
        return Path(ref).is_file()
    except (OSError, ValueError):
        return False


def _is_binary_handle(ref: object) -> bool:
    return not isinstance(ref, (str, bytes, bytearray, os.PathLike)) and callable(
        getattr(ref, "read", None)
    )


def _read_file(path: Path) -> bytes:
    try:
        with path.open("rb") as f:
            return f.read()
    except OSError as e:
        raise ImageProcessingError(
            f"Failed to read image file: {str(e)}", image_path=str(path)
        ) from e


def _read_handle(handle: BinaryIO) -> bytes:
    name = str(getattr(handle, "name", ""))
    try:
        data = handle.read()
    except UnicodeDecodeError as e:
        raise InvalidImageReference(
            "Image file handles must be opened in binary mode ('rb').",
            reference=_describe(handle),
        ) from e
    except OSError as e:
        raise ImageProcessingError(f"Failed to read image handle: {str(e)}", image_path=name) from e
    if isinstance(data, bytearray):
        data = bytes(data)
    if not isinstance(data, bytes):
        raise InvalidImageReference(
            "Image file handles must be opened in binary mode ('rb').",
            reference=_describe(handle),
        )
    return data


def classify(ref: ImageReference) -> Image:
    """
    Classify one image reference into a request image payload.

    Precedence: an existing local file wins over URI parsing, so a relative
    path that happens to look like a URI is still read from disk.

    Args:
        ref: File path (str or PathLike), open binary handle, HTTP(S) URL, or gs:// URL

    Returns:
        Image with inline content for files and handles, or a source for URIs

    Raises:
        InvalidImageReference: If ref is not an existing file, a handle, or a URI
        ImageProcessingError: If an existing file or handle cannot be read
    """
    if _is_local_file(ref):
        path = Path(ref)  # type: ignore[arg-type]
        logger.debug("Classified image reference as local file path=%s", path)
        return Image.from_content(_read_file(path))

    if _is_binary_handle(ref):
        logger.debug("Classified image reference as file handle name=%s", getattr(ref, "name", ""))
        return Image.from_content(_read_handle(ref))  # type: ignore[arg-type]

    if isinstance(ref, str) and is_uri(ref):
        if urlsplit(ref).scheme.lower() == GCS_SCHEME:
            logger.debug("Classified image reference as gcs uri=%s", ref)
            return Image.from_gcs_uri(ref)
        logger.debug("Classified image reference as image uri=%s", ref)
        return Image.from_uri(ref)

    raise InvalidImageReference(
        "Image must be a filepath, file, url, or Google Cloud Storage url "
        f"(got {_describe(ref)}).",
        reference=_describe(ref),
    )


def _check_content_size(image: Image, index: int, max_content_bytes: int) -> None:
    if max_content_bytes <= 0 or image.content is None:
        return
    size = len(image.content)
    if size > max_content_bytes:
        raise ValidationError(
            f"Image {index} is {size} bytes, above the inline limit of {max_content_bytes} bytes.",
            field="content",
        )


def build_requests(
    images: Iterable[ImageReference],
    features: Sequence[Feature],
    config: Config | None = None,
) -> list[AnnotateImageRequest]:
    """
    Build one request per image reference, each carrying all of features.

    Order follows the input; nothing is deduplicated.

    Raises:
        InvalidImageReference: If any reference cannot be classified
        ValidationError: If inline content exceeds config.max_content_bytes
    """
    cfg = config or get_config()
    feature_list = list(features)
    requests = []
    for index, ref in enumerate(images):
        image = classify(ref)
        _check_content_size(image, index, cfg.max_content_bytes)
        requests.append(AnnotateImageRequest(image=image, features=feature_list))
    return requests


def build_batch(
    images: Iterable[ImageReference],
    feature: Feature,
    config: Config | None = None,
) -> list[AnnotateImageRequest]:
    """Build the request batch for a single feature, one request per image in input order."""
    return build_requests(images, [feature], config=config)


def send(
    client: BatchAnnotateClient,
    requests: Sequence[AnnotateImageRequest],
    options: Any = None,
    callback: ResponseCallback | None = None,
    config: Config | None = None,
) -> Any:
    """
    Serialize a built batch and call client.batch_annotate_images.

    The response is returned verbatim; callback, when given, is called with it
    first. No retry or error translation happens here.
    """
    cfg = config or get_config()
    wire = [r.to_wire() for r in requests]
    log_request_payload(logger, wire, force=cfg.debug_requests)
    start_time = time.time()
    response = client.batch_annotate_images(wire, options)
    logger.debug("batch_annotate_images returned in %.2fs", time.time() - start_time)
    if callback is not None:
        callback(response)
    return response


def dispatch(
    client: BatchAnnotateClient,
    images: Iterable[ImageReference],
    feature: Feature,
    options: Any = None,
    callback: ResponseCallback | None = None,
    config: Config | None = None,
) -> Any:
    """
    Build the batch for one feature and send it through the client.

    Args:
        client: Object exposing batch_annotate_images(requests, options)
        images: Image references, in the order the requests should be sent
        feature: Feature applied to every image
        options: Transport options passed through untouched
        callback: Optional response handler, called with the response
        config: Optional config; if None, uses get_config()

    Returns:
        Whatever batch_annotate_images returned

    Raises:
        InvalidImageReference: If any reference is invalid; nothing is sent
    """
    requests = build_batch(images, feature, config=config)
    logger.info(
        "Dispatching batch_annotate_images feature=%s images=%d",
        feature.type.name,
        len(requests),
    )
    return send(client, requests, options=options, callback=callback, config=config)


__all__ = [
    "BatchAnnotateClient",
    "ImageReference",
    "ResponseCallback",
    "build_batch",
    "build_requests",
    "classify",
    "dispatch",
    "is_uri",
    "send",
]
