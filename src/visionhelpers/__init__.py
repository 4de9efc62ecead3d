"""
visionhelpers - feature helpers for an image annotation RPC client

Adds one method per detection feature (face_detection, label_detection,
text_detection, ...) on top of a generated client's batch_annotate_images,
and turns file paths, binary file handles, HTTP(S) URLs and gs:// URLs into
the request shape that RPC expects.

Library usage:
- Wrap a generated client: client = new_client(generated_client), then
  client.face_detection(image="face.jpg").
- Or attach the helpers to an existing client with add_helper_methods(client).
- Configuration can be passed per client (new_client(..., config=my_config))
  or via the shared config: use get_config() / set_config().
- Logging: control verbosity with set_verbosity(0|1|2) or configure_logging(verbose_level, quiet);
  VISIONHELPERS_VERBOSITY env (0/1/2) is read when the CLI runs or when logging is configured.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("visionhelpers")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source in development)
    __version__ = "0.0.0.dev"

from visionhelpers.core.client import ImageAnnotatorClient, new_client
from visionhelpers.core.config import (
    AVAILABLE_VERSIONS,
    DEFAULT_API_VERSION,
    Config,
    get_config,
    set_config,
)
from visionhelpers.core.registry import (
    FeatureMethodRegistry,
    ImageAnnotatorHelpers,
    add_helper_methods,
    get_registry,
    method_name_for,
)
from visionhelpers.core.request_builder import build_batch, classify, dispatch
from visionhelpers.core.types import (
    AnnotateImageRequest,
    Feature,
    FeatureType,
    Image,
    ImageSource,
)
from visionhelpers.logging_config import configure_logging, set_verbosity
from visionhelpers.utils.exceptions import (
    ConfigurationError,
    ImageProcessingError,
    InvalidImageReference,
    UnsupportedVersionError,
    ValidationError,
    VisionHelpersError,
)

__all__ = [
    "AVAILABLE_VERSIONS",
    "AnnotateImageRequest",
    "Config",
    "ConfigurationError",
    "DEFAULT_API_VERSION",
    "Feature",
    "FeatureMethodRegistry",
    "FeatureType",
    "Image",
    "ImageAnnotatorClient",
    "ImageAnnotatorHelpers",
    "ImageProcessingError",
    "ImageSource",
    "InvalidImageReference",
    "UnsupportedVersionError",
    "ValidationError",
    "VisionHelpersError",
    "add_helper_methods",
    "build_batch",
    "classify",
    "configure_logging",
    "dispatch",
    "get_config",
    "get_registry",
    "method_name_for",
    "new_client",
    "set_config",
    "set_verbosity",
]
