"""
Registry of per-feature helper methods.

Maps helper method names (e.g. "face_detection") to the feature type they
request. The table is built once from the FeatureType enumeration; the
unspecified sentinel never gets a method. ImageAnnotatorHelpers carries one
generated method per entry, and add_helper_methods attaches the same methods
to an existing client instance.
"""

from __future__ import annotations

import os
import types
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import pydantic

from visionhelpers.core.config import Config
from visionhelpers.core.request_builder import (
    ImageReference,
    ResponseCallback,
    build_requests,
    dispatch,
    send,
)
from visionhelpers.core.types import Feature, FeatureType
from visionhelpers.logging_config import get_logger
from visionhelpers.utils.exceptions import ValidationError

logger = get_logger(__name__)

UNSPECIFIED_FEATURE = FeatureType.TYPE_UNSPECIFIED
DETECTION_SUFFIX = "detection"


def method_name_for(kind: FeatureType) -> str:
    """Return the helper method name for a feature type.

    The lower-cased type name, with "_detection" appended unless the name
    already mentions detection (CROP_HINTS -> crop_hints_detection).
    """
    name = kind.name.lower()
    if DETECTION_SUFFIX not in name:
        name += "_" + DETECTION_SUFFIX
    return name


@dataclass(frozen=True)
class FeatureMethod:
    """One row of the helper table: the feature type and its method name."""

    kind: FeatureType
    method_name: str


class FeatureMethodRegistry:
    """Registry mapping helper method name to the FeatureMethod it stands for."""

    def __init__(self) -> None:
        self._methods: dict[str, FeatureMethod] = {}

    def register(self, kind: FeatureType) -> FeatureMethod:
        """Register a feature type and return its table row. Idempotent for the same type."""
        if kind == UNSPECIFIED_FEATURE:
            raise ValueError(f"{kind.name} cannot be registered as a helper method")
        method = FeatureMethod(kind=kind, method_name=method_name_for(kind))
        self._methods[method.method_name] = method
        return method

    def get(self, method_name: str) -> FeatureMethod | None:
        """Return the row for method_name, or None if unknown."""
        return self._methods.get(method_name)

    def for_kind(self, kind: FeatureType) -> FeatureMethod | None:
        """Return the row for a feature type, or None if it is not registered."""
        for method in self._methods.values():
            if method.kind == kind:
                return method
        return None

    def method_names(self) -> list[str]:
        """Return registered method names in registration order."""
        return list(self._methods.keys())

    def kinds(self) -> list[FeatureType]:
        return [m.kind for m in self._methods.values()]

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._methods

    def __iter__(self) -> Iterator[FeatureMethod]:
        return iter(list(self._methods.values()))

    def __len__(self) -> int:
        return len(self._methods)


def build_registry(kinds: Iterable[FeatureType] = FeatureType) -> FeatureMethodRegistry:
    """Build a registry with one entry per feature type, skipping TYPE_UNSPECIFIED."""
    reg = FeatureMethodRegistry()
    for kind in kinds:
        if kind == UNSPECIFIED_FEATURE:
            continue
        reg.register(kind)
    return reg


_registry: FeatureMethodRegistry | None = None


def get_registry() -> FeatureMethodRegistry:
    """Return the global helper registry. Built from FeatureType on first call."""
    global _registry
    if _registry is None:
        _registry = build_registry()
    return _registry


def build_feature(kind: FeatureType, max_results: int | None = None) -> Feature:
    """
    Build the feature for a request.

    Raises:
        ValidationError: If max_results is given and is not a positive integer
    """
    try:
        return Feature(type=kind, max_results=max_results)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"max_results must be a positive integer, got {max_results!r}.",
            field="max_results",
        ) from e


def _coerce_feature(value: Feature | FeatureType | int) -> Feature:
    """Accept a Feature or a feature type value; the unspecified sentinel is never requestable."""
    if isinstance(value, Feature):
        feature = value
    else:
        try:
            feature = build_feature(FeatureType(value))
        except ValueError as e:
            raise ValidationError(
                f"Unknown feature type: {value!r}.", field="features"
            ) from e
    if feature.type == UNSPECIFIED_FEATURE:
        raise ValidationError(
            f"{UNSPECIFIED_FEATURE.name} cannot be requested.", field="features"
        )
    return feature


def _collect_images(
    images: Sequence[ImageReference] | ImageReference,
    image: ImageReference | None,
) -> list[ImageReference]:
    """Copy images into a new list and append image last, leaving the caller's list intact."""
    if isinstance(images, (str, os.PathLike)) or callable(getattr(images, "read", None)):
        collected: list[ImageReference] = [images]  # type: ignore[list-item]
    else:
        collected = list(images)  # type: ignore[arg-type]
    if image is not None:
        collected.append(image)
    return collected


def _helper_config(client: object) -> Config | None:
    cfg = getattr(client, "config", None)
    return cfg if isinstance(cfg, Config) else None


def make_feature_method(method: FeatureMethod) -> Callable[..., Any]:
    """Return the unbound helper function for one table row."""
    kind = method.kind

    def helper(
        self: Any,
        images: Sequence[ImageReference] = (),
        image: ImageReference | None = None,
        max_results: int | None = None,
        options: Any = None,
        callback: ResponseCallback | None = None,
    ) -> Any:
        feature = build_feature(kind, max_results)
        batch = _collect_images(images, image)
        return dispatch(
            self,
            batch,
            feature,
            options=options,
            callback=callback,
            config=_helper_config(self),
        )

    helper.__name__ = method.method_name
    helper.__qualname__ = f"ImageAnnotatorHelpers.{method.method_name}"
    helper.__doc__ = (
        f"Run {kind.name} on each image and return the batch_annotate_images response.\n\n"
        "Args:\n"
        "    images: Image references (paths, binary handles, HTTP(S) or gs:// URLs)\n"
        "    image: Single image reference, appended after images\n"
        "    max_results: Optional cap on results per image\n"
        "    options: Transport options passed through to batch_annotate_images\n"
        "    callback: Optional handler called with the response\n\n"
        "Raises:\n"
        "    InvalidImageReference: If any reference is invalid; nothing is sent\n"
    )
    return helper


class ImageAnnotatorHelpers:
    """Mixin adding one helper method per feature type.

    The host class must provide batch_annotate_images(requests, options).
    A Config found on self.config is used for request building; otherwise
    the global config applies.
    """

    def annotate(
        self,
        images: Sequence[ImageReference] = (),
        image: ImageReference | None = None,
        features: Sequence[Feature | FeatureType] = (),
        options: Any = None,
        callback: ResponseCallback | None = None,
    ) -> Any:
        """Request several features for every image in one batch."""
        feature_list = [_coerce_feature(f) for f in features]
        if not feature_list:
            raise ValidationError("At least one feature is required.", field="features")
        cfg = _helper_config(self)
        requests = build_requests(_collect_images(images, image), feature_list, config=cfg)
        logger.info(
            "Dispatching batch_annotate_images features=%s images=%d",
            ",".join(f.type.name for f in feature_list),
            len(requests),
        )
        return send(self, requests, options=options, callback=callback, config=cfg)


for _method in get_registry():
    setattr(ImageAnnotatorHelpers, _method.method_name, make_feature_method(_method))
del _method


def add_helper_methods(client: Any) -> Any:
    """
    Attach every helper method to an existing client instance.

    The client must expose batch_annotate_images(requests, options). Methods
    are bound to the instance, so other instances of the same class are not
    affected.

    Returns:
        The same client, for chaining
    """
    for method in get_registry():
        setattr(client, method.method_name, types.MethodType(make_feature_method(method), client))
    logger.debug("Attached %d helper methods to %s", len(get_registry()), type(client).__name__)
    return client


__all__ = [
    "FeatureMethod",
    "FeatureMethodRegistry",
    "ImageAnnotatorHelpers",
    "add_helper_methods",
    "build_feature",
    "build_registry",
    "get_registry",
    "make_feature_method",
    "method_name_for",
]
