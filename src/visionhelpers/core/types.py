"""
Request types for the batch_annotate_images RPC.

These mirror the message shapes of the image annotation schema closely enough
to build requests locally. They are serialized to plain mappings with
to_wire() before being handed to the generated client, which accepts mappings
in place of its own message classes.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class FeatureType(IntEnum):
    """Feature-type enumeration of the annotation schema (wire values)."""

    TYPE_UNSPECIFIED = 0
    FACE_DETECTION = 1
    LANDMARK_DETECTION = 2
    LOGO_DETECTION = 3
    LABEL_DETECTION = 4
    TEXT_DETECTION = 5
    DOCUMENT_TEXT_DETECTION = 11
    SAFE_SEARCH_DETECTION = 6
    IMAGE_PROPERTIES = 7
    CROP_HINTS = 9
    WEB_DETECTION = 10
    OBJECT_LOCALIZATION = 19


class Feature(BaseModel):
    """A requested analysis: the feature type and an optional result cap."""

    model_config = {"frozen": True}

    type: FeatureType
    max_results: int | None = Field(default=None, gt=0, strict=True)


class ImageSource(BaseModel):
    """Remote image locator. Exactly one of image_uri or gcs_image_uri is set."""

    model_config = {"frozen": True}

    image_uri: str | None = None
    gcs_image_uri: str | None = None

    @model_validator(mode="after")
    def _one_locator(self) -> "ImageSource":
        if (self.image_uri is None) == (self.gcs_image_uri is None):
            raise ValueError("exactly one of image_uri or gcs_image_uri must be set")
        return self


class Image(BaseModel):
    """Image payload of a request: inline content or a remote source, never both."""

    model_config = {"frozen": True}

    content: bytes | None = None
    source: ImageSource | None = None

    @model_validator(mode="after")
    def _one_variant(self) -> "Image":
        if (self.content is None) == (self.source is None):
            raise ValueError("exactly one of content or source must be set")
        return self

    @classmethod
    def from_content(cls, content: bytes) -> "Image":
        return cls(content=content)

    @classmethod
    def from_uri(cls, uri: str) -> "Image":
        return cls(source=ImageSource(image_uri=uri))

    @classmethod
    def from_gcs_uri(cls, uri: str) -> "Image":
        return cls(source=ImageSource(gcs_image_uri=uri))


class AnnotateImageRequest(BaseModel):
    """One image paired with the features requested for it."""

    image: Image
    features: list[Feature] = Field(..., min_length=1)

    def to_wire(self) -> dict[str, Any]:
        """Return the mapping form accepted by batch_annotate_images."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "AnnotateImageRequest",
    "Feature",
    "FeatureType",
    "Image",
    "ImageSource",
]
