"""
Custom exceptions for visionhelpers.

This module defines all custom exceptions raised by the helper layer. Errors from
the underlying RPC client (authentication, transport, server-side failures) are
never wrapped and reach the caller unchanged.
"""


class VisionHelpersError(Exception):
    """Base exception for all visionhelpers errors."""

    pass


class ValidationError(VisionHelpersError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "") -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Name of the field that failed validation (optional)
        """
        self.field = field
        super().__init__(message)


class InvalidImageReference(ValidationError, TypeError):
    """Raised when an image reference is not a file, a binary handle, or a URI.

    Also a TypeError, which is what callers of the older helpers caught.
    """

    def __init__(self, message: str, reference: str = "") -> None:
        """
        Initialize invalid image reference error.

        Args:
            message: Error message
            reference: Short description of the offending value
        """
        self.reference = reference
        super().__init__(message, field="image")


class ImageProcessingError(VisionHelpersError):
    """Raised when an image file or handle exists but cannot be read."""

    def __init__(self, message: str, image_path: str = "") -> None:
        """
        Initialize image processing error.

        Args:
            message: Error message
            image_path: Path to the image that caused the error
        """
        self.image_path = image_path
        super().__init__(message)


class ConfigurationError(VisionHelpersError):
    """Raised when there is a configuration problem."""

    pass


class UnsupportedVersionError(ConfigurationError):
    """Raised when a client is requested for an API version that is not available."""

    def __init__(self, message: str, version: str = "") -> None:
        self.version = version
        super().__init__(message)
