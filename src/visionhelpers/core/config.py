"""
Configuration management for visionhelpers.

Only settings that affect how requests are built and logged live here.
Credentials, endpoints and retry policy belong to the generated RPC client.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from visionhelpers.logging_config import get_logger
from visionhelpers.utils.exceptions import ConfigurationError, UnsupportedVersionError

logger = get_logger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_VERSION = "v1"
AVAILABLE_VERSIONS = ("v1",)


@dataclass
class Config:
    """Configuration for the visionhelpers request layer."""

    # API surface the helpers are generated for
    api_version: str = DEFAULT_API_VERSION

    # Log the outgoing batch (inline content truncated) before each dispatch
    debug_requests: bool = False

    # Upper bound for inline image content in bytes; 0 disables the check
    max_content_bytes: int = 0

    _validated: bool = field(default=False, repr=False)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create a Config instance from environment variables.

        Environment variables:
            VISIONHELPERS_API_VERSION: API version (default v1)
            VISIONHELPERS_DEBUG_REQUESTS: 1/true/yes to log request payloads
            VISIONHELPERS_MAX_CONTENT_BYTES: Optional inline content limit (default 0, unlimited)

        Returns:
            Config instance populated from environment

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """

        def _int_env(name: str, default: int) -> int:
            val = os.getenv(name)
            if val is None or val.strip() == "":
                return default
            try:
                return int(val)
            except ValueError as e:
                raise ConfigurationError(f"{name} must be an integer, got {val!r}.") from e

        debug_requests = os.getenv("VISIONHELPERS_DEBUG_REQUESTS", "").strip().lower() in (
            "1",
            "true",
            "yes",
        )

        return cls(
            api_version=os.getenv("VISIONHELPERS_API_VERSION", DEFAULT_API_VERSION).strip().lower()
            or DEFAULT_API_VERSION,
            debug_requests=debug_requests,
            max_content_bytes=_int_env("VISIONHELPERS_MAX_CONTENT_BYTES", 0),
        )

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            UnsupportedVersionError: If api_version is not one of AVAILABLE_VERSIONS
            ConfigurationError: If max_content_bytes is negative
        """
        logger.debug("Validating config api_version=%s", self.api_version)

        if self.api_version not in AVAILABLE_VERSIONS:
            raise UnsupportedVersionError(
                f"Unsupported API version: {self.api_version!r}. "
                f"Must be one of: {', '.join(AVAILABLE_VERSIONS)}.",
                version=self.api_version,
            )
        if self.max_content_bytes < 0:
            raise ConfigurationError(
                f"max_content_bytes must not be negative, got {self.max_content_bytes}."
            )

        self._validated = True

    def is_valid(self) -> bool:
        """Return True if validate() has been called successfully."""
        return self._validated


# Global configuration instance
_global_config: Config | None = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        The global Config instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config.from_env()
    return _global_config


def set_config(config: Config) -> None:
    """
    Set the global configuration instance.

    Args:
        config: The Config instance to use globally
    """
    global _global_config
    _global_config = config
