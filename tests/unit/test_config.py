"""Unit tests for Config and the global config accessors."""

import pytest

from visionhelpers.core.config import (
    AVAILABLE_VERSIONS,
    DEFAULT_API_VERSION,
    Config,
    get_config,
    set_config,
)
from visionhelpers.utils.exceptions import ConfigurationError, UnsupportedVersionError


@pytest.mark.unit
class TestConfigDefaults:
    def test_defaults(self):
        config = Config()
        assert config.api_version == DEFAULT_API_VERSION
        assert config.debug_requests is False
        assert config.max_content_bytes == 0
        assert config.is_valid() is False

    def test_default_version_available(self):
        assert DEFAULT_API_VERSION in AVAILABLE_VERSIONS


@pytest.mark.unit
class TestConfigFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("VISIONHELPERS_API_VERSION", "V1")
        monkeypatch.setenv("VISIONHELPERS_DEBUG_REQUESTS", "true")
        monkeypatch.setenv("VISIONHELPERS_MAX_CONTENT_BYTES", "1024")
        config = Config.from_env()
        assert config.api_version == "v1"
        assert config.debug_requests is True
        assert config.max_content_bytes == 1024

    def test_missing_values_use_defaults(self, monkeypatch):
        for name in (
            "VISIONHELPERS_API_VERSION",
            "VISIONHELPERS_DEBUG_REQUESTS",
            "VISIONHELPERS_MAX_CONTENT_BYTES",
        ):
            monkeypatch.delenv(name, raising=False)
        config = Config.from_env()
        assert config.api_version == DEFAULT_API_VERSION
        assert config.debug_requests is False
        assert config.max_content_bytes == 0

    def test_debug_requests_falsy_strings(self, monkeypatch):
        monkeypatch.setenv("VISIONHELPERS_DEBUG_REQUESTS", "no")
        assert Config.from_env().debug_requests is False

    def test_non_integer_content_limit_raises(self, monkeypatch):
        monkeypatch.setenv("VISIONHELPERS_MAX_CONTENT_BYTES", "lots")
        with pytest.raises(ConfigurationError, match="VISIONHELPERS_MAX_CONTENT_BYTES"):
            Config.from_env()


@pytest.mark.unit
class TestConfigValidate:
    def test_valid_config(self):
        config = Config()
        config.validate()
        assert config.is_valid() is True

    def test_unknown_version_raises(self):
        config = Config(api_version="v7")
        with pytest.raises(UnsupportedVersionError) as exc_info:
            config.validate()
        assert exc_info.value.version == "v7"
        assert config.is_valid() is False

    def test_negative_content_limit_raises(self):
        with pytest.raises(ConfigurationError, match="max_content_bytes"):
            Config(max_content_bytes=-1).validate()


@pytest.mark.unit
class TestGlobalConfig:
    def test_set_then_get_returns_same_instance(self):
        config = Config(debug_requests=True)
        set_config(config)
        assert get_config() is config
