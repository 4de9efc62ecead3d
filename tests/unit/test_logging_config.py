"""Unit tests for verbosity handling and request payload logging."""

import logging

import pytest

from visionhelpers.core.request_builder import dispatch
from visionhelpers.core.types import Feature, FeatureType
from visionhelpers.logging_config import (
    configure_logging,
    get_logger,
    get_verbosity_from_env,
    log_request_payload,
    payloads_enabled,
    redact_content,
    set_verbosity,
)

PAYLOAD = [
    {"image": {"content": b"\xff\xd8secret-bytes"}, "features": [{"type": FeatureType.FACE_DETECTION}]},
    {"image": {"source": {"gcs_image_uri": "gs://b/o.jpg"}}, "features": [{"type": 1}]},
]


@pytest.fixture(autouse=True)
def reset_verbosity():
    set_verbosity(0)
    yield
    set_verbosity(0)


@pytest.mark.unit
class TestVerbosity:
    @pytest.mark.parametrize(
        "level,expected_level,dumps",
        [
            (-3, logging.INFO, False),
            (0, logging.INFO, False),
            (1, logging.INFO, True),
            (2, logging.DEBUG, True),
            (9, logging.DEBUG, True),
        ],
    )
    def test_set_verbosity_clamps(self, level, expected_level, dumps):
        set_verbosity(level)
        assert logging.getLogger("visionhelpers").level == expected_level
        assert payloads_enabled() is dumps

    def test_handler_added_once(self):
        set_verbosity(1)
        set_verbosity(2)
        configure_logging(verbose_level=0)
        assert len(logging.getLogger("visionhelpers").handlers) == 1

    def test_quiet_disables_payloads(self):
        set_verbosity(2)
        configure_logging(verbose_level=2, quiet=True)
        assert logging.getLogger("visionhelpers").level == logging.WARNING
        assert payloads_enabled() is False

    def test_none_level_reads_environment(self, monkeypatch):
        monkeypatch.setenv("VISIONHELPERS_VERBOSITY", "1")
        configure_logging()
        assert payloads_enabled() is True

    @pytest.mark.parametrize("raw,expected", [("2", 2), (" 1 ", 1), ("3", 0), ("x", 0), ("", 0)])
    def test_env_parsing(self, monkeypatch, raw, expected):
        monkeypatch.setenv("VISIONHELPERS_VERBOSITY", raw)
        assert get_verbosity_from_env() == expected

    def test_get_logger_names(self):
        assert get_logger("core.registry").name == "visionhelpers.core.registry"
        assert get_logger("visionhelpers.cli").name == "visionhelpers.cli"
        assert get_logger("visionhelpers").name == "visionhelpers"


@pytest.mark.unit
class TestRedactContent:
    def test_bytes_replaced_with_size(self):
        redacted = redact_content(PAYLOAD)
        assert redacted[0]["image"] == {"content": "<content, 14 bytes>"}
        assert redacted[1] == PAYLOAD[1]

    def test_input_not_modified(self):
        redact_content(PAYLOAD)
        assert PAYLOAD[0]["image"]["content"] == b"\xff\xd8secret-bytes"


@pytest.mark.unit
class TestLogRequestPayload:
    def test_silent_at_default_verbosity(self, caplog):
        caplog.set_level(logging.INFO, logger="visionhelpers")
        assert log_request_payload(get_logger("test"), PAYLOAD) is False
        assert "payload" not in caplog.text

    def test_force_logs_redacted(self, caplog):
        caplog.set_level(logging.INFO, logger="visionhelpers")
        assert log_request_payload(get_logger("test"), PAYLOAD, force=True) is True
        assert "<content, 14 bytes>" in caplog.text
        assert "gs://b/o.jpg" in caplog.text
        assert "secret-bytes" not in caplog.text

    def test_verbosity_one_logs(self, caplog):
        set_verbosity(1)
        caplog.set_level(logging.INFO, logger="visionhelpers")
        assert log_request_payload(get_logger("test"), PAYLOAD) is True

    def test_dispatch_logs_payload_when_verbose(self, recording_client, caplog):
        set_verbosity(1)
        caplog.set_level(logging.INFO, logger="visionhelpers")
        dispatch(recording_client, ["http://example.com/face.jpg"], Feature(type=FeatureType.FACE_DETECTION))
        assert "payload (image content redacted)" in caplog.text
        assert "http://example.com/face.jpg" in caplog.text

    def test_dispatch_quiet_by_default(self, recording_client, caplog):
        caplog.set_level(logging.INFO, logger="visionhelpers")
        dispatch(recording_client, ["http://example.com/face.jpg"], Feature(type=FeatureType.FACE_DETECTION))
        assert "Dispatching batch_annotate_images feature=FACE_DETECTION images=1" in caplog.text
        assert "payload" not in caplog.text
