#!/usr/bin/env python3
"""
Tests for environment-driven configuration (artmon_common.config).
"""

import pytest
from pydantic import ValidationError

from artmon_common.config import ArtMonConfig
from artmon_common.constants import DEFAULT_RECV_BUFFER_SIZE, DEFAULT_SOCKET_TIMEOUT
from artmon_common.exceptions import ArtMonError, DecodeError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("HOST", "PORT", "SOCKET_TIMEOUT", "RECV_BUFFER_SIZE",
                 "LOG_LEVEL", "LOG_FORMAT", "DEBUG"):
        monkeypatch.delenv(f"ARTMON_{name}", raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


class TestArtMonConfig:

    def test_defaults(self):
        cfg = ArtMonConfig()
        assert cfg.host is None
        assert cfg.port is None
        assert cfg.socket_timeout == DEFAULT_SOCKET_TIMEOUT
        assert cfg.recv_buffer_size == DEFAULT_RECV_BUFFER_SIZE
        assert cfg.log_format == "console"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("ARTMON_HOST", "10.0.0.5")
        monkeypatch.setenv("ARTMON_PORT", "2958")
        monkeypatch.setenv("ARTMON_SOCKET_TIMEOUT", "1.5")
        monkeypatch.setenv("ARTMON_LOG_LEVEL", "debug")
        monkeypatch.setenv("ARTMON_LOG_FORMAT", "json")

        cfg = ArtMonConfig()

        assert cfg.host == "10.0.0.5"
        assert cfg.port == "2958"
        assert cfg.socket_timeout == 1.5
        assert cfg.get_log_level() == "DEBUG"
        assert cfg.log_format == "json"

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("ARTMON_PORT=4000\n")
        assert ArtMonConfig().port == "4000"

    def test_zero_timeout_means_blocking(self, monkeypatch):
        monkeypatch.setenv("ARTMON_SOCKET_TIMEOUT", "0")
        assert ArtMonConfig().socket_timeout is None

    def test_buffer_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("ARTMON_RECV_BUFFER_SIZE", "0")
        with pytest.raises(ValidationError):
            ArtMonConfig()

    def test_invalid_log_format(self, monkeypatch):
        monkeypatch.setenv("ARTMON_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            ArtMonConfig()


class TestExceptions:

    def test_to_dict(self):
        error = DecodeError("Reply is not well-formed JSON", details={"bytes": 12})
        assert error.to_dict() == {
            "message": "Reply is not well-formed JSON",
            "code": "DECODE_ERROR",
            "details": {"bytes": 12},
        }
        assert isinstance(error, ArtMonError)

    def test_default_message(self):
        assert ArtMonError("boom").to_dict() == {"message": "boom"}
