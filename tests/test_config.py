"""Tests for the configuration sources."""
import logging

import pytest

from firefly import AppConfig, EnvConfig, PathConfig
from firefly.config import DEFAULT_APP_ID
from firefly.exceptions import FireflyConstructionError
from firefly.logger import mask_secret, setup_logger


class TestPathConfig:
    def test_reads_yaml(self, tmp_path):
        config_file = tmp_path / "firefly.yml"
        config_file.write_text(
            "host: https://test.fireflycloud.net/\n"
            "device_id: dev-1\n"
            "school_code: testschool\n"
            "xml: <token/>\n",
            encoding="utf8",
        )

        config = PathConfig(filename=config_file)
        config.validate()

        assert config.host == "https://test.fireflycloud.net"
        assert config.app_id == DEFAULT_APP_ID
        assert config.device_id == "dev-1"
        assert config.school_code == "testschool"
        assert config.other_info == {"xml": "<token/>"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PathConfig(filename=tmp_path / "nope.yml")


class TestEnvConfig:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FIREFLY_HOST", "https://test.fireflycloud.net")
        monkeypatch.setenv("FIREFLY_APP_ID", "Custom App")
        monkeypatch.setenv("FIREFLY_TIMEOUT", "12")
        monkeypatch.delenv("FIREFLY_DEVICE_ID", raising=False)

        config = EnvConfig()
        config.validate()

        assert config.app_id == "Custom App"
        assert config.device_id is None
        assert config.timeout == 12.0

    def test_host_missing(self, monkeypatch):
        monkeypatch.delenv("FIREFLY_HOST", raising=False)

        with pytest.raises(FireflyConstructionError):
            EnvConfig().validate()


def test_app_config_blank_host():
    with pytest.raises(FireflyConstructionError):
        AppConfig(host="  ").validate()


def test_setup_logger_adds_one_handler():
    logger = setup_logger(logging.DEBUG)
    handlers = len(logger.handlers)

    assert setup_logger(logging.INFO) is logger
    assert len(logger.handlers) == handlers
    assert logger.level == logging.INFO
    logger.setLevel(logging.WARNING)


@pytest.mark.parametrize("secret, masked", [("test-secret-123", "test****"), (None, "<none>"), ("", "<none>")])
def test_mask_secret(secret, masked):
    assert mask_secret(secret) == masked
