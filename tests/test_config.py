"""Tests for configuration models and the YAML loader."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from imagesmith.config import (
    Config,
    RetryConfig,
    SecurityGroupConfig,
    load_config,
    save_config,
)
from imagesmith.config.constants import MAX_CLEANUP_WAIT_SECONDS
from imagesmith.core.exceptions import ConfigurationError, InvalidConfigError


class TestModels:
    def test_defaults(self):
        config = Config()

        assert config.aws.region == "us-east-1"
        assert config.security_group.ssh_port == 22
        assert config.security_group.security_group_id == ""
        assert config.cleanup_retry.attempts == 5
        assert config.cleanup_retry.delay_seconds == 5.0

    def test_zero_port_is_accepted(self):
        assert SecurityGroupConfig(ssh_port=0).ssh_port == 0

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_out_of_range_port(self, port):
        with pytest.raises(ValidationError):
            SecurityGroupConfig(ssh_port=port)

    def test_retry_bounds(self):
        with pytest.raises(ValidationError):
            RetryConfig(attempts=0)

    def test_default_retry_wait(self):
        retry = RetryConfig()

        assert retry.max_delay_seconds is None
        assert retry.worst_case_wait == 20.0

    def test_unbounded_backoff_is_rejected(self):
        with pytest.raises(ValidationError, match="max_delay_seconds"):
            RetryConfig(attempts=20, delay_seconds=300, backoff=10)

    def test_long_fixed_delay_is_rejected(self):
        with pytest.raises(ValidationError):
            RetryConfig(attempts=20, delay_seconds=60)

    def test_max_delay_bounds_the_total_wait(self):
        retry = RetryConfig(attempts=20, delay_seconds=300, backoff=10, max_delay_seconds=30)

        assert retry.worst_case_wait == 570.0
        assert retry.worst_case_wait <= MAX_CLEANUP_WAIT_SECONDS

    def test_max_delay_bounds(self):
        with pytest.raises(ValidationError):
            RetryConfig(max_delay_seconds=301)


class TestLoader:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == Config()

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "aws:\n"
            "  region: eu-west-3\n"
            "security_group:\n"
            "  ssh_port: 2222\n"
            "  vpc_id: vpc-1\n"
        )

        config = load_config(path)

        assert config.aws.region == "eu-west-3"
        assert config.security_group.ssh_port == 2222
        assert config.security_group.vpc_id == "vpc-1"
        assert config.cleanup_retry.attempts == 5

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(path) == Config()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("security_group:\n  ssh_port: 70000\n")

        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.path == str(path)

    def test_unbounded_retry_in_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("cleanup_retry:\n  attempts: 20\n  delay_seconds: 300\n  backoff: 10\n")

        with pytest.raises(InvalidConfigError):
            load_config(path)

    @pytest.mark.parametrize("content", ["aws: [unclosed", "- just\n- a list\n"])
    def test_malformed_yaml(self, tmp_path, content):
        path = tmp_path / "config.yaml"
        path.write_text(content)

        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_save_then_load(self, tmp_path):
        config = Config(security_group=SecurityGroupConfig(security_group_id="sg-1"))
        path = save_config(config, tmp_path / "nested" / "config.yaml")

        assert load_config(path) == config


class TestCachedConfig:
    def test_get_config_reads_default_path_once(self, tmp_path, monkeypatch):
        from imagesmith.config import get_config, loader, reset_config

        path = tmp_path / "config.yaml"
        path.write_text("aws:\n  region: ap-south-1\n")
        monkeypatch.setattr(loader, "DEFAULT_CONFIG_PATH", path)
        reset_config()
        try:
            first = get_config()
            path.write_text("aws:\n  region: sa-east-1\n")

            assert first.aws.region == "ap-south-1"
            assert get_config() is first
        finally:
            reset_config()
