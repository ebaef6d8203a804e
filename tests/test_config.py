"""Tests for configuration loading and environment layering."""

import logging

import pytest

from airxpay import ConfigError, SDKConfig, SDKParameters, build_environment, load_env_file, load_sdk_config
from airxpay.core.config import DEFAULT_BACKEND_URL


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "\n".join(
            [
                "# local settings",
                "",
                "export AIRXPAY_BACKEND_URL='https://file.test/'",
                'AIRXPAY_TIMEOUT_SECONDS="15"',
                "NOT_A_PAIR",
            ]
        ),
        encoding="utf-8",
    )
    return str(path)


class TestEnvironment:
    def test_file_values_fill_gaps_only(self, env_file):
        env = build_environment(
            env_file=env_file,
            base={"AIRXPAY_BACKEND_URL": "https://base.test"},
        )
        assert env.get("AIRXPAY_BACKEND_URL") == "https://base.test"
        assert env.get("AIRXPAY_TIMEOUT_SECONDS") == "15"
        assert env.get("NOT_A_PAIR") is None

    def test_overrides_win(self, env_file):
        env = build_environment(
            env_file=env_file,
            base={},
            overrides={"AIRXPAY_TIMEOUT_SECONDS": "3"},
        )
        assert env.get("AIRXPAY_TIMEOUT_SECONDS") == "3"

    def test_missing_file_is_ignored(self, tmp_path):
        env = build_environment(env_file=str(tmp_path / "absent.env"), base={"A": "1"})
        assert dict(env.variables) == {"A": "1"}

    def test_sdk_variables(self):
        env = build_environment(env_file=None, base={"AIRXPAY_DEBUG": "1", "HOME": "/root"})
        assert env.sdk_variables() == {"AIRXPAY_DEBUG": "1"}

    def test_load_env_file_preserves_existing(self, env_file):
        target = {"AIRXPAY_TIMEOUT_SECONDS": "99"}
        merged = load_env_file(env_file, environ=target)
        assert merged["AIRXPAY_TIMEOUT_SECONDS"] == "99"
        assert target["AIRXPAY_BACKEND_URL"] == "https://file.test/"


class TestSDKConfig:
    def test_defaults(self):
        config = SDKConfig.from_mapping({})
        assert config.backend_url == DEFAULT_BACKEND_URL
        assert config.public_key is None
        assert config.timeout_seconds is None
        assert config.debug is False

    def test_from_env_file(self, env_file):
        config = load_sdk_config(env_file=env_file, base={})
        assert config.backend_url == "https://file.test"
        assert config.timeout_seconds == 15.0

    def test_keyword_parameters_beat_overrides(self, public_key):
        config = load_sdk_config(
            env_file=None,
            base={},
            overrides={"AIRXPAY_BACKEND_URL": "https://override.test"},
            backend_url="https://param.test",
            public_key=public_key,
            debug=True,
        )
        assert config.backend_url == "https://param.test"
        assert config.public_key == public_key
        assert config.debug is True

    def test_parameter_bundle(self):
        config = load_sdk_config(
            env_file=None,
            base={},
            parameters=SDKParameters(timeout_seconds=2.5, debug="yes"),
        )
        assert config.timeout_seconds == 2.5
        assert config.debug is True

    @pytest.mark.parametrize(
        "values",
        [
            {"AIRXPAY_BACKEND_URL": "ftp://backend.test"},
            {"AIRXPAY_BACKEND_URL": "not a url"},
            {"AIRXPAY_TIMEOUT_SECONDS": "soon"},
            {"AIRXPAY_TIMEOUT_SECONDS": "0"},
            {"AIRXPAY_DEBUG": "maybe"},
            {"AIRXPAY_PUBLIC_KEY": "sk_live_nope"},
        ],
    )
    def test_invalid_values(self, values):
        with pytest.raises(ConfigError):
            SDKConfig.from_mapping(values)

    def test_empty_public_key_is_unset(self):
        assert SDKConfig.from_mapping({"AIRXPAY_PUBLIC_KEY": ""}).public_key is None

    def test_get_public_key_requires_key(self, base_config):
        with pytest.raises(ConfigError):
            base_config.get_public_key()

    def test_with_public_key_returns_copy(self, base_config, public_key):
        updated = base_config.with_public_key(public_key)
        assert updated.get_public_key() == public_key
        assert base_config.public_key is None
        assert updated.masked_public_key == "pk_test_..."

    def test_endpoint_url(self, base_config):
        assert base_config.endpoint_url("/api/merchant/status") == "https://backend.test/api/merchant/status"

    def test_diagnostics_only_when_debug(self, base_config, caplog):
        caplog.set_level(logging.INFO, logger="airxpay")
        base_config.log("quiet")
        SDKConfig(debug=True).log("loud %s", 1)
        assert [r.getMessage() for r in caplog.records] == ["loud 1"]
