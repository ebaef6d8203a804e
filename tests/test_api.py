"""Tests for the module-level helpers."""

import pytest

import airxpay
from airxpay import AirXPayService, ConfigError, MerchantClient, NotInitializedError, SDKConfig
from airxpay import api as api_module


@pytest.fixture
def fresh_service(monkeypatch, make_session):
    """Swap the shared service for an isolated one."""

    def install(*outcomes):
        session = make_session(*outcomes)
        service = AirXPayService(session=session)
        monkeypatch.setattr(api_module, "airxpay_service", service)
        return service, session

    return install


class TestCreateMerchantClient:
    def test_from_parameters(self, public_key):
        client = airxpay.create_merchant_client(
            env_file=None,
            base={},
            public_key=public_key,
            backend_url="https://backend.test",
        )
        assert isinstance(client, MerchantClient)
        assert client.config.backend_url == "https://backend.test"
        client.close()

    def test_from_config(self, ready_config, make_session):
        session = make_session()
        client = airxpay.create_merchant_client(config=ready_config, session=session)
        assert client.config is ready_config
        assert client.session is session

    def test_config_and_parameters_conflict(self, ready_config):
        with pytest.raises(ValueError):
            airxpay.create_merchant_client(config=ready_config, backend_url="https://x.test")

    def test_public_key_required(self):
        with pytest.raises(ConfigError):
            airxpay.create_merchant_client(env_file=None, base={})

    def test_reads_environment(self, public_key):
        client = airxpay.create_merchant_client(
            env_file=None,
            base={"AIRXPAY_PUBLIC_KEY": public_key, "AIRXPAY_DEBUG": "true"},
        )
        assert client.config.public_key == public_key
        assert client.config.debug is True
        client.close()


class TestSharedService:
    def test_default_service(self):
        assert airxpay.get_default_service() is airxpay.airxpay_service

    def test_not_ready_until_initialized(self, fresh_service):
        fresh_service()
        assert airxpay.is_ready() is False
        with pytest.raises(NotInitializedError):
            airxpay.get_merchant_status()

    def test_full_flow(self, fresh_service, response, public_key, merchant_payload):
        service, session = fresh_service(
            response(201, {"merchant": {"merchantId": "m_7"}}),
            response(200, {"status": "pending"}),
            response(200, {"token": "tok"}),
            response(200, {"valid": True}),
        )

        airxpay.initialize(public_key, env_file=None, base={}, backend_url="https://backend.test")
        assert airxpay.is_ready()
        assert service.config.backend_url == "https://backend.test"

        assert airxpay.create_merchant(merchant_payload)["merchant"]["merchantId"] == "m_7"
        assert airxpay.get_merchant_status() == {"status": "pending"}
        assert airxpay.refresh_token() == {"token": "tok"}
        assert airxpay.verify_public_key() == {"valid": True}
        assert session.request.call_count == 4

    def test_initialize_with_config(self, fresh_service, public_key):
        service, _ = fresh_service()
        airxpay.initialize(public_key, config=SDKConfig(backend_url="https://cfg.test"))
        assert service.config.backend_url == "https://cfg.test"

    def test_explicit_key_beats_stale_environment(self, fresh_service, public_key, monkeypatch):
        service, _ = fresh_service()
        monkeypatch.setenv("AIRXPAY_PUBLIC_KEY", "stale")
        airxpay.initialize(public_key, env_file=None)
        assert airxpay.is_ready()
        assert service.config.public_key == public_key

    def test_explicit_key_beats_stale_env_file(self, fresh_service, public_key, tmp_path):
        service, _ = fresh_service()
        env_file = tmp_path / ".env"
        env_file.write_text("AIRXPAY_PUBLIC_KEY=sk_not_a_public_key\n", encoding="utf-8")
        airxpay.initialize(public_key, env_file=str(env_file), base={})
        assert service.config.public_key == public_key

    def test_bad_explicit_key_still_rejected(self, fresh_service, monkeypatch):
        service, _ = fresh_service()
        monkeypatch.setenv("AIRXPAY_PUBLIC_KEY", "pk_test_1234567890abcdef")
        with pytest.raises(ConfigError):
            airxpay.initialize("pk_short", env_file=None)
        assert not service.is_ready
