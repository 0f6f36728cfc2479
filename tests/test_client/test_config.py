"""
GrapevineConfig tests: defaults, network derivation and environment loading.
"""

import logging

import pytest
from grapevine.config import GrapevineConfig, configure_debug_logging
from grapevine.networks import chain_id_for_x402_network, get_network
from grapevine.exceptions import ConfigError, GrapevineError, UnsupportedNetworkError

from mocks import MOCK_PRIVATE_KEY

ENV_VARS = (
    "GRAPEVINE_NETWORK",
    "GRAPEVINE_PRIVATE_KEY",
    "GRAPEVINE_API_URL",
    "GRAPEVINE_DEBUG",
    "GRAPEVINE_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:

    def test_testnet_by_default(self):
        config = GrapevineConfig()
        assert config.network == "testnet"
        assert config.is_testnet
        assert config.resolved_api_url == "https://api.grapevine.markets"
        assert config.network_config.x402_network == "base-sepolia"
        assert config.network_config.chain_id == 84532

    def test_mainnet(self):
        config = GrapevineConfig(network="mainnet")
        assert not config.is_testnet
        assert config.resolved_api_url == "https://api.grapevine.fyi"
        assert config.network_config.x402_network == "base"
        assert config.network_config.chain_id == 8453

    def test_api_url_override_strips_slash(self):
        assert GrapevineConfig(api_url="http://localhost:8080/").resolved_api_url == "http://localhost:8080"

    def test_unknown_network_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            GrapevineConfig(network="devnet")

        assert isinstance(exc_info.value, GrapevineError)
        assert exc_info.value.context["errors"][0]["field"] == "network"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ConfigError) as exc_info:
            GrapevineConfig(timeout=0)

        assert "timeout" in str(exc_info.value)

    def test_misspelled_option_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            GrapevineConfig(privatekey=MOCK_PRIVATE_KEY)

        assert exc_info.value.context["errors"][0]["field"] == "privatekey"

    def test_private_key_not_in_repr(self):
        assert MOCK_PRIVATE_KEY not in repr(GrapevineConfig(private_key=MOCK_PRIVATE_KEY))


class TestFromEnv:

    def test_reads_environment(self, clean_env):
        clean_env.setenv("GRAPEVINE_NETWORK", "Mainnet")
        clean_env.setenv("GRAPEVINE_PRIVATE_KEY", MOCK_PRIVATE_KEY)
        clean_env.setenv("GRAPEVINE_API_URL", "http://localhost:9000")
        clean_env.setenv("GRAPEVINE_DEBUG", "true")
        clean_env.setenv("GRAPEVINE_TIMEOUT", "5")

        config = GrapevineConfig.from_env()

        assert config.network == "mainnet"
        assert config.private_key == MOCK_PRIVATE_KEY
        assert config.resolved_api_url == "http://localhost:9000"
        assert config.debug is True
        assert config.timeout == 5.0

    def test_overrides_win(self, clean_env):
        clean_env.setenv("GRAPEVINE_NETWORK", "mainnet")

        assert GrapevineConfig.from_env(network="testnet").network == "testnet"

    def test_empty_environment(self, clean_env):
        config = GrapevineConfig.from_env()
        assert config.network == "testnet"
        assert config.private_key is None

    def test_bad_timeout_raises_config_error(self, clean_env):
        clean_env.setenv("GRAPEVINE_TIMEOUT", "abc")

        with pytest.raises(ConfigError) as exc_info:
            GrapevineConfig.from_env()

        assert exc_info.value.context["errors"][0]["field"] == "timeout"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_bad_network_raises_config_error(self, clean_env):
        clean_env.setenv("GRAPEVINE_NETWORK", "devnet")

        with pytest.raises(ConfigError):
            GrapevineConfig.from_env()


class TestNetworks:

    def test_get_network_unknown(self):
        with pytest.raises(ValueError):
            get_network("devnet")

    @pytest.mark.parametrize("network, chain_id", [("base", 8453), ("base-sepolia", 84532), ("polygon", 137)])
    def test_chain_ids(self, network, chain_id):
        assert chain_id_for_x402_network(network) == chain_id

    def test_unsupported_x402_network(self):
        with pytest.raises(UnsupportedNetworkError):
            chain_id_for_x402_network("solana-devnet")


def test_debug_logging_is_idempotent():
    package_logger = logging.getLogger("grapevine")
    before = list(package_logger.handlers)
    try:
        configure_debug_logging(True)
        configure_debug_logging(True)
        added = [h for h in package_logger.handlers if h not in before]
        assert len(added) <= 1
        assert package_logger.level == logging.DEBUG
    finally:
        for handler in package_logger.handlers[:]:
            if handler not in before:
                package_logger.removeHandler(handler)
        package_logger.setLevel(logging.NOTSET)
