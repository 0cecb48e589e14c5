import pytest

from crowdfund.client.api_providers import Localnet, Network
from crowdfund.config import ClientConfig
from crowdfund.consts import MIN_ROUND, REQUEST_NOTE, WAIT_ROUNDS


def test_defaults_to_localnet() -> None:
    config = ClientConfig.from_env({})
    assert config.algod_address == "http://localhost:4001"
    assert config.indexer_address == "http://localhost:8980"
    assert config.algod_token == Localnet.default_token
    assert config.min_round == 0
    assert config.note == REQUEST_NOTE
    assert config.wait_rounds == WAIT_ROUNDS


def test_testnet() -> None:
    config = ClientConfig.from_env({"CROWDFUND_NETWORK": "TestNet"})
    assert config.algod_address == "https://testnet-api.algonode.cloud"
    assert config.indexer_address == "https://testnet-idx.algonode.cloud"
    assert config.algod_token == ""
    assert config.min_round == MIN_ROUND


def test_overrides() -> None:
    config = ClientConfig.from_env(
        {
            "CROWDFUND_NETWORK": "MainNet",
            "CROWDFUND_ALGOD_ADDRESS": "http://node:8080",
            "CROWDFUND_ALGOD_TOKEN": "secret",
            "CROWDFUND_INDEXER_ADDRESS": "http://idx:8980",
            "CROWDFUND_INDEXER_TOKEN": "other",
            "CROWDFUND_NOTE": "mine:uv2",
            "CROWDFUND_MIN_ROUND": "123",
            "CROWDFUND_WAIT_ROUNDS": "10",
            "UNRELATED": "x",
        }
    )
    assert config == ClientConfig(
        algod_address="http://node:8080",
        algod_token="secret",
        indexer_address="http://idx:8980",
        indexer_token="other",
        note=b"mine:uv2",
        min_round=123,
        wait_rounds=10,
    )
    assert config.algod().algod_address == "http://node:8080"
    assert config.indexer().indexer_address == "http://idx:8980"


def test_reads_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CROWDFUND_WAIT_ROUNDS", "6")
    assert ClientConfig.from_env().wait_rounds == 6


def test_unknown_network() -> None:
    with pytest.raises(ValueError, match="Unknown network"):
        ClientConfig.from_env({"CROWDFUND_NETWORK": "MoonNet"})


def test_for_network() -> None:
    assert ClientConfig.for_network(Network.BetaNet).algod_address.startswith(
        "https://betanet"
    )
