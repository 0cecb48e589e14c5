import os
from collections.abc import Mapping
from dataclasses import dataclass

from algosdk.v2client.algod import AlgodClient
from algosdk.v2client.indexer import IndexerClient

from crowdfund.client.api_providers import AlgoNode, APIProvider, Localnet, Network
from crowdfund.consts import MIN_ROUND, REQUEST_NOTE, WAIT_ROUNDS

__all__ = [
    "ClientConfig",
    "ENV_PREFIX",
]

ENV_PREFIX = "CROWDFUND_"


@dataclass(kw_only=True)
class ClientConfig:
    algod_address: str
    """url of the algod node transactions are built and sent through"""
    algod_token: str = ""
    indexer_address: str
    """url of the indexer requests are searched on"""
    indexer_token: str = ""
    note: bytes = REQUEST_NOTE
    """note prefix identifying request creations"""
    min_round: int = MIN_ROUND
    """round the indexer search starts from"""
    wait_rounds: int = WAIT_ROUNDS
    """rounds to wait for a confirmation before giving up"""

    @classmethod
    def for_network(cls, network: Network) -> "ClientConfig":
        provider: APIProvider
        if network is Network.LocalNet:
            provider = Localnet()
            return cls(
                algod_address=provider.algod_address(),
                algod_token=Localnet.default_token,
                indexer_address=provider.indexer_address(),
                indexer_token=Localnet.default_token,
                # a fresh localnet starts at round 0
                min_round=0,
            )

        provider = AlgoNode(network)
        return cls(
            algod_address=provider.algod_address(),
            indexer_address=provider.indexer_address(),
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ClientConfig":
        """Defaults come from CROWDFUND_NETWORK (LocalNet if unset), any of
        CROWDFUND_ALGOD_ADDRESS, CROWDFUND_ALGOD_TOKEN, CROWDFUND_INDEXER_ADDRESS,
        CROWDFUND_INDEXER_TOKEN, CROWDFUND_NOTE, CROWDFUND_MIN_ROUND and
        CROWDFUND_WAIT_ROUNDS override them"""
        if env is None:
            env = os.environ

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        network_name = get("NETWORK") or Network.LocalNet.value
        try:
            network = Network(network_name)
        except ValueError:
            raise ValueError(
                f"Unknown network {network_name!r}, expected one of "
                + ", ".join(n.value for n in Network)
            ) from None

        config = cls.for_network(network)
        if (algod_address := get("ALGOD_ADDRESS")) is not None:
            config.algod_address = algod_address
        if (algod_token := get("ALGOD_TOKEN")) is not None:
            config.algod_token = algod_token
        if (indexer_address := get("INDEXER_ADDRESS")) is not None:
            config.indexer_address = indexer_address
        if (indexer_token := get("INDEXER_TOKEN")) is not None:
            config.indexer_token = indexer_token
        if (note := get("NOTE")) is not None:
            config.note = note.encode("utf-8")
        if (min_round := get("MIN_ROUND")) is not None:
            config.min_round = int(min_round)
        if (wait_rounds := get("WAIT_ROUNDS")) is not None:
            config.wait_rounds = int(wait_rounds)
        return config

    def algod(self) -> AlgodClient:
        return AlgodClient(self.algod_token, self.algod_address)

    def indexer(self) -> IndexerClient:
        return IndexerClient(self.indexer_token, self.indexer_address)
