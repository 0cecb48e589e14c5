from enum import Enum

from algosdk.v2client.algod import AlgodClient
from algosdk.v2client.indexer import IndexerClient

__all__ = [
    "Network",
    "APIProvider",
    "AlgoNode",
    "Localnet",
]


class Network(Enum):
    """Provides consistent way to reference the most common network options"""

    MainNet = "MainNet"
    TestNet = "TestNet"
    BetaNet = "BetaNet"
    LocalNet = "LocalNet"


class APIProvider:
    """base class providing an algod and indexer client for a network"""

    algod_hosts: dict[Network, str] = {}
    indexer_hosts: dict[Network, str] = {}

    def __init__(self, network: Network):
        self.network = network

    def algod_address(self) -> str:
        if self.network not in self.algod_hosts:
            raise ValueError(f"Unrecognized network: {self.network}")
        return self.algod_hosts[self.network]

    def indexer_address(self) -> str:
        if self.network not in self.indexer_hosts:
            raise ValueError(f"Unrecognized network: {self.network}")
        return self.indexer_hosts[self.network]

    def algod(self, token: str = "") -> AlgodClient:
        """return an algod client based on the provider used and network it was initialized with"""
        return AlgodClient(token, self.algod_address())

    def indexer(self, token: str = "") -> IndexerClient:
        """return an indexer client based on the provider used and network it was initialized with"""
        return IndexerClient(token, self.indexer_address())


class AlgoNode(APIProvider):
    """free public nodes, one algod and indexer pair per public network"""

    algod_hosts = {
        net: f"https://{net.value.lower()}-api.algonode.cloud"
        for net in Network
        if net is not Network.LocalNet
    }
    indexer_hosts = {
        net: f"https://{net.value.lower()}-idx.algonode.cloud"
        for net in Network
        if net is not Network.LocalNet
    }


class Localnet(APIProvider):
    default_host = "http://localhost"
    default_algod_port: int = 4001
    default_indexer_port: int = 8980
    default_token: str = "a" * 64

    def __init__(self, network: Network = Network.LocalNet):
        super().__init__(network)

    # any network, a local node may follow a public one
    def algod_address(self) -> str:
        return f"{self.default_host}:{self.default_algod_port}"

    def indexer_address(self) -> str:
        return f"{self.default_host}:{self.default_indexer_port}"

    def algod(self, token: str = default_token) -> AlgodClient:
        return AlgodClient(token, self.algod_address())

    def indexer(self, token: str = default_token) -> IndexerClient:
        return IndexerClient(token, self.indexer_address())
