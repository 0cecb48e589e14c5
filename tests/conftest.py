from collections.abc import Iterator
from dataclasses import dataclass

import pytest
from algosdk import account
from algosdk.atomic_transaction_composer import AccountTransactionSigner

from crowdfund import Request
from tests.helpers import FakeAlgod, FakeIndexer, RecordingSigner


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--network",
        action="store_true",
        default=False,
        help="run tests that need a running localnet",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "network: test talks to a running localnet")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--network"):
        return
    skip_network = pytest.mark.skip(reason="needs --network")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


@dataclass
class Account:
    address: str
    private_key: str

    @property
    def signer(self) -> AccountTransactionSigner:
        return AccountTransactionSigner(self.private_key)


def _account() -> Account:
    private_key, address = account.generate_account()
    return Account(address=address, private_key=private_key)


@pytest.fixture
def creator() -> Account:
    return _account()


@pytest.fixture
def donor() -> Account:
    return _account()


@pytest.fixture
def algod() -> FakeAlgod:
    return FakeAlgod()


@pytest.fixture
def indexer() -> FakeIndexer:
    return FakeIndexer()


@pytest.fixture
def signer(creator: Account) -> Iterator[RecordingSigner]:
    yield RecordingSigner(creator.signer)


@pytest.fixture
def water_well(creator: Account) -> Request:
    """the request as it reads back from the ledger once created"""
    return Request(
        title="Water Well",
        image="https://ipfs.example/ipfs/QmWell",
        description="A well for the village school",
        min_donation=5_000_000,
        donated=2,
        created_at=1_690_000_000_000_000,
        app_id=4242,
        owner=creator.address,
    )
