from typing import TYPE_CHECKING, Any

from algosdk.atomic_transaction_composer import TransactionSigner
from algosdk.v2client.algod import AlgodClient
from algosdk.v2client.indexer import IndexerClient

from crowdfund.client import query, submission, transactions
from crowdfund.consts import MIN_ROUND, REQUEST_NOTE, WAIT_ROUNDS
from crowdfund.request import Request
from crowdfund.state import decode_state

if TYPE_CHECKING:
    from crowdfund.config import ClientConfig

__all__ = [
    "RequestClient",
]


class RequestClient:
    """Drives the request applications for one sender

    Writes go through algod, reads of the full request list go through the
    indexer. The two paths share nothing but the ledger.
    """

    def __init__(
        self,
        client: AlgodClient,
        indexer: IndexerClient | None = None,
        *,
        signer: TransactionSigner | None = None,
        sender: str | None = None,
        note: bytes = REQUEST_NOTE,
        min_round: int = MIN_ROUND,
        wait_rounds: int = WAIT_ROUNDS,
    ):
        self.client = client
        self.indexer = indexer
        self.signer = signer
        self.sender = sender
        self.note = note
        self.min_round = min_round
        self.wait_rounds = wait_rounds

    @classmethod
    def from_config(
        cls,
        config: "ClientConfig",
        *,
        signer: TransactionSigner | None = None,
        sender: str | None = None,
    ) -> "RequestClient":
        return cls(
            config.algod(),
            config.indexer(),
            signer=signer,
            sender=sender,
            note=config.note,
            min_round=config.min_round,
            wait_rounds=config.wait_rounds,
        )

    def get_sender(self, sender: str | None = None) -> str:
        if sender is not None:
            return sender
        if self.sender is None:
            raise Exception("No sender available")
        return self.sender

    def get_signer(self, signer: TransactionSigner | None = None) -> TransactionSigner:
        if signer is not None:
            return signer
        if self.signer is None:
            raise Exception("No signer available")
        return self.signer

    def get_indexer(self) -> IndexerClient:
        if self.indexer is None:
            raise Exception("No indexer client available")
        return self.indexer

    def _submit(
        self,
        built: transactions.BuiltTransactions,
        signer: TransactionSigner | None,
    ) -> submission.SubmissionResult:
        return submission.submit(
            self.client, built, self.get_signer(signer), self.wait_rounds
        )

    def create_request(
        self,
        request: Request,
        sender: str | None = None,
        signer: TransactionSigner | None = None,
    ) -> tuple[int, str]:
        """Creates the application holding `request`, returns its id and the txid"""
        built = transactions.build_create(
            self.client, self.get_sender(sender), request, note=self.note
        )
        result = self._submit(built, signer)
        return result.app_id, result.tx_id

    def donate(
        self,
        request: Request,
        amount: int | str,
        sender: str | None = None,
        signer: TransactionSigner | None = None,
    ) -> str:
        """Sends `amount` microalgos to the owner of `request` grouped with the
        call counting the donation"""
        built = transactions.build_donate(
            self.client, self.get_sender(sender), request, amount
        )
        return self._submit(built, signer).tx_id

    def edit_request(
        self,
        request: Request,
        sender: str | None = None,
        signer: TransactionSigner | None = None,
    ) -> str:
        built = transactions.build_edit(self.client, self.get_sender(sender), request)
        return self._submit(built, signer).tx_id

    def delete_request(
        self,
        app_id: int,
        sender: str | None = None,
        signer: TransactionSigner | None = None,
    ) -> int:
        """Deletes the application, returns the id of the deleted application"""
        built = transactions.build_delete(self.client, self.get_sender(sender), app_id)
        return self._submit(built, signer).app_id

    def get_requests(self) -> list[Request]:
        return query.get_requests(self.get_indexer(), self.note, self.min_round)

    def get_request(self, app_id: int) -> Request | None:
        return query.get_application(self.get_indexer(), app_id)

    def get_global_state(
        self, app_id: int, *, raw: bool = False
    ) -> dict[bytes | str, bytes | str | int | None]:
        """global state of the application as algod currently sees it"""
        app_info: dict[str, Any] = self.client.application_info(app_id)
        return decode_state(app_info["params"].get("global-state", []), raw=raw)

    def prepare(
        self,
        signer: TransactionSigner | None = None,
        sender: str | None = None,
    ) -> "RequestClient":
        """makes a copy of the current RequestClient and the fields passed"""
        return RequestClient(
            self.client,
            self.indexer,
            signer=signer if signer is not None else self.signer,
            sender=sender if sender is not None else self.sender,
            note=self.note,
            min_round=self.min_round,
            wait_rounds=self.wait_rounds,
        )
