import logging
from dataclasses import dataclass, field
from typing import Any

from algosdk import transaction
from algosdk.atomic_transaction_composer import TransactionSigner
from algosdk.error import AlgodHTTPError
from algosdk.error import ConfirmationTimeoutError as SDKConfirmationTimeoutError
from algosdk.error import TransactionRejectedError
from algosdk.v2client.algod import AlgodClient

from crowdfund.client.transactions import BuiltTransactions
from crowdfund.consts import WAIT_ROUNDS
from crowdfund.errors import ConfirmationTimeoutError, RejectedError

__all__ = [
    "SubmissionResult",
    "submit",
]

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a confirmed transaction or group

    Attributes:
        tx_id: Id of the first transaction sent
        confirmed_round: Round the transaction was committed in
        app_id: The created application for a create, the deleted one for a
            delete, otherwise the application called
        confirmation: Pending transaction info as returned once confirmed
    """

    tx_id: str
    confirmed_round: int
    app_id: int = 0
    confirmation: dict[str, Any] = field(default_factory=dict, repr=False)


def submit(
    client: AlgodClient,
    built: BuiltTransactions,
    signer: TransactionSigner,
    wait_rounds: int = WAIT_ROUNDS,
) -> SubmissionResult:
    """Sign, send and wait for the transactions in `built`

    The signer is asked once for the whole group. Nothing is retried: if the
    wait runs out a ConfirmationTimeoutError is raised even though the
    transaction may still be committed later.
    """
    txns = built.txns
    signed = signer.sign_transactions(txns, list(range(len(txns))))

    try:
        txid = client.send_transactions(signed)
    except AlgodHTTPError as e:
        raise RejectedError(str(e), built.tx_ids[0]) from e
    except OSError as e:
        raise RejectedError(f"algod unreachable: {e}", built.tx_ids[0]) from e

    logger.info("sent %d txn(s), waiting on %s", len(txns), txid)

    try:
        confirmation = transaction.wait_for_confirmation(client, txid, wait_rounds)
    except SDKConfirmationTimeoutError as e:
        raise ConfirmationTimeoutError(txid, wait_rounds) from e
    except TransactionRejectedError as e:
        raise RejectedError(str(e), txid) from e

    confirmed_round = confirmation["confirmed-round"]
    app_id = built.app_id
    if built.is_create:
        app_id = confirmation.get("application-index", 0)
    elif built.is_delete:
        app_id = confirmation["txn"]["txn"].get("apid", app_id)

    logger.info("txn %s confirmed in round %d", txid, confirmed_round)
    return SubmissionResult(
        tx_id=txid,
        confirmed_round=confirmed_round,
        app_id=app_id,
        confirmation=confirmation,
    )
