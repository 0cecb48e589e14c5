import logging
from dataclasses import dataclass, field

from algosdk import encoding, transaction
from algosdk.error import AlgodHTTPError
from algosdk.v2client.algod import AlgodClient

from crowdfund import contract
from crowdfund.compilation import Program
from crowdfund.consts import DONATE_ACTION, EDIT_ACTION, REQUEST_NOTE
from crowdfund.errors import BuildError
from crowdfund.request import Request
from crowdfund.state import (
    encode_text,
    encode_uint,
    global_schema,
    local_schema,
)

__all__ = [
    "BuiltTransactions",
    "get_suggested_params",
    "create_args",
    "edit_args",
    "donate_args",
    "build_create",
    "build_donate",
    "build_edit",
    "build_delete",
]

logger = logging.getLogger(__name__)


@dataclass
class BuiltTransactions:
    """Unsigned transactions ready to be signed and sent as one unit

    Attributes:
        txns: The transactions in the order they must be signed and sent
        group_id: Id stamped on every member of an atomic group, None for a
            single transaction
        app_id: Application the transactions target, 0 for a create
    """

    txns: list[transaction.Transaction]
    group_id: bytes | None = None
    app_id: int = 0
    tx_ids: list[str] = field(init=False)

    def __post_init__(self) -> None:
        self.tx_ids = [txn.get_txid() for txn in self.txns]

    @property
    def is_create(self) -> bool:
        txn = self.txns[0]
        return isinstance(txn, transaction.ApplicationCallTxn) and txn.index == 0

    @property
    def is_delete(self) -> bool:
        txn = self.txns[0]
        return (
            isinstance(txn, transaction.ApplicationCallTxn)
            and txn.on_complete == transaction.OnComplete.DeleteApplicationOC
        )


def get_suggested_params(client: AlgodClient) -> transaction.SuggestedParams:
    try:
        return client.suggested_params()
    except AlgodHTTPError as e:
        raise BuildError(f"Failed to fetch suggested params: {e}") from e
    except OSError as e:
        raise BuildError(f"Failed to fetch suggested params, algod unreachable: {e}") from e


def _check_address(addr: str, role: str) -> str:
    if not isinstance(addr, str) or not encoding.is_valid_address(addr):
        raise BuildError(f"Invalid {role} address: {addr!r}")
    return addr


def _check_app_id(app_id: int) -> int:
    if isinstance(app_id, bool) or not isinstance(app_id, int) or app_id <= 0:
        raise BuildError(f"Invalid application id: {app_id!r}")
    return app_id


def _parse_micro(value: int | str, what: str = "donation amount") -> int:
    """a whole number of microalgos (or micro-units), as int or digit string"""
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise BuildError(f"Invalid {what}: {value!r}")
    return value


def create_args(request: Request) -> list[bytes]:
    """app args of a create call, in the order the approval program reads them"""
    return [
        encode_text(request.title),
        encode_text(request.image),
        encode_text(request.description),
        encode_uint(_parse_micro(request.min_donation, "minimum donation")),
        encode_uint(_parse_micro(request.created_at, "creation time")),
    ]


def edit_args(request: Request) -> list[bytes]:
    return [
        encode_text(EDIT_ACTION),
        encode_text(request.title),
        encode_text(request.image),
        encode_text(request.description),
        encode_uint(_parse_micro(request.min_donation, "minimum donation")),
    ]


def donate_args(request: Request) -> list[bytes]:
    # The counter is bumped here, the program refuses it if another
    # donation landed since `request` was read
    return [
        encode_text(DONATE_ACTION),
        encode_uint(int(request.donated) + 1),
    ]


def build_create(
    client: AlgodClient,
    sender: str,
    request: Request,
    approval: str | None = None,
    clear: str | None = None,
    note: bytes = REQUEST_NOTE,
) -> BuiltTransactions:
    """Build the ApplicationCreateTxn for a new request

    The approval and clear programs default to the ones in `crowdfund.contract`
    and are compiled on every call.
    """
    _check_address(sender, "sender")
    app_args = create_args(request)

    sp = get_suggested_params(client)
    approval_program = Program(
        approval if approval is not None else contract.approval_teal(note=note),
        client,
        "approval",
    )
    clear_program = Program(
        clear if clear is not None else contract.clear_teal(), client, "clear"
    )

    txn = transaction.ApplicationCreateTxn(
        sender=sender,
        sp=sp,
        on_complete=transaction.OnComplete.NoOpOC,
        approval_program=approval_program.raw_binary,
        clear_program=clear_program.raw_binary,
        global_schema=global_schema(),
        local_schema=local_schema(),
        app_args=app_args,
        note=note,
    )
    logger.debug("built create txn %s for request %r", txn.get_txid(), request.title)
    return BuiltTransactions(txns=[txn])


def build_donate(
    client: AlgodClient,
    sender: str,
    request: Request,
    amount: int | str,
) -> BuiltTransactions:
    """Build the atomic group of an app call and a payment of `amount`
    microalgos from `sender` to the owner of the request"""
    _check_address(sender, "sender")
    _check_address(request.owner, "owner")
    app_id = _check_app_id(request.app_id)
    amt = _parse_micro(amount)
    if amt < _parse_micro(request.min_donation, "minimum donation"):
        raise BuildError(
            f"Donation of {amt} is below the minimum of {request.min_donation} microalgos"
        )
    app_args = donate_args(request)

    sp = get_suggested_params(client)
    app_call = transaction.ApplicationNoOpTxn(
        sender=sender,
        sp=sp,
        index=app_id,
        app_args=app_args,
    )
    payment = transaction.PaymentTxn(
        sender=sender,
        sp=sp,
        receiver=request.owner,
        amt=amt,
    )

    txns = transaction.assign_group_id([app_call, payment])
    group_id = txns[0].group
    logger.debug("built donate group %s for app %d", group_id.hex(), app_id)
    return BuiltTransactions(txns=txns, group_id=group_id, app_id=app_id)


def build_edit(
    client: AlgodClient,
    sender: str,
    request: Request,
) -> BuiltTransactions:
    """Build an app call rewriting title, image, description and min donation,
    the donation counter and creation time are left alone"""
    _check_address(sender, "sender")
    app_id = _check_app_id(request.app_id)
    app_args = edit_args(request)

    sp = get_suggested_params(client)
    txn = transaction.ApplicationNoOpTxn(
        sender=sender,
        sp=sp,
        index=app_id,
        app_args=app_args,
    )
    return BuiltTransactions(txns=[txn], app_id=app_id)


def build_delete(client: AlgodClient, sender: str, app_id: int) -> BuiltTransactions:
    _check_address(sender, "sender")
    _check_app_id(app_id)

    sp = get_suggested_params(client)
    txn = transaction.ApplicationDeleteTxn(sender=sender, sp=sp, index=app_id)
    return BuiltTransactions(txns=[txn], app_id=app_id)
