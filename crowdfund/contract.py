"""PyTeal source of the request application

Each request lives in its own application. Its global state is the table in
`crowdfund.state` and the app args of every call are laid out as the
transaction builders in `crowdfund.client.transactions` produce them.
"""
import pyteal as pt

from crowdfund.consts import AVM_VERSION, DONATE_ACTION, EDIT_ACTION, REQUEST_NOTE
from crowdfund.state import (
    CREATED_AT,
    DESCRIPTION,
    DONATED,
    IMAGE,
    MIN_DONATION,
    TITLE,
    StateField,
)

__all__ = [
    "approval_program",
    "clear_state_program",
    "approval_teal",
    "clear_teal",
]


def _key(field: StateField) -> pt.Expr:
    return pt.Bytes(field.key)


def approval_program(note: bytes = REQUEST_NOTE) -> pt.Expr:
    is_creator = pt.Txn.sender() == pt.Global.creator_address()
    args = pt.Txn.application_args

    # create(title, image, description, min_donation, created_at)
    on_create = pt.Seq(
        pt.Assert(args.length() == pt.Int(5)),
        pt.Assert(pt.Txn.note() == pt.Bytes(note)),
        pt.App.globalPut(_key(TITLE), args[0]),
        pt.App.globalPut(_key(IMAGE), args[1]),
        pt.App.globalPut(_key(DESCRIPTION), args[2]),
        pt.App.globalPut(_key(MIN_DONATION), pt.Btoi(args[3])),
        pt.App.globalPut(_key(CREATED_AT), pt.Btoi(args[4])),
        pt.App.globalPut(_key(DONATED), pt.Int(0)),
        pt.Approve(),
    )

    # donate(donated) grouped with a payment to the creator
    payment = pt.Gtxn[1]
    donated = pt.Btoi(args[1])
    on_donate = pt.Seq(
        pt.Assert(args.length() == pt.Int(2)),
        pt.Assert(pt.Global.group_size() == pt.Int(2)),
        pt.Assert(pt.Txn.group_index() == pt.Int(0)),
        pt.Assert(payment.type_enum() == pt.TxnType.Payment),
        pt.Assert(payment.sender() == pt.Txn.sender()),
        pt.Assert(payment.receiver() == pt.Global.creator_address()),
        pt.Assert(payment.close_remainder_to() == pt.Global.zero_address()),
        pt.Assert(payment.amount() >= pt.App.globalGet(_key(MIN_DONATION))),
        # the counter is sent by the client, a stale one is refused
        pt.Assert(donated == pt.App.globalGet(_key(DONATED)) + pt.Int(1)),
        pt.App.globalPut(_key(DONATED), donated),
        pt.Approve(),
    )

    # edit(title, image, description, min_donation)
    on_edit = pt.Seq(
        pt.Assert(is_creator),
        pt.Assert(args.length() == pt.Int(5)),
        pt.App.globalPut(_key(TITLE), args[1]),
        pt.App.globalPut(_key(IMAGE), args[2]),
        pt.App.globalPut(_key(DESCRIPTION), args[3]),
        pt.App.globalPut(_key(MIN_DONATION), pt.Btoi(args[4])),
        pt.Approve(),
    )

    on_delete = pt.Seq(pt.Assert(is_creator), pt.Approve())

    is_noop = pt.Txn.on_completion() == pt.OnComplete.NoOp
    return pt.Cond(
        [pt.Txn.application_id() == pt.Int(0), on_create],
        [pt.Txn.on_completion() == pt.OnComplete.DeleteApplication, on_delete],
        [
            pt.And(is_noop, args[0] == pt.Bytes(DONATE_ACTION)),
            on_donate,
        ],
        [
            pt.And(is_noop, args[0] == pt.Bytes(EDIT_ACTION)),
            on_edit,
        ],
        [pt.Int(1), pt.Reject()],
    )


def clear_state_program() -> pt.Expr:
    return pt.Approve()


def approval_teal(version: int = AVM_VERSION, note: bytes = REQUEST_NOTE) -> str:
    return pt.compileTeal(
        approval_program(note), mode=pt.Mode.Application, version=version
    )


def clear_teal(version: int = AVM_VERSION) -> str:
    return pt.compileTeal(
        clear_state_program(), mode=pt.Mode.Application, version=version
    )
