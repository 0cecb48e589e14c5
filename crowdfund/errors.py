import re
from typing import TypedDict

__all__ = [
    "CrowdfundError",
    "BuildError",
    "CompilationError",
    "EncodeError",
    "RejectedError",
    "ConfirmationTimeoutError",
    "QueryError",
    "DecodeError",
    "parse_logic_error",
]

LOGIC_ERROR = "TransactionPool.Remember: transaction (?P<txid>[A-Z0-9]+): logic eval error: (?P<msg>.*). Details: pc=(?P<pc>[0-9]+)"


class LogicErrorData(TypedDict):
    txid: str
    msg: str
    pc: int


def parse_logic_error(
    error_str: str,
) -> LogicErrorData | None:
    match = re.search(LOGIC_ERROR, error_str)
    if match is None:
        return None

    return {
        "txid": match.group("txid"),
        "msg": match.group("msg"),
        "pc": int(match.group("pc")),
    }


class CrowdfundError(Exception):
    """Base class for every error raised by this package"""


class BuildError(CrowdfundError):
    """A transaction could not be built, nothing was sent to the network"""


class CompilationError(BuildError):
    def __init__(self, program: str, reason: str):
        self.program = program
        self.reason = reason

    def __str__(self) -> str:
        return f"Failed to compile {self.program} program: {self.reason}"


class EncodeError(BuildError):
    def __init__(self, value: object, reason: str):
        self.value = value
        self.reason = reason

    def __str__(self) -> str:
        return f"Cannot encode {self.value!r}: {self.reason}"


class RejectedError(CrowdfundError):
    """The network refused a well formed transaction or group

    When the rejection came from program evaluation the txid, message and
    program counter are parsed out of the node's error string.
    """

    def __init__(self, reason: str, txid: str | None = None):
        self.reason = reason
        self.txid = txid
        self.msg: str | None = None
        self.pc: int | None = None

        if (logic_error := parse_logic_error(reason)) is not None:
            self.txid = logic_error["txid"]
            self.msg = logic_error["msg"]
            self.pc = logic_error["pc"]

    def __str__(self) -> str:
        if self.msg is not None:
            return f"Txn {self.txid} rejected with '{self.msg}' at PC {self.pc}"
        if self.txid is not None:
            return f"Txn {self.txid} rejected: {self.reason}"
        return f"Transaction rejected: {self.reason}"


class ConfirmationTimeoutError(CrowdfundError, TimeoutError):
    def __init__(self, txid: str, wait_rounds: int):
        self.txid = txid
        self.wait_rounds = wait_rounds

    def __str__(self) -> str:
        return (
            f"Txn {self.txid} not confirmed within {self.wait_rounds} rounds, "
            "re-query the ledger to find out whether it was committed later"
        )


class QueryError(CrowdfundError):
    """The indexer search could not be completed"""


class DecodeError(CrowdfundError):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason

    def __str__(self) -> str:
        return f"Cannot decode state field {self.field}: {self.reason}"
