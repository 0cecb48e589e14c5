import math
from base64 import b64decode, b64encode
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Final

from algosdk import abi, transaction
from algosdk.error import ABIEncodingError

from crowdfund.consts import algo
from crowdfund.errors import DecodeError, EncodeError

__all__ = [
    "FieldKind",
    "StateField",
    "GLOBAL_FIELDS",
    "TITLE",
    "IMAGE",
    "DESCRIPTION",
    "MIN_DONATION",
    "DONATED",
    "CREATED_AT",
    "global_schema",
    "local_schema",
    "encode_text",
    "encode_uint",
    "to_micro_algos",
    "state_key",
    "get_field",
    "decode_field",
    "read_field",
    "decode_state",
    "str_or_hex",
]

_uint64 = abi.UintType(64)


class FieldKind(Enum):
    """Value type of a global state slot, numbered as algod reports them"""

    Bytes = 1
    Uint = 2

    @property
    def zero(self) -> str | int:
        return "" if self is FieldKind.Bytes else 0


@dataclass(frozen=True)
class StateField:
    key: str
    kind: FieldKind
    descr: str = ""


TITLE: Final = StateField("TITLE", FieldKind.Bytes, "Title of the request")
IMAGE: Final = StateField("IMAGE", FieldKind.Bytes, "URI of the request image")
DESCRIPTION: Final = StateField("DESCRIPTION", FieldKind.Bytes, "Free text description")
MIN_DONATION: Final = StateField(
    "MIN_DONATION", FieldKind.Uint, "Smallest accepted donation in microalgos"
)
DONATED: Final = StateField("DONATED", FieldKind.Uint, "Number of donations received")
CREATED_AT: Final = StateField("CREATED_AT", FieldKind.Uint, "Creation timestamp")

#: Global state declared by the request application, the schema is derived from it
GLOBAL_FIELDS: Final[tuple[StateField, ...]] = (
    TITLE,
    IMAGE,
    DESCRIPTION,
    MIN_DONATION,
    DONATED,
    CREATED_AT,
)


def global_schema() -> transaction.StateSchema:
    return transaction.StateSchema(
        num_uints=sum(1 for f in GLOBAL_FIELDS if f.kind is FieldKind.Uint),
        num_byte_slices=sum(1 for f in GLOBAL_FIELDS if f.kind is FieldKind.Bytes),
    )


def local_schema() -> transaction.StateSchema:
    return transaction.StateSchema(num_uints=0, num_byte_slices=0)


def encode_text(value: str) -> bytes:
    if not isinstance(value, str):
        raise EncodeError(value, "expected a string")
    return value.encode("utf-8")


def encode_uint(value: int) -> bytes:
    """encode an integer as the 8 byte big-endian uint64 the AVM expects"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(value, "expected an integer")
    try:
        return _uint64.encode(value)
    except ABIEncodingError as e:
        raise EncodeError(value, str(e)) from e


def to_micro_algos(value: int | float | str) -> int:
    """convert an amount expressed in Algos (number or numeric string) to microalgos"""
    if isinstance(value, bool):
        raise EncodeError(value, "expected a number of algos")
    if isinstance(value, float) and not math.isfinite(value):
        raise EncodeError(value, "expected a finite number of algos")

    try:
        algos = Decimal(value.strip() if isinstance(value, str) else str(value))
    except (InvalidOperation, TypeError) as e:
        raise EncodeError(value, "expected a number of algos") from e

    if not algos.is_finite():
        raise EncodeError(value, "expected a finite number of algos")
    if algos < 0:
        raise EncodeError(value, "amount may not be negative")

    return int((algos * algo).to_integral_value(rounding=ROUND_HALF_UP))


def state_key(name: str) -> str:
    """the base64 form a state key takes on the wire"""
    return b64encode(name.encode("utf-8")).decode("ascii")


def get_field(name: str, global_state: list[dict[str, Any]]) -> dict[str, Any] | None:
    key = state_key(name)
    for sv in global_state:
        if sv.get("key") == key:
            return sv
    return None


def str_or_hex(v: bytes) -> str:
    decoded: str = ""
    try:
        decoded = v.decode("utf-8")
    except UnicodeDecodeError:
        decoded = v.hex()

    return decoded


def _key_name(entry: dict[str, Any]) -> str:
    try:
        return str_or_hex(b64decode(entry.get("key", ""), validate=True))
    except ValueError:
        return str(entry.get("key"))


def _value_bytes(name: str, value: dict[str, Any]) -> bytes:
    if "bytes" not in value:
        raise DecodeError(name, "expected a bytes value")
    try:
        return b64decode(value["bytes"], validate=True)
    except ValueError as e:
        raise DecodeError(name, "value is not valid base64") from e


def decode_field(entry: dict[str, Any], kind: FieldKind) -> str | int:
    """decode a single global state entry as the kind of value expected"""
    name = _key_name(entry)
    value = entry.get("value")
    if not isinstance(value, dict):
        raise DecodeError(name, "entry has no value")

    match kind:
        case FieldKind.Bytes:
            return str_or_hex(_value_bytes(name, value))
        case FieldKind.Uint:
            if not isinstance(value.get("uint"), int):
                raise DecodeError(name, "expected a uint value")
            return value["uint"]


def read_field(field: StateField, global_state: list[dict[str, Any]]) -> str | int:
    """look a field up by name, an unset field reads as its zero value"""
    entry = get_field(field.key, global_state)
    if entry is None:
        return field.kind.zero
    return decode_field(entry, field.kind)


def decode_state(
    state: list[dict[str, Any]], raw: bool = False
) -> dict[str | bytes, bytes | str | int | None]:
    """Decode every entry by the type algod reports for it

    State deltas carry an `action` in place of `type`; a delete (action 3)
    or any other unknown type decodes to None.
    """
    decoded_state: dict[str | bytes, bytes | str | int | None] = {}

    for entry in state:
        raw_key = b64decode(entry["key"])
        key: str | bytes = raw_key if raw else str_or_hex(raw_key)

        value = entry.get("value") or {}
        try:
            kind = FieldKind(value.get("action", value.get("type")))
        except ValueError:
            decoded_state[key] = None
            continue

        if raw and kind is FieldKind.Bytes:
            decoded_state[key] = _value_bytes(str_or_hex(raw_key), value)
        else:
            decoded_state[key] = decode_field(entry, kind)
    return decoded_state
