import hashlib
from urllib.error import URLError

import pytest
from algosdk.error import AlgodHTTPError

from crowdfund.compilation import Program, compile_program
from crowdfund.errors import BuildError, CompilationError
from tests.helpers import FakeAlgod

SOURCE = "#pragma version 6\nint 1\nreturn\n"


def test_program_compiles_through_algod(algod: FakeAlgod) -> None:
    program = Program(SOURCE, algod, "clear")  # type: ignore[arg-type]
    digest = hashlib.sha256(SOURCE.encode()).digest()

    assert algod.compiled == [SOURCE]
    assert program.teal == SOURCE
    assert program.raw_binary == digest[:16]
    assert program.binary_hash == digest.hex()


def test_nothing_is_cached(algod: FakeAlgod) -> None:
    compile_program(SOURCE, algod)  # type: ignore[arg-type]
    compile_program(SOURCE, algod)  # type: ignore[arg-type]
    assert len(algod.compiled) == 2


def test_rejected_source(algod: FakeAlgod) -> None:
    algod.compile_error = AlgodHTTPError("1: unknown opcode: nope")
    with pytest.raises(CompilationError) as e:
        Program("nope", algod, "approval")  # type: ignore[arg-type]

    assert e.value.program == "approval"
    assert "unknown opcode" in str(e.value)
    assert isinstance(e.value, BuildError)


def test_unreachable_node(algod: FakeAlgod) -> None:
    algod.compile_error = URLError("connection refused")
    with pytest.raises(CompilationError, match="unreachable"):
        compile_program(SOURCE, algod)  # type: ignore[arg-type]
