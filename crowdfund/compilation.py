import base64
import logging

from algosdk.error import AlgodHTTPError
from algosdk.v2client.algod import AlgodClient

from crowdfund.errors import CompilationError

__all__ = [
    "Program",
    "compile_program",
]

logger = logging.getLogger(__name__)


class Program:
    """
    Program takes a TEAL program and handles its compilation into the bytecode
    sent along with an application create transaction. Nothing is cached,
    every instance compiles again.
    """

    def __init__(self, program: str, client: AlgodClient, name: str = "approval"):
        """
        Fully compile the program source to binary using the algod compile endpoint
        """
        self.teal = program
        self.name = name
        try:
            self._result = client.compile(self.teal)
        except AlgodHTTPError as e:
            raise CompilationError(name, str(e)) from e
        except OSError as e:
            raise CompilationError(name, f"algod unreachable: {e}") from e

        if not isinstance(self._result, dict) or "result" not in self._result:
            raise CompilationError(name, f"unexpected response {self._result!r}")

        self.raw_binary = base64.b64decode(self._result["result"])
        self.binary_hash: str = self._result.get("hash", "")
        logger.debug(
            "compiled %s program to %d bytes (%s)",
            name,
            len(self.raw_binary),
            self.binary_hash,
        )


def compile_program(program: str, client: AlgodClient, name: str = "approval") -> bytes:
    return Program(program, client, name).raw_binary
