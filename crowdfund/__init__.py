from . import client, consts, contract
from .client import RequestClient
from .compilation import Program, compile_program
from .config import ClientConfig
from .errors import (
    BuildError,
    CompilationError,
    ConfirmationTimeoutError,
    CrowdfundError,
    DecodeError,
    EncodeError,
    QueryError,
    RejectedError,
)
from .request import Request

__all__ = [
    "BuildError",
    "ClientConfig",
    "CompilationError",
    "ConfirmationTimeoutError",
    "CrowdfundError",
    "DecodeError",
    "EncodeError",
    "Program",
    "QueryError",
    "RejectedError",
    "Request",
    "RequestClient",
    "client",
    "compile_program",
    "consts",
    "contract",
]
