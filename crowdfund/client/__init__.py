from .api_providers import AlgoNode, Localnet, Network
from .query import get_application, get_requests
from .request_client import RequestClient
from .submission import SubmissionResult, submit
from .transactions import (
    BuiltTransactions,
    build_create,
    build_delete,
    build_donate,
    build_edit,
)

__all__ = [
    "AlgoNode",
    "BuiltTransactions",
    "Localnet",
    "Network",
    "RequestClient",
    "SubmissionResult",
    "build_create",
    "build_delete",
    "build_donate",
    "build_edit",
    "get_application",
    "get_requests",
    "submit",
]
