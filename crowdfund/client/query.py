import logging
from typing import Any

from algosdk.error import IndexerHTTPError
from algosdk.v2client.indexer import IndexerClient

from crowdfund.consts import MIN_ROUND, REQUEST_NOTE
from crowdfund.errors import DecodeError, QueryError
from crowdfund.request import Request

__all__ = [
    "get_requests",
    "get_application",
    "search_creations",
]

logger = logging.getLogger(__name__)


def search_creations(
    indexer: IndexerClient,
    note: bytes = REQUEST_NOTE,
    min_round: int = MIN_ROUND,
) -> list[int]:
    """ids of the applications created by app calls carrying `note`,
    in the order the indexer returned them"""
    try:
        response = indexer.search_transactions(
            note_prefix=note,
            txn_type="appl",
            min_round=min_round,
        )
    except (IndexerHTTPError, OSError) as e:
        raise QueryError(f"Transaction search failed: {e}") from e

    assert isinstance(response, dict)
    return [
        txn["created-application-index"]
        for txn in response.get("transactions", [])
        if txn.get("created-application-index")
    ]


def get_application(indexer: IndexerClient, app_id: int) -> Request | None:
    """Fetch one application and decode it into a Request

    Returns None for a deleted application, and for one that could not be
    fetched or decoded, so one bad entry never fails a whole listing.
    """
    try:
        response = indexer.applications(app_id, include_all=True)
        application: dict[str, Any] = response["application"]
        if application.get("deleted"):
            logger.debug("skipping deleted application %d", app_id)
            return None

        params = application["params"]
        return Request.from_global_state(
            app_id=app_id,
            owner=params["creator"],
            global_state=params.get("global-state", []),
        )
    except (IndexerHTTPError, OSError) as e:
        logger.warning("failed to look up application %d: %s", app_id, e)
    except DecodeError as e:
        logger.warning("failed to decode application %d: %s", app_id, e)
    except Exception:
        logger.warning("unexpected response for application %d", app_id, exc_info=True)
    return None


def get_requests(
    indexer: IndexerClient,
    note: bytes = REQUEST_NOTE,
    min_round: int = MIN_ROUND,
) -> list[Request]:
    """Every live request created since `min_round`

    Applications are fetched one after the other, in search order. Entries
    that fail to load are skipped, the rest are still returned.
    """
    requests: list[Request] = []
    app_ids = search_creations(indexer, note, min_round)
    for app_id in app_ids:
        if (request := get_application(indexer, app_id)) is not None:
            requests.append(request)

    logger.info(
        "found %d request(s) out of %d created application(s)",
        len(requests),
        len(app_ids),
    )
    return requests
