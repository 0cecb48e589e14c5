from dataclasses import dataclass
from typing import Any, cast

from crowdfund.state import (
    CREATED_AT,
    DESCRIPTION,
    DONATED,
    IMAGE,
    MIN_DONATION,
    TITLE,
    read_field,
    to_micro_algos,
)

__all__ = [
    "Request",
]


@dataclass(frozen=True)
class Request:
    """A fundraising request as stored in the global state of its application

    Attributes:
        title: Title shown for the request
        image: URI of the image uploaded for the request
        description: Free text description
        min_donation: Smallest donation accepted, in microalgos
        donated: Number of donations received so far
        created_at: Creation timestamp in seconds, micro-unit encoded (x 1e6)
        app_id: Id of the application holding the request, 0 until created
        owner: Address of the creator, donations are paid to it
    """

    title: str
    image: str
    description: str
    min_donation: int = 0
    donated: int = 0
    created_at: int = 0
    app_id: int = 0
    owner: str = ""

    @classmethod
    def from_global_state(
        cls, app_id: int, owner: str, global_state: list[dict[str, Any]]
    ) -> "Request":
        """decode a request from the global state of its application,
        fields that were never set take their zero value"""
        return cls(
            title=cast(str, read_field(TITLE, global_state)),
            image=cast(str, read_field(IMAGE, global_state)),
            description=cast(str, read_field(DESCRIPTION, global_state)),
            min_donation=cast(int, read_field(MIN_DONATION, global_state)),
            donated=cast(int, read_field(DONATED, global_state)),
            created_at=cast(int, read_field(CREATED_AT, global_state)),
            app_id=app_id,
            owner=owner,
        )

    @classmethod
    def new(
        cls,
        title: str,
        image: str = "",
        description: str = "",
        *,
        min_donation: int | float | str = 0,
        created_at: int | float | str = 0,
    ) -> "Request":
        """a request not yet on the ledger, `min_donation` given in Algos and
        `created_at` in seconds, both as numbers or numeric strings"""
        return cls(
            title=title,
            image=image,
            description=description,
            min_donation=to_micro_algos(min_donation),
            created_at=to_micro_algos(created_at),
        )
