from typing import Final

#: number of microalgos in 1 Algo
algo: Final[int] = int(1e6)

#: Note attached to every request creation so the indexer can find it again
REQUEST_NOTE: Final[bytes] = b"donation-request:uv1"

#: First round the request application was deployed at, searches start here
MIN_ROUND: Final[int] = 21540981

#: Number of rounds to wait for a submitted transaction to be confirmed
WAIT_ROUNDS: Final[int] = 4

#: AVM version the bundled programs are rendered for
AVM_VERSION: Final[int] = 6

#: First app arg of a donation call
DONATE_ACTION: Final[str] = "donate"
#: First app arg of an edit call
EDIT_ACTION: Final[str] = "edit"
