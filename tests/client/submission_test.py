from urllib.error import URLError

import pytest

from crowdfund.client.submission import submit
from crowdfund.client.transactions import (
    build_create,
    build_delete,
    build_donate,
    build_edit,
)
from crowdfund.errors import ConfirmationTimeoutError, RejectedError
from crowdfund.request import Request
from tests.conftest import Account
from tests.helpers import FakeAlgod, RecordingSigner


def test_submit_create(
    algod: FakeAlgod, creator: Account, signer: RecordingSigner
) -> None:
    request = Request.new("Water Well", "ipfs://Qm", "desc", min_donation="5", created_at=1)
    built = build_create(algod, creator.address, request)  # type: ignore[arg-type]

    result = submit(algod, built, signer)  # type: ignore[arg-type]

    assert result.tx_id == built.tx_ids[0]
    assert result.confirmed_round == 1001
    assert result.app_id == 5000
    assert result.confirmation["application-index"] == 5000
    assert len(signer.calls) == 1


def test_submit_donate_signs_group_once(
    algod: FakeAlgod, donor: Account, water_well: Request
) -> None:
    signer = RecordingSigner(donor.signer)
    built = build_donate(algod, donor.address, water_well, 5_000_000)  # type: ignore[arg-type]

    result = submit(algod, built, signer)  # type: ignore[arg-type]

    assert len(signer.calls) == 1
    txns, indexes = signer.calls[0]
    assert txns == built.txns
    assert indexes == [0, 1]

    (sent,) = algod.sent
    assert [stx.get_txid() for stx in sent] == built.tx_ids
    assert all(stx.transaction.group == built.group_id for stx in sent)
    assert result.tx_id == built.tx_ids[0]
    assert result.app_id == water_well.app_id


def test_submit_edit(
    algod: FakeAlgod, creator: Account, signer: RecordingSigner, water_well: Request
) -> None:
    built = build_edit(algod, creator.address, water_well)  # type: ignore[arg-type]
    result = submit(algod, built, signer)  # type: ignore[arg-type]
    assert result.app_id == water_well.app_id
    assert result.confirmed_round == 1001


def test_submit_delete_reports_deleted_app(
    algod: FakeAlgod, creator: Account, signer: RecordingSigner
) -> None:
    built = build_delete(algod, creator.address, 4242)  # type: ignore[arg-type]
    result = submit(algod, built, signer)  # type: ignore[arg-type]
    assert result.app_id == 4242


def test_rejected_at_send(
    creator: Account, signer: RecordingSigner, water_well: Request
) -> None:
    algod = FakeAlgod(outcome="reject")
    built = build_edit(algod, creator.address, water_well)  # type: ignore[arg-type]

    with pytest.raises(RejectedError) as e:
        submit(algod, built, signer)  # type: ignore[arg-type]

    assert e.value.txid == built.tx_ids[0]
    assert e.value.msg == "assert failed pc=87"
    assert e.value.pc == 87
    assert algod.pending == {}


def test_rejected_from_pool(
    creator: Account, signer: RecordingSigner, water_well: Request
) -> None:
    algod = FakeAlgod(outcome="pool-error")
    built = build_edit(algod, creator.address, water_well)  # type: ignore[arg-type]

    with pytest.raises(RejectedError, match="overspend") as e:
        submit(algod, built, signer)  # type: ignore[arg-type]
    assert e.value.txid == built.tx_ids[0]
    assert e.value.pc is None


def test_algod_unreachable_at_send(
    creator: Account, signer: RecordingSigner, water_well: Request
) -> None:
    algod = FakeAlgod()
    built = build_edit(algod, creator.address, water_well)  # type: ignore[arg-type]
    algod.send_error = URLError("connection refused")

    with pytest.raises(RejectedError, match="unreachable") as e:
        submit(algod, built, signer)  # type: ignore[arg-type]
    assert e.value.txid == built.tx_ids[0]
    assert algod.pending == {}


def test_confirmation_timeout(
    creator: Account, signer: RecordingSigner, water_well: Request
) -> None:
    algod = FakeAlgod(outcome="pending")
    built = build_edit(algod, creator.address, water_well)  # type: ignore[arg-type]

    with pytest.raises(ConfirmationTimeoutError) as e:
        submit(algod, built, signer, wait_rounds=4)  # type: ignore[arg-type]

    assert e.value.txid == built.tx_ids[0]
    assert e.value.wait_rounds == 4
    assert isinstance(e.value, TimeoutError)
    # the wait is bounded
    assert algod.last_round <= 1004
    # sent exactly once, no retry
    assert len(algod.sent) == 1
