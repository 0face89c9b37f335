"""Tests for code issuance, verification and resend."""

import pytest

from models import TransactionStatus
from services import (
    InvalidCode,
    InvalidPayload,
    NoCredential,
    NotFound,
    NotificationFailed,
    VerificationService,
)
from tests.conftest import FailingNotifier, SlowNotifier, wrong_code

ALICE = {"name": "Alice", "contact": "a@x.com", "phone": "555", "amount": 100}


def test_request_creates_pending_transaction_and_notifies(verification_service, transactions, credentials, notifier):
    issued = verification_service.request(**ALICE)

    transaction = transactions.get(issued.transaction_id)
    assert transaction.status == TransactionStatus.PENDING
    assert issued.session_id == transaction.session_id
    assert issued.masked_contact == "a@x****@x.com"

    assert len(notifier.sent) == 1
    sent = notifier.sent[0]
    assert sent["destination"] == "a@x.com"
    assert sent["transaction_id"] == issued.transaction_id
    assert sent["display_name"] == "Alice"
    assert credentials.peek("a@x.com").code == sent["code"]


def test_request_never_returns_the_code(verification_service, notifier):
    issued = verification_service.request(**ALICE)
    assert notifier.last_code not in issued


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"contact": ""},
        {"phone": None},
        {"amount": None},
        {"contact": "not-an-address"},
        {"amount": 0},
    ],
)
def test_request_rejects_invalid_payload(verification_service, transactions, notifier, overrides):
    with pytest.raises(InvalidPayload):
        verification_service.request(**{**ALICE, **overrides})
    assert len(transactions) == 0
    assert notifier.sent == []


def test_verify_succeeds_exactly_once(verification_service, transactions, notifier):
    issued = verification_service.request(**ALICE)

    status = verification_service.verify("a@x.com", notifier.last_code, issued.transaction_id)
    assert status == TransactionStatus.VERIFIED
    assert transactions.get(issued.transaction_id).verified_at is not None

    with pytest.raises(NoCredential):
        verification_service.verify("a@x.com", notifier.last_code, issued.transaction_id)


def test_wrong_code_reports_attempts_left(verification_service, notifier):
    issued = verification_service.request(**ALICE)

    with pytest.raises(InvalidCode) as excinfo:
        verification_service.verify("a@x.com", wrong_code(notifier.last_code), issued.transaction_id)
    assert excinfo.value.attempts_left == 2


def test_code_bound_to_its_transaction(verification_service, notifier):
    issued = verification_service.request(**ALICE)
    other = verification_service.request(name="Bob", contact="b@x.com", phone="556", amount=5)

    alice_code = notifier.sent[0]["code"]
    with pytest.raises(InvalidCode):
        verification_service.verify("a@x.com", alice_code, other.transaction_id)

    assert verification_service.verify("a@x.com", alice_code, issued.transaction_id) == TransactionStatus.VERIFIED


def test_attempts_exhausted_then_correct_code_fails(verification_service, transactions, notifier):
    issued = verification_service.request(**ALICE)
    code = notifier.last_code

    left = []
    for _ in range(3):
        with pytest.raises(InvalidCode) as excinfo:
            verification_service.verify("a@x.com", wrong_code(code), issued.transaction_id)
        left.append(excinfo.value.attempts_left)
    assert left == [2, 1, 0]

    with pytest.raises(NoCredential):
        verification_service.verify("a@x.com", code, issued.transaction_id)
    assert transactions.get(issued.transaction_id).status == TransactionStatus.PENDING


def test_expired_code_fails_regardless_of_correctness(verification_service, notifier, clock):
    issued = verification_service.request(**ALICE)
    clock.advance(minutes=10, seconds=1)

    with pytest.raises(NoCredential):
        verification_service.verify("a@x.com", notifier.last_code, issued.transaction_id)


def test_verify_without_request(verification_service):
    with pytest.raises(NoCredential):
        verification_service.verify("a@x.com", "1234", "INV-NOPE-00000-00")


def test_verify_requires_all_fields(verification_service):
    with pytest.raises(InvalidPayload):
        verification_service.verify("a@x.com", "", "INV-T1")


def test_verify_after_approval_keeps_approved_status(verification_service, approval_service, transactions, notifier):
    issued = verification_service.request(**ALICE)
    approval_service.approve(issued.transaction_id)

    status = verification_service.verify("a@x.com", notifier.last_code, issued.transaction_id)

    assert status == TransactionStatus.APPROVED
    transaction = transactions.get(issued.transaction_id)
    assert transaction.verified_at is not None
    assert transaction.admin_approved


def test_resend_unknown_transaction(verification_service):
    with pytest.raises(NotFound):
        verification_service.resend("a@x.com", "INV-NOPE-00000-00")


def test_resend_rejects_foreign_contact(verification_service, credentials):
    issued = verification_service.request(**ALICE)
    with pytest.raises(InvalidPayload):
        verification_service.resend("mallory@x.com", issued.transaction_id)
    assert credentials.peek("mallory@x.com") is None


def test_resend_replaces_old_code(verification_service, credentials, notifier, clock):
    issued = verification_service.request(**ALICE)
    old_code = notifier.last_code
    with pytest.raises(InvalidCode):
        verification_service.verify("a@x.com", wrong_code(old_code), issued.transaction_id)

    clock.advance(minutes=9)
    verification_service.resend("a@x.com", issued.transaction_id)
    new_code = notifier.last_code

    live = credentials.peek("a@x.com")
    assert live.code == new_code
    assert live.attempts == 0
    assert live.issued_at == clock.now()
    assert len(notifier.sent) == 2

    if old_code != new_code:
        with pytest.raises(InvalidCode):
            verification_service.verify("a@x.com", old_code, issued.transaction_id)

    clock.advance(minutes=9)
    assert verification_service.verify("a@x.com", new_code, issued.transaction_id) == TransactionStatus.VERIFIED


def test_resend_does_not_need_a_live_credential(verification_service, notifier, clock):
    issued = verification_service.request(**ALICE)
    clock.advance(hours=1)

    verification_service.resend("a@x.com", issued.transaction_id)
    assert verification_service.verify("a@x.com", notifier.last_code, issued.transaction_id) == TransactionStatus.VERIFIED


def test_notification_failure_keeps_transaction_and_credential(transactions, credentials, clock):
    service = VerificationService(transactions, credentials, FailingNotifier(), clock=clock)

    with pytest.raises(NotificationFailed):
        service.request(**ALICE)

    [transaction] = transactions.list()
    assert transaction.status == TransactionStatus.PENDING
    assert credentials.peek("a@x.com").transaction_id == transaction.id


def test_notification_timeout(transactions, credentials, clock):
    slow = SlowNotifier()
    service = VerificationService(transactions, credentials, slow, clock=clock, notify_timeout=0.05)
    try:
        with pytest.raises(NotificationFailed):
            service.request(**ALICE)
    finally:
        slow.release.set()


def test_get_and_list_transactions(verification_service):
    issued = verification_service.request(**ALICE)
    assert verification_service.get_transaction(issued.transaction_id).requester_name == "Alice"
    assert [t.id for t in verification_service.list_transactions()] == [issued.transaction_id]
    with pytest.raises(NotFound):
        verification_service.get_transaction("INV-NOPE-00000-00")


def test_verify_normalizes_identity_like_request(verification_service, notifier):
    issued = verification_service.request(**{**ALICE, "contact": " a@x.com "})

    status = verification_service.verify(" a@x.com ", notifier.last_code, issued.transaction_id)
    assert status == TransactionStatus.VERIFIED


def test_wrong_code_after_credential_vanished(verification_service, credentials, notifier, monkeypatch):
    """A credential consumed between the read and the failed-attempt count reads as no credential."""
    issued = verification_service.request(**ALICE)
    code = notifier.last_code
    original_peek = credentials.peek

    def peek_then_consume(identity):
        credential = original_peek(identity)
        credentials.consume(identity)
        return credential

    monkeypatch.setattr(credentials, "peek", peek_then_consume)

    with pytest.raises(NoCredential):
        verification_service.verify("a@x.com", wrong_code(code), issued.transaction_id)
