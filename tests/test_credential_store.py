"""Tests for the credential store: replacement, lazy expiry and attempt limits."""

from datetime import timedelta

from models import Credential


def test_issue_and_peek(credentials, clock):
    issued = credentials.issue("a@x.com", "INV-T1", "0420")
    assert isinstance(issued, Credential)

    live = credentials.peek("a@x.com")
    assert live.code == "0420"
    assert live.transaction_id == "INV-T1"
    assert live.attempts == 0
    assert live.issued_at == clock.now()


def test_peek_unknown_identity(credentials):
    assert credentials.peek("nobody@x.com") is None


def test_issue_replaces_previous_credential(credentials, clock):
    credentials.issue("a@x.com", "INV-T1", "1111")
    credentials.record_failed_attempt("a@x.com")
    clock.advance(minutes=5)

    credentials.issue("a@x.com", "INV-T2", "2222")

    live = credentials.peek("a@x.com")
    assert live.code == "2222"
    assert live.transaction_id == "INV-T2"
    assert live.attempts == 0
    assert live.issued_at == clock.now()
    assert len(credentials) == 1


def test_credential_valid_at_exact_ttl(credentials, clock):
    credentials.issue("a@x.com", "INV-T1", "1234")
    clock.advance(minutes=10)
    assert credentials.peek("a@x.com") is not None


def test_expired_credential_is_deleted_on_read(credentials, clock):
    credentials.issue("a@x.com", "INV-T1", "1234")
    clock.advance(minutes=10, seconds=1)

    assert credentials.peek("a@x.com") is None
    assert len(credentials) == 0


def test_failed_attempts_count_down_and_delete(credentials):
    credentials.issue("a@x.com", "INV-T1", "1234")

    assert credentials.record_failed_attempt("a@x.com") == 2
    assert credentials.peek("a@x.com").attempts == 1
    assert credentials.record_failed_attempt("a@x.com") == 1
    assert credentials.record_failed_attempt("a@x.com") == 0

    # absent, not "exists but locked"
    assert credentials.peek("a@x.com") is None
    assert credentials.record_failed_attempt("a@x.com") is None


def test_failed_attempt_on_expired_credential(credentials, clock):
    credentials.issue("a@x.com", "INV-T1", "1234")
    clock.advance(minutes=11)
    assert credentials.record_failed_attempt("a@x.com") is None


def test_custom_limits(clock):
    from services import CredentialStore

    store = CredentialStore(clock=clock, ttl=timedelta(seconds=30), max_attempts=1)
    store.issue("a@x.com", "INV-T1", "1234")
    assert store.record_failed_attempt("a@x.com") == 0
    assert store.peek("a@x.com") is None

    store.issue("a@x.com", "INV-T1", "1234")
    clock.advance(seconds=31)
    assert store.peek("a@x.com") is None


def test_consume_removes_credential(credentials):
    credentials.issue("a@x.com", "INV-T1", "1234")
    removed = credentials.consume("a@x.com")
    assert removed.code == "1234"
    assert credentials.peek("a@x.com") is None
    assert credentials.consume("a@x.com") is None


def test_consume_keeps_newer_issuance(credentials, clock):
    """A code re-issued after the peek is not consumed by the stale verification."""
    credentials.issue("a@x.com", "INV-T1", "1111")
    seen = credentials.peek("a@x.com")

    clock.advance(seconds=1)
    credentials.issue("a@x.com", "INV-T1", "2222")

    assert credentials.consume("a@x.com", seen) is None
    assert credentials.peek("a@x.com").code == "2222"


def test_peek_returns_a_copy(credentials):
    credentials.issue("a@x.com", "INV-T1", "1234")
    copy = credentials.peek("a@x.com")
    copy.attempts = 99
    assert credentials.peek("a@x.com").attempts == 0


def test_failed_attempt_without_credential(credentials):
    assert credentials.record_failed_attempt("nobody@x.com") is None
