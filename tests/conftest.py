"""Shared fixtures: a manual clock, recording notifiers and wired services."""

import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from services import ApprovalService, CredentialStore, TransactionStore, VerificationService


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start=None):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


class RecordingNotifier:
    """Keeps every code it is asked to send."""

    def __init__(self):
        self.sent = []

    def send(self, destination, code, transaction_id, display_name):
        self.sent.append(
            {
                "destination": destination,
                "code": code,
                "transaction_id": transaction_id,
                "display_name": display_name,
            }
        )

    @property
    def last_code(self):
        return self.sent[-1]["code"]


class FailingNotifier:
    def send(self, destination, code, transaction_id, display_name):
        raise ConnectionError("SMTP relay unreachable")


class SlowNotifier:
    """Blocks until released, to exercise the delivery timeout."""

    def __init__(self):
        self.release = threading.Event()

    def send(self, destination, code, transaction_id, display_name):
        self.release.wait(timeout=2)


def wrong_code(code):
    """A code of the same width that is guaranteed to differ."""
    return str((int(code) + 1) % (10 ** len(code))).zfill(len(code))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def transactions(clock):
    return TransactionStore(clock=clock)


@pytest.fixture
def credentials(clock):
    return CredentialStore(clock=clock, ttl=timedelta(minutes=10), max_attempts=3)


@pytest.fixture
def verification_service(transactions, credentials, notifier, clock):
    return VerificationService(transactions, credentials, notifier, clock=clock, notify_timeout=1)


@pytest.fixture
def approval_service(transactions):
    return ApprovalService(transactions)


@pytest.fixture
def client(transactions, credentials, verification_service, approval_service):
    from dependencies import (
        get_approval_service,
        get_credential_store,
        get_transaction_store,
        get_verification_service,
    )
    from main import app

    app.dependency_overrides[get_transaction_store] = lambda: transactions
    app.dependency_overrides[get_credential_store] = lambda: credentials
    app.dependency_overrides[get_verification_service] = lambda: verification_service
    app.dependency_overrides[get_approval_service] = lambda: approval_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
