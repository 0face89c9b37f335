# dependencies.py
"""
Process-wide stores and services, provided to the routers through FastAPI
dependencies. Tests override these with app.dependency_overrides.
"""
from datetime import timedelta
from functools import lru_cache

from config import get_settings
from services import (
     ApprovalService,
     CredentialStore,
     SystemClock,
     TransactionStore,
     VerificationService,
     build_notifier,
)


@lru_cache
def get_clock() -> SystemClock:
     return SystemClock()


@lru_cache
def get_transaction_store() -> TransactionStore:
     settings = get_settings()
     return TransactionStore(clock=get_clock(), id_prefix=settings.transaction_id_prefix)


@lru_cache
def get_credential_store() -> CredentialStore:
     settings = get_settings()
     return CredentialStore(
          clock=get_clock(),
          ttl=timedelta(seconds=settings.otp_ttl_seconds),
          max_attempts=settings.otp_max_attempts,
     )


@lru_cache
def get_verification_service() -> VerificationService:
     settings = get_settings()
     return VerificationService(
          transactions=get_transaction_store(),
          credentials=get_credential_store(),
          notifier=build_notifier(settings),
          clock=get_clock(),
          code_length=settings.otp_length,
          notify_timeout=settings.notifier_timeout_seconds,
     )


@lru_cache
def get_approval_service() -> ApprovalService:
     return ApprovalService(transactions=get_transaction_store())
