# services/__init__.py
from .approval_service import ApprovalCheck, ApprovalService
from .clock import SystemClock
from .credential_store import CredentialStore
from .errors import (
     InvalidCode,
     InvalidPayload,
     NoCredential,
     NotFound,
     NotificationFailed,
     VerificationError,
)
from .notifier import BrevoEmailNotifier, LoggingNotifier, Notifier, build_notifier
from .transaction_store import TransactionStore
from .verification_service import IssuedCode, VerificationService

__all__ = [
     "ApprovalCheck",
     "ApprovalService",
     "SystemClock",
     "CredentialStore",
     "InvalidCode",
     "InvalidPayload",
     "NoCredential",
     "NotFound",
     "NotificationFailed",
     "VerificationError",
     "BrevoEmailNotifier",
     "LoggingNotifier",
     "Notifier",
     "build_notifier",
     "TransactionStore",
     "IssuedCode",
     "VerificationService",
]
