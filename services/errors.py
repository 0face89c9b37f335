# services/errors.py
"""
Domain errors raised by the verification and approval services.

Anything that is not a VerificationError is an internal fault and is left
to propagate to the caller.
"""


class VerificationError(Exception):
     """Base class for expected, per-operation failures."""

     message = "Verification error"

     def __init__(self, message: str = None):
          super().__init__(message or self.message)

     @property
     def detail(self) -> str:
          return str(self)


class InvalidPayload(VerificationError):
     """Missing or malformed input."""
     message = "Invalid request payload"


class NotFound(VerificationError):
     """Unknown transaction id."""
     message = "Transaction not found"


class NoCredential(VerificationError):
     """
     No live code for the identity.

     Covers a code that was never issued, one that expired and one whose
     attempts were exhausted; the store has already deleted the latter two.
     """
     message = "No valid code found. Please request a new one."


class InvalidCode(VerificationError):
     """Code or transaction id mismatch while attempts remain."""
     message = "Invalid code or transaction id"

     def __init__(self, attempts_left: int, message: str = None):
          super().__init__(message)
          self.attempts_left = attempts_left


class NotificationFailed(VerificationError):
     """The notifier could not deliver the code."""
     message = "Failed to deliver the verification code"
