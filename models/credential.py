# models/credential.py
"""
Credential model - the one-time code issued to a requester.

At most one credential is live per requester identity. It is bound to a
single transaction id and is only valid for a limited time and a limited
number of failed attempts.
"""
from datetime import datetime, timedelta

from pydantic import BaseModel, Field


class Credential(BaseModel):
     """One-time code record owned by the credential store."""

     identity: str = Field(..., description="Requester key (contact address)")
     code: str = Field(..., description="Zero-padded numeric one-time code")
     transaction_id: str = Field(..., description="Transaction this code authorizes")
     issued_at: datetime
     attempts: int = Field(default=0, ge=0, description="Failed attempts since issuance")

     def __repr__(self):
          return f"<Credential(identity='{self.identity}', transaction_id='{self.transaction_id}', attempts={self.attempts})>"

     def is_expired(self, now: datetime, ttl: timedelta) -> bool:
          """Check if the credential is older than the allowed time-to-live."""
          return now - self.issued_at > ttl

     def matches(self, code: str, transaction_id: str) -> bool:
          return self.code == code and self.transaction_id == transaction_id
