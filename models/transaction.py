# models/transaction.py
import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class TransactionStatus(str, enum.Enum):
     """Current resolution of a transaction."""
     PENDING = "pending"
     VERIFIED = "verified"
     APPROVED = "approved"
     REJECTED = "rejected"


class ActorFlag(str, enum.Enum):
     """Records that an actor acted on a transaction, independent of its status."""
     VERIFIED = "verified"
     ADMIN_VERIFIED = "admin_verified"
     ADMIN_APPROVED = "admin_approved"
     ADMIN_REJECTED = "admin_rejected"


class Transaction(BaseModel):
     """
     Transaction model - a payment request tracked through verification
     and admin approval.

     `status` holds the current resolution while the admin_* flags record
     that an admin acted at all. Flags are never reset once set.
     """

     id: str
     session_id: str
     requester_name: str
     requester_contact: str
     requester_phone: str
     amount: Decimal = Field(..., gt=0)
     created_at: datetime
     status: TransactionStatus = TransactionStatus.PENDING

     verified_at: Optional[datetime] = None
     admin_verified: bool = False
     admin_verified_at: Optional[datetime] = None
     admin_approved: bool = False
     admin_approved_at: Optional[datetime] = None
     admin_rejected: bool = False
     admin_rejected_at: Optional[datetime] = None

     def __repr__(self):
          return f"<Transaction(id='{self.id}', amount={self.amount}, status='{self.status.value}')>"

     @property
     def is_verified(self) -> bool:
          """Verified either through the code path or by an admin override."""
          return self.verified_at is not None or self.admin_verified

     @property
     def is_payment_eligible(self) -> bool:
          return self.status == TransactionStatus.APPROVED and self.admin_approved

     def apply_flag(self, flag: ActorFlag, at: datetime) -> None:
          """Record an actor's action with its timestamp."""
          if flag == ActorFlag.VERIFIED:
               self.verified_at = at
          elif flag == ActorFlag.ADMIN_VERIFIED:
               self.admin_verified = True
               self.admin_verified_at = at
          elif flag == ActorFlag.ADMIN_APPROVED:
               self.admin_approved = True
               self.admin_approved_at = at
          elif flag == ActorFlag.ADMIN_REJECTED:
               self.admin_rejected = True
               self.admin_rejected_at = at
          else:
               raise ValueError(f"Unknown actor flag: {flag!r}")
