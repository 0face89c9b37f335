# schemas/transaction.py
"""
Pydantic schemas for transaction verification API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import TransactionStatus


class TransactionCreate(BaseModel):
     """Schema for creating a transaction and issuing a code."""
     customer_name: str = Field(..., description="Requester display name")
     customer_email: str = Field(..., description="Address the code is sent to")
     customer_phone: str = Field(..., description="Requester phone number")
     payment_amount: Decimal = Field(..., description="Payment amount (must be positive)")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "customer_name": "Alice",
                    "customer_email": "alice@example.com",
                    "customer_phone": "555-0100",
                    "payment_amount": 100.00,
               }
          }
     )


class VerifyCodeRequest(BaseModel):
     """Schema for presenting a code back."""
     email: str
     otp: str
     transaction_id: str


class ResendCodeRequest(BaseModel):
     """Schema for requesting a fresh code."""
     email: str
     transaction_id: str


class TransactionReference(BaseModel):
     """Schema for operations addressed by transaction id only."""
     transaction_id: str


class IssuedCodeResponse(BaseModel):
     transaction_id: str
     session_id: str
     masked_email: str


class TransactionResponse(BaseModel):
     """
     Schema for transaction response.

     Has no code field, so neither requester nor admin views
     expose a credential.
     """
     id: str
     session_id: str
     customer_name: str
     customer_email: str
     customer_phone: str
     amount: Decimal
     created_at: datetime
     status: TransactionStatus
     verified_at: Optional[datetime] = None
     admin_verified: bool = False
     admin_verified_at: Optional[datetime] = None
     admin_approved: bool = False
     admin_approved_at: Optional[datetime] = None
     admin_rejected: bool = False
     admin_rejected_at: Optional[datetime] = None

     @classmethod
     def from_transaction(cls, transaction) -> "TransactionResponse":
          return cls(
               id=transaction.id,
               session_id=transaction.session_id,
               customer_name=transaction.requester_name,
               customer_email=transaction.requester_contact,
               customer_phone=transaction.requester_phone,
               amount=transaction.amount,
               created_at=transaction.created_at,
               status=transaction.status,
               verified_at=transaction.verified_at,
               admin_verified=transaction.admin_verified,
               admin_verified_at=transaction.admin_verified_at,
               admin_approved=transaction.admin_approved,
               admin_approved_at=transaction.admin_approved_at,
               admin_rejected=transaction.admin_rejected,
               admin_rejected_at=transaction.admin_rejected_at,
          )


class TransactionListResponse(BaseModel):
     transactions: List[TransactionResponse]
     total: int


class ApiResponse(BaseModel):
     """Envelope returned by every endpoint."""
     success: bool
     message: str
     data: Optional[Any] = None
     attempts_left: Optional[int] = None
     approved: Optional[bool] = None
     status: Optional[TransactionStatus] = None
