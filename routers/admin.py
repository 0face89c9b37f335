# routers/admin.py
"""
Admin API routes for transaction verification and approval.

The approver is assumed to be already authorized by the embedding
deployment; these routes do not authenticate.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_approval_service, get_verification_service
from models import TransactionStatus
from routers.responses import envelope
from schemas import TransactionListResponse, TransactionReference, TransactionResponse
from services import ApprovalService, VerificationService

router = APIRouter(prefix="/api/admin/transactions", tags=["admin"])


@router.get("", summary="List all transactions, newest first")
def list_transactions(
     status: Optional[TransactionStatus] = Query(None, description="Filter by status"),
     service: VerificationService = Depends(get_verification_service),
):
     transactions = service.list_transactions()
     if status is not None:
          transactions = [transaction for transaction in transactions if transaction.status == status]
     data = TransactionListResponse(
          transactions=[TransactionResponse.from_transaction(transaction) for transaction in transactions],
          total=len(transactions),
     )
     return envelope("Transactions fetched", data=data.model_dump(mode="json"))


@router.post("/verify", summary="Manually verify a transaction")
def manual_verify(
     body: TransactionReference,
     service: ApprovalService = Depends(get_approval_service),
):
     transaction = service.manual_verify(body.transaction_id)
     return envelope(
          "Transaction verified by admin",
          data=TransactionResponse.from_transaction(transaction).model_dump(mode="json"),
     )


@router.post("/approve", summary="Approve a transaction")
def approve_transaction(
     body: TransactionReference,
     service: ApprovalService = Depends(get_approval_service),
):
     transaction = service.approve(body.transaction_id)
     return envelope(
          "Transaction approved successfully",
          data=TransactionResponse.from_transaction(transaction).model_dump(mode="json"),
     )


@router.post("/reject", summary="Reject a transaction")
def reject_transaction(
     body: TransactionReference,
     service: ApprovalService = Depends(get_approval_service),
):
     transaction = service.reject(body.transaction_id)
     return envelope(
          "Transaction rejected",
          data=TransactionResponse.from_transaction(transaction).model_dump(mode="json"),
     )
