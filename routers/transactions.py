# routers/transactions.py
"""
Requester-facing transaction API.

POST /api/transactions: create a transaction and send a code
POST /api/transactions/verify: present the code back
POST /api/transactions/resend: send a fresh code
POST /api/transactions/check-approval: is the transaction cleared for payment
GET /api/transactions/{transaction_id}: transaction details, never the code
"""
from fastapi import APIRouter, Depends

from config import Settings, get_settings
from dependencies import get_approval_service, get_verification_service
from routers.responses import envelope
from schemas import (
     IssuedCodeResponse,
     ResendCodeRequest,
     TransactionCreate,
     TransactionReference,
     TransactionResponse,
     VerifyCodeRequest,
)
from services import ApprovalService, NotFound, VerificationService
from services.identifiers import is_well_formed_transaction_id

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post("", summary="Create a transaction and send a verification code")
def create_transaction(
     body: TransactionCreate,
     service: VerificationService = Depends(get_verification_service),
):
     issued = service.request(
          name=body.customer_name,
          contact=body.customer_email,
          phone=body.customer_phone,
          amount=body.payment_amount,
     )
     data = IssuedCodeResponse(
          transaction_id=issued.transaction_id,
          session_id=issued.session_id,
          masked_email=issued.masked_contact,
     )
     return envelope("Transaction created and code sent to email", data=data.model_dump())


@router.post("/verify", summary="Verify a code")
def verify_code(
     body: VerifyCodeRequest,
     service: VerificationService = Depends(get_verification_service),
):
     new_status = service.verify(body.email, body.otp, body.transaction_id)
     return envelope(
          "Code and transaction verified successfully",
          data={"transaction_id": body.transaction_id, "status": new_status.value},
     )


@router.post("/resend", summary="Send a fresh code")
def resend_code(
     body: ResendCodeRequest,
     service: VerificationService = Depends(get_verification_service),
):
     service.resend(body.email, body.transaction_id)
     return envelope("New code sent to email")


@router.post("/check-approval", summary="Check whether a transaction is approved for payment")
def check_approval(
     body: TransactionReference,
     service: ApprovalService = Depends(get_approval_service),
):
     check = service.check_approval(body.transaction_id)
     return envelope(
          "Transaction is approved by admin" if check.eligible else "Transaction pending admin approval",
          data={"transaction_id": body.transaction_id, "verified": check.verified},
          approved=check.eligible,
          status=check.status,
     )


@router.get("/{transaction_id}", summary="Get a transaction")
def get_transaction(
     transaction_id: str,
     service: VerificationService = Depends(get_verification_service),
     settings: Settings = Depends(get_settings),
):
     if not is_well_formed_transaction_id(transaction_id, settings.transaction_id_prefix):
          raise NotFound()
     transaction = service.get_transaction(transaction_id)
     return envelope("Transaction found", data=TransactionResponse.from_transaction(transaction).model_dump(mode="json"))
