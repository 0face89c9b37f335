# services/approval_service.py
"""
Approval Service - admin side of the workflow.

Admin decisions are not gated on verification and the last decision wins:
approve can overwrite a rejection and vice versa. The admin_* flags are
never reset, so they record every kind of action taken.
"""
import logging
from typing import NamedTuple

from models import ActorFlag, Transaction, TransactionStatus
from services.errors import NotFound
from services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class ApprovalCheck(NamedTuple):
     eligible: bool
     status: TransactionStatus
     verified: bool


class ApprovalService:
     """Service class for admin verification and approval decisions."""

     def __init__(self, transactions: TransactionStore):
          self.transactions = transactions

     def manual_verify(self, transaction_id: str) -> Transaction:
          """Mark a transaction as verified by an admin without changing its status."""
          transaction = self.transactions.update_status(
               transaction_id,
               actor_flags=(ActorFlag.ADMIN_VERIFIED,),
          )
          logger.info("Admin verified transaction %s", transaction_id)
          return transaction

     def approve(self, transaction_id: str) -> Transaction:
          transaction = self.transactions.update_status(
               transaction_id,
               TransactionStatus.APPROVED,
               actor_flags=(ActorFlag.ADMIN_APPROVED,),
          )
          logger.info("Admin approved transaction %s", transaction_id)
          return transaction

     def reject(self, transaction_id: str) -> Transaction:
          transaction = self.transactions.update_status(
               transaction_id,
               TransactionStatus.REJECTED,
               actor_flags=(ActorFlag.ADMIN_REJECTED,),
          )
          logger.info("Admin rejected transaction %s", transaction_id)
          return transaction

     def check_approval(self, transaction_id: str) -> ApprovalCheck:
          """
          Report whether a transaction may proceed to payment.

          Eligible only when the status is approved and an admin approved it.

          Raises:
               NotFound: If transaction_id is unknown
          """
          transaction = self.transactions.get(transaction_id)
          if transaction is None:
               raise NotFound()
          return ApprovalCheck(
               eligible=transaction.is_payment_eligible,
               status=transaction.status,
               verified=transaction.is_verified,
          )
