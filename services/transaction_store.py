# services/transaction_store.py
"""
Transaction Store - payment transactions keyed by transaction id.

Records are never deleted. Every read-modify-write of a record happens
under the store lock so a requester verification and an admin decision
arriving together cannot lose each other's writes.
"""
import logging
import threading
from decimal import Decimal, InvalidOperation
from typing import Collection, Dict, Iterable, List, Optional

from models import ActorFlag, Transaction, TransactionStatus
from services.clock import SystemClock
from services.errors import InvalidPayload, NotFound
from services.identifiers import generate_session_id, generate_transaction_id

logger = logging.getLogger(__name__)


def _normalize_amount(amount) -> Decimal:
     try:
          value = Decimal(str(amount))
     except (InvalidOperation, ValueError, TypeError):
          raise InvalidPayload("Payment amount must be a number")
     if not value.is_finite() or value <= 0:
          raise InvalidPayload("Payment amount must be greater than zero")
     return value


class TransactionStore:
     """In-memory transaction registry guarded by one lock."""

     def __init__(self, clock=None, id_prefix: str = "INV"):
          self.clock = clock or SystemClock()
          self.id_prefix = id_prefix
          self._transactions: Dict[str, Transaction] = {}
          self._lock = threading.Lock()

     def create(self, name: str, contact: str, phone: str, amount) -> Transaction:
          """
          Create a pending transaction.

          Raises:
               InvalidPayload: If a field is empty or amount is not positive
          """
          fields = {"name": name, "contact": contact, "phone": phone}
          missing = [key for key, value in fields.items() if not value or not str(value).strip()]
          if missing or amount is None or amount == "":
               raise InvalidPayload("All fields are required")
          value = _normalize_amount(amount)

          now = self.clock.now()
          transaction = Transaction(
               id=generate_transaction_id(now, self.id_prefix),
               session_id=generate_session_id(now),
               requester_name=name.strip(),
               requester_contact=contact.strip(),
               requester_phone=str(phone).strip(),
               amount=value,
               created_at=now,
               status=TransactionStatus.PENDING,
          )
          with self._lock:
               if transaction.id in self._transactions:
                    logger.warning("Transaction id collision on %s, overwriting", transaction.id)
               self._transactions[transaction.id] = transaction
          return transaction.model_copy()

     def get(self, transaction_id: str) -> Optional[Transaction]:
          with self._lock:
               transaction = self._transactions.get(transaction_id)
               return transaction.model_copy() if transaction else None

     def update_status(
          self,
          transaction_id: str,
          new_status: Optional[TransactionStatus] = None,
          actor_flags: Iterable[ActorFlag] = (),
          only_from: Optional[Collection[TransactionStatus]] = None,
     ) -> Transaction:
          """
          Atomically apply actor flags and a status change to one transaction.

          Args:
               transaction_id: Transaction to update
               new_status: Status to set, or None to leave it unchanged
               actor_flags: Flags to record with the current timestamp
               only_from: If given, new_status is applied only when the current
                    status is one of these; flags are applied regardless

          Returns:
               Copy of the updated transaction

          Raises:
               NotFound: If transaction_id is unknown
          """
          with self._lock:
               transaction = self._transactions.get(transaction_id)
               if transaction is None:
                    raise NotFound(f"Transaction {transaction_id} not found")
               now = self.clock.now()
               for flag in actor_flags:
                    transaction.apply_flag(flag, now)
               if new_status is not None and (only_from is None or transaction.status in only_from):
                    transaction.status = new_status
               return transaction.model_copy()

     def list(self) -> List[Transaction]:
          """All transactions, newest first; equal timestamps keep insertion order."""
          with self._lock:
               snapshot = [transaction.model_copy() for transaction in self._transactions.values()]
          return sorted(snapshot, key=lambda transaction: transaction.created_at, reverse=True)

     def __len__(self) -> int:
          with self._lock:
               return len(self._transactions)
