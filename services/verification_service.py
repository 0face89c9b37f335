# services/verification_service.py
"""
Verification Service - requester side of the workflow.

request: create a pending transaction, issue a code bound to it, notify
verify: check the code against the live credential, mark the transaction verified
resend: issue a fresh code for an existing transaction, notify

The service keeps no state of its own; it coordinates the credential store,
the transaction store and the notifier, and never holds both store locks.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import List, NamedTuple

from models import ActorFlag, Transaction, TransactionStatus
from services.clock import SystemClock
from services.credential_store import CredentialStore
from services.errors import InvalidCode, InvalidPayload, NoCredential, NotFound, NotificationFailed
from services.identifiers import generate_code, is_valid_contact, mask_contact
from services.notifier import Notifier
from services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class IssuedCode(NamedTuple):
     transaction_id: str
     session_id: str
     masked_contact: str


class VerificationService:
     """Service class for code issuance and verification."""

     def __init__(
          self,
          transactions: TransactionStore,
          credentials: CredentialStore,
          notifier: Notifier,
          clock=None,
          code_length: int = 4,
          notify_timeout: float = 10,
     ):
          self.transactions = transactions
          self.credentials = credentials
          self.notifier = notifier
          self.clock = clock or SystemClock()
          self.code_length = code_length
          self.notify_timeout = notify_timeout
          self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="notifier")

     def _notify(self, destination: str, code: str, transaction_id: str, display_name: str) -> None:
          """
          Run the notifier with a bounded timeout.

          Raises:
               NotificationFailed: On any notifier error or on timeout
          """
          future = self._executor.submit(self.notifier.send, destination, code, transaction_id, display_name)
          try:
               future.result(timeout=self.notify_timeout)
          except FutureTimeoutError as e:
               future.cancel()
               logger.warning("Notifier timed out after %ss for transaction %s", self.notify_timeout, transaction_id)
               raise NotificationFailed("Timed out delivering the verification code") from e
          except Exception as e:
               logger.warning("Notifier failed for transaction %s: %s", transaction_id, e)
               raise NotificationFailed() from e

     def request(self, name: str, contact: str, phone: str, amount) -> IssuedCode:
          """
          Create a transaction and send a code bound to it.

          The transaction and credential are not rolled back when delivery
          fails; the requester can call resend.

          Raises:
               InvalidPayload: If a field is missing or the contact is malformed
               NotificationFailed: If the code could not be delivered
          """
          if not all(value is not None and str(value).strip() for value in (name, contact, phone, amount)):
               raise InvalidPayload("All fields are required")
          contact = contact.strip()
          if not is_valid_contact(contact):
               raise InvalidPayload("Invalid email address")

          transaction = self.transactions.create(name, contact, phone, amount)
          code = generate_code(self.code_length)
          self.credentials.issue(contact, transaction.id, code)
          logger.info("Transaction %s created, code issued to %s", transaction.id, mask_contact(contact))

          self._notify(contact, code, transaction.id, transaction.requester_name)

          return IssuedCode(
               transaction_id=transaction.id,
               session_id=transaction.session_id,
               masked_contact=mask_contact(contact),
          )

     def verify(self, identity: str, code: str, transaction_id: str) -> TransactionStatus:
          """
          Check a code for a transaction.

          Returns:
               The transaction status after verification

          Raises:
               InvalidPayload: If a field is missing
               NoCredential: If there is no live code (never issued, expired, exhausted or already used)
               InvalidCode: If the code or transaction id does not match; carries attempts_left
          """
          if not identity or not code or not transaction_id:
               raise InvalidPayload("Email, code, and transaction id are required")

          identity = identity.strip()
          credential = self.credentials.peek(identity)
          if credential is None:
               raise NoCredential()

          if not credential.matches(code, transaction_id):
               attempts_left = self.credentials.record_failed_attempt(identity)
               if attempts_left is None:
                    raise NoCredential()
               logger.info("Invalid code for %s, %d attempts left", transaction_id, attempts_left)
               raise InvalidCode(attempts_left)

          if self.credentials.consume(identity, credential) is None:
               raise NoCredential()

          transaction = self.transactions.update_status(
               transaction_id,
               TransactionStatus.VERIFIED,
               actor_flags=(ActorFlag.VERIFIED,),
               only_from=(TransactionStatus.PENDING,),
          )
          logger.info("Transaction %s verified by requester, status %s", transaction_id, transaction.status.value)
          return transaction.status

     def resend(self, identity: str, transaction_id: str) -> None:
          """
          Issue a fresh code for an existing transaction, replacing any live one.

          Raises:
               InvalidPayload: If a field is missing or identity is not the transaction's contact
               NotFound: If the transaction is unknown
               NotificationFailed: If the code could not be delivered
          """
          if not identity or not transaction_id:
               raise InvalidPayload("Email and transaction id are required")

          transaction = self.transactions.get(transaction_id)
          if transaction is None:
               raise NotFound()
          # Stricter than re-issuing to any address: only the transaction's own
          # contact may receive a fresh code for it.
          if identity.strip() != transaction.requester_contact:
               raise InvalidPayload("Email does not match the transaction")

          code = generate_code(self.code_length)
          self.credentials.issue(transaction.requester_contact, transaction.id, code)
          logger.info("Code re-issued for transaction %s", transaction.id)

          self._notify(transaction.requester_contact, code, transaction.id, transaction.requester_name)

     def get_transaction(self, transaction_id: str) -> Transaction:
          transaction = self.transactions.get(transaction_id)
          if transaction is None:
               raise NotFound()
          return transaction

     def list_transactions(self) -> List[Transaction]:
          return self.transactions.list()
