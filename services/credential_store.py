# services/credential_store.py
"""
Credential Store - one-time codes keyed by requester identity.

Rules:
1. Issuing replaces any previous credential for the identity
2. Expiry is checked lazily on read; an expired credential is deleted
3. Reaching max_attempts failed attempts deletes the credential

All operations run under a single lock, one critical section each.
"""
import logging
import threading
from datetime import timedelta
from typing import Dict, Optional

from models import Credential
from services.clock import SystemClock

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=10)
DEFAULT_MAX_ATTEMPTS = 3


class CredentialStore:
     """In-memory credential registry guarded by one lock."""

     def __init__(self, clock=None, ttl: timedelta = DEFAULT_TTL, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
          self.clock = clock or SystemClock()
          self.ttl = ttl
          self.max_attempts = max_attempts
          self._credentials: Dict[str, Credential] = {}
          self._lock = threading.Lock()

     def issue(self, identity: str, transaction_id: str, code: str) -> Credential:
          credential = Credential(
               identity=identity,
               code=code,
               transaction_id=transaction_id,
               issued_at=self.clock.now(),
               attempts=0,
          )
          with self._lock:
               self._credentials[identity] = credential
          return credential.model_copy()

     def _live(self, identity: str) -> Optional[Credential]:
          """Return the stored credential, deleting it if expired. Caller holds the lock."""
          credential = self._credentials.get(identity)
          if credential is None:
               return None
          if credential.is_expired(self.clock.now(), self.ttl):
               del self._credentials[identity]
               logger.info("Credential for %s expired for transaction %s", identity, credential.transaction_id)
               return None
          return credential

     def peek(self, identity: str) -> Optional[Credential]:
          with self._lock:
               credential = self._live(identity)
               return credential.model_copy() if credential else None

     def record_failed_attempt(self, identity: str) -> Optional[int]:
          """
          Count a failed attempt against the live credential.

          Returns:
               Attempts left, 0 once this attempt deleted the credential, or
               None when there was no live credential to count against.
          """
          with self._lock:
               credential = self._live(identity)
               if credential is None:
                    return None
               credential.attempts += 1
               attempts_left = max(self.max_attempts - credential.attempts, 0)
               if attempts_left == 0:
                    del self._credentials[identity]
                    logger.warning("Credential for %s exhausted its attempts", identity)
               return attempts_left

     def consume(self, identity: str, credential: Optional[Credential] = None) -> Optional[Credential]:
          """
          Delete the credential for identity.

          When `credential` is given, only delete if the stored record is still
          that issuance, so a credential re-issued in the meantime survives.

          Returns:
               The removed credential, or None if nothing was removed.
          """
          with self._lock:
               stored = self._credentials.get(identity)
               if stored is None:
                    return None
               if credential is not None and (
                    stored.issued_at != credential.issued_at
                    or stored.code != credential.code
                    or stored.transaction_id != credential.transaction_id
               ):
                    return None
               del self._credentials[identity]
               return stored

     def __len__(self) -> int:
          with self._lock:
               return len(self._credentials)
