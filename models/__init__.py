# models/__init__.py
from .credential import Credential
from .transaction import Transaction, TransactionStatus, ActorFlag

__all__ = [
     "Credential",
     "Transaction",
     "TransactionStatus",
     "ActorFlag",
]
