# schemas/__init__.py
from .transaction import (
     ApiResponse,
     IssuedCodeResponse,
     ResendCodeRequest,
     TransactionCreate,
     TransactionListResponse,
     TransactionReference,
     TransactionResponse,
     VerifyCodeRequest,
)

__all__ = [
     "ApiResponse",
     "IssuedCodeResponse",
     "ResendCodeRequest",
     "TransactionCreate",
     "TransactionListResponse",
     "TransactionReference",
     "TransactionResponse",
     "VerifyCodeRequest",
]
