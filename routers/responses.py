# routers/responses.py
"""
Response envelope shared by every route: {"success", "message", "data"}.
"""
import logging

from fastapi import status
from fastapi.responses import JSONResponse

from schemas import ApiResponse
from services.errors import (
     InvalidCode,
     InvalidPayload,
     NoCredential,
     NotFound,
     NotificationFailed,
     VerificationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
     InvalidPayload: status.HTTP_400_BAD_REQUEST,
     NotFound: status.HTTP_404_NOT_FOUND,
     NoCredential: status.HTTP_400_BAD_REQUEST,
     InvalidCode: status.HTTP_400_BAD_REQUEST,
     NotificationFailed: status.HTTP_502_BAD_GATEWAY,
}


def envelope(message: str, data=None, status_code: int = status.HTTP_200_OK, success: bool = True, **extra) -> JSONResponse:
     body = ApiResponse(success=success, message=message, data=data, **extra)
     return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


def error_response(exc: VerificationError) -> JSONResponse:
     """Map a domain error to its envelope and HTTP status."""
     status_code = status.HTTP_400_BAD_REQUEST
     for error_type, code in ERROR_STATUS_CODES.items():
          if isinstance(exc, error_type):
               status_code = code
               break
     extra = {}
     if isinstance(exc, InvalidCode):
          extra["attempts_left"] = exc.attempts_left
     return envelope(exc.detail, status_code=status_code, success=False, **extra)
