# utils/__init__.py
from .email import EmailDeliveryError, send_otp_email
from .logging import configure_logging

__all__ = [
     "EmailDeliveryError",
     "send_otp_email",
     "configure_logging",
]
