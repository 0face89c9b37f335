# services/notifier.py
"""
Notifiers deliver a one-time code to the requester out of band.

A notifier exposes send(destination, code, transaction_id, display_name)
and raises on failure. The services never retry a failed delivery.
"""
import logging
from typing import Protocol

from utils.email import send_otp_email

logger = logging.getLogger(__name__)


class Notifier(Protocol):
     def send(self, destination: str, code: str, transaction_id: str, display_name: str) -> None:
          ...


class LoggingNotifier:
     """Development notifier: writes the code to the log instead of sending it."""

     def send(self, destination: str, code: str, transaction_id: str, display_name: str) -> None:
          logger.info("Code for %s (%s): %s for transaction %s", destination, display_name, code, transaction_id)


class BrevoEmailNotifier:
     """Sends the code by e-mail through the Brevo transactional API."""

     def __init__(self, api_key: str, sender_name: str, sender_email: str, ttl_minutes: int = 10, timeout: float = 10):
          self.api_key = api_key
          self.sender_name = sender_name
          self.sender_email = sender_email
          self.ttl_minutes = ttl_minutes
          self.timeout = timeout

     def send(self, destination: str, code: str, transaction_id: str, display_name: str) -> None:
          send_otp_email(
               destination,
               code,
               transaction_id,
               display_name,
               api_key=self.api_key,
               sender_name=self.sender_name,
               sender_email=self.sender_email,
               ttl_minutes=self.ttl_minutes,
               timeout=self.timeout,
          )
          logger.info("Code e-mailed to %s for transaction %s", destination, transaction_id)


def build_notifier(settings) -> Notifier:
     """Pick the notifier configured by NOTIFIER_BACKEND."""
     backend = settings.notifier_backend.lower()
     if backend == "brevo":
          return BrevoEmailNotifier(
               api_key=settings.brevo_api_key,
               sender_name=settings.email_from_name,
               sender_email=settings.email_from_address,
               ttl_minutes=max(settings.otp_ttl_seconds // 60, 1),
               timeout=settings.notifier_timeout_seconds,
          )
     if backend == "log":
          return LoggingNotifier()
     raise ValueError(f"Unknown notifier backend: {settings.notifier_backend}")
