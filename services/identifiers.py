# services/identifiers.py
"""
Identifier, code and contact helpers.

Transaction ids look like INV-<base36 ms timestamp>-<5 random base36>-<NN>
where NN is the sum of the character codes of the (lowercase) timestamp and
random parts, mod 100. Uniqueness is probabilistic.
"""
import re
import secrets
import string
from datetime import datetime

BASE36_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_PART_LENGTH = 5
SESSION_PREFIX = "SES"

CONTACT_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def to_base36(value: int) -> str:
     """Render a non-negative integer in lowercase base36."""
     if value < 0:
          raise ValueError("base36 encoding requires a non-negative integer")
     if value == 0:
          return "0"
     digits = []
     while value:
          value, remainder = divmod(value, 36)
          digits.append(BASE36_ALPHABET[remainder])
     return "".join(reversed(digits))


def _epoch_millis(now: datetime) -> int:
     return int(now.timestamp() * 1000)


def compute_checksum(timestamp_part: str, random_part: str) -> str:
     """Two-digit checksum over the lowercase timestamp and random parts."""
     total = sum(ord(ch) for ch in (timestamp_part + random_part).lower())
     return f"{total % 100:02d}"


def generate_transaction_id(now: datetime, prefix: str = "INV") -> str:
     timestamp_part = to_base36(_epoch_millis(now))
     random_part = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(RANDOM_PART_LENGTH))
     checksum = compute_checksum(timestamp_part, random_part)
     return f"{prefix}-{timestamp_part.upper()}-{random_part.upper()}-{checksum}"


def is_well_formed_transaction_id(value: str, prefix: str = "INV") -> bool:
     """
     Check the shape and checksum of a transaction id.

     This says nothing about whether the transaction exists.
     """
     if not value:
          return False
     parts = value.rsplit("-", 3)
     if len(parts) != 4:
          return False
     head, timestamp_part, random_part, checksum = parts
     if head != prefix or len(random_part) != RANDOM_PART_LENGTH:
          return False
     if not (timestamp_part.isalnum() and random_part.isalnum() and timestamp_part.isascii() and random_part.isascii()):
          return False
     return checksum == compute_checksum(timestamp_part, random_part)


def generate_session_id(now: datetime) -> str:
     return f"{SESSION_PREFIX}-{to_base36(_epoch_millis(now)).upper()}"


def generate_code(length: int = 4) -> str:
     """Zero-padded numeric one-time code."""
     if length < 1:
          raise ValueError("code length must be positive")
     return str(secrets.randbelow(10 ** length)).zfill(length)


def is_valid_contact(contact: str) -> bool:
     return bool(contact) and CONTACT_PATTERN.match(contact) is not None


def mask_contact(contact: str) -> str:
     """Mask a contact for display, e.g. ali****@example.com."""
     if "@" in contact:
          domain = contact.split("@", 1)[1]
          return f"{contact[:3]}****@{domain}"
     return f"{contact[:3]}****{contact[-2:]}"
