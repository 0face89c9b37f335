# utils/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
     """Configure the root logger once for the process."""
     logging.basicConfig(
          level=getattr(logging, level.upper(), logging.INFO),
          format=LOG_FORMAT,
     )
