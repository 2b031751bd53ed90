from __future__ import annotations
from typing import Iterable, List, Optional


class NotifierError(Exception):
    """Base class for failures surfaced by the webhook service."""


class RequestDecodeError(NotifierError):
    """The request body is not a JSON object of the expected shape."""


class ConfigurationError(NotifierError):
    """Required SMTP settings are missing or unusable."""

    def __init__(self, message: str, missing: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.missing: List[str] = list(missing or [])


class SendError(NotifierError):
    """The SMTP relay refused the connection, the login or the message."""
