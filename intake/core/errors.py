"""Exceptions raised while collecting and sending intake documents."""
from __future__ import annotations

from typing import Dict, Optional


class IntakeError(Exception):
    """Base class for intake failures."""


class ValidationError(IntakeError):
    """Field-scoped rejection of user input; always recoverable locally."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{key}: {value}" for key, value in self.errors.items()))


class TransportError(IntakeError):
    """The intake endpoint could not be reached or refused the submission."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
