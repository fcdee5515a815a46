"""Core building blocks for the intake package."""
from intake.core.errors import IntakeError, TransportError, ValidationError
from intake.core.logging import configure_logging
from intake.core.models import (
    Attachment,
    CertificateEntry,
    DocumentKind,
    Entry,
    InvoiceEntry,
    ProfessionalIdentity,
    SubmissionOutcome,
    SubmissionPayload,
    SubmissionState,
    SubmitResult,
)
from intake.core.settings import IntakeSettings

__all__ = [
    "Attachment",
    "CertificateEntry",
    "DocumentKind",
    "Entry",
    "IntakeError",
    "IntakeSettings",
    "InvoiceEntry",
    "ProfessionalIdentity",
    "SubmissionOutcome",
    "SubmissionPayload",
    "SubmissionState",
    "SubmitResult",
    "TransportError",
    "ValidationError",
    "configure_logging",
]
