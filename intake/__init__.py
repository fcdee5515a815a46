"""Collect a professional's invoices and certificates and send them for intake."""
from intake.core import (
    Attachment,
    CertificateEntry,
    DocumentKind,
    IntakeSettings,
    InvoiceEntry,
    ProfessionalIdentity,
    SubmissionOutcome,
    SubmissionState,
    SubmitResult,
    TransportError,
    ValidationError,
    configure_logging,
)
from intake.entries import EntryListStore
from intake.session import SessionController
from intake.submission import SubmissionGateway, encode_submission
from intake.validation import (
    build_certificate_entry,
    build_identity,
    build_invoice_entry,
    validate_identity,
)

__all__ = [
    "Attachment",
    "CertificateEntry",
    "DocumentKind",
    "EntryListStore",
    "IntakeSettings",
    "InvoiceEntry",
    "ProfessionalIdentity",
    "SessionController",
    "SubmissionGateway",
    "SubmissionOutcome",
    "SubmissionState",
    "SubmitResult",
    "TransportError",
    "ValidationError",
    "build_certificate_entry",
    "build_identity",
    "build_invoice_entry",
    "configure_logging",
    "encode_submission",
    "validate_identity",
]
