"""Validation of professional details and document entries."""
from intake.validation.rules import (
    ACCEPTED_MIME_TYPES,
    MAX_FILE_SIZE,
    PHONE_PATTERN,
    FieldRule,
    build_certificate_entry,
    build_identity,
    build_invoice_entry,
    is_valid_phone,
    validate_attachment,
    validate_certificate_fields,
    validate_identity,
    validate_invoice_fields,
)

__all__ = [
    "ACCEPTED_MIME_TYPES",
    "MAX_FILE_SIZE",
    "PHONE_PATTERN",
    "FieldRule",
    "build_certificate_entry",
    "build_identity",
    "build_invoice_entry",
    "is_valid_phone",
    "validate_attachment",
    "validate_certificate_fields",
    "validate_identity",
    "validate_invoice_fields",
]
