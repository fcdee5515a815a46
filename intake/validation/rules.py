"""Field rules that keep entries trustworthy before they join a submission."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Mapping, Optional, Pattern, Sequence

from intake.core.errors import ValidationError
from intake.core.models import Attachment, CertificateEntry, InvoiceEntry, ProfessionalIdentity

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"0[2-9][0-9]{7,8}")
ISSUE_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
ISSUE_DATE_FORMAT = "%Y-%m-%d"
MAX_FILE_SIZE = 5 * 1024 * 1024
ACCEPTED_MIME_TYPES = ("application/pdf", "image/jpeg", "image/png")

PHONE_MESSAGE = "מספר טלפון לא תקין, יש להזין מספר טלפון ישראלי תקין"
FILE_TOO_LARGE_MESSAGE = "גודל הקובץ חייב להיות קטן מ-5MB"
FILE_TYPE_MESSAGE = "רק קבצים מסוג PDF, JPG או PNG מותרים"


@dataclass(frozen=True)
class FieldRule:
    """Declarative constraints for one text field."""

    field: str
    message: str
    required: bool = False
    min_length: int = 0
    pattern: Optional[Pattern[str]] = None
    parser: Optional[Callable[[str], object]] = None

    def check(self, raw: Optional[str]) -> Optional[str]:
        """Return the rule's message when ``raw`` violates it, else ``None``."""

        value = (raw or "").strip()
        if not value:
            # Optional fields left blank count as absent.
            return self.message if self.required else None
        if len(value) < self.min_length:
            return self.message
        if self.pattern is not None and not self.pattern.fullmatch(value):
            return self.message
        if self.parser is not None:
            try:
                self.parser(value)
            except ValueError:
                return self.message
        return None


def parse_issue_date(value: str) -> datetime:
    """Parse a calendar date in the ``YYYY-MM-DD`` form date pickers emit."""

    return datetime.strptime(value, ISSUE_DATE_FORMAT)


IDENTITY_RULES: Sequence[FieldRule] = (
    FieldRule("professionalName", "יש להזין את שם בעל המקצוע", required=True, min_length=2),
    FieldRule("professionalPhone", PHONE_MESSAGE, required=True, pattern=PHONE_PATTERN),
)

INVOICE_RULES: Sequence[FieldRule] = (
    FieldRule("clientPhone", PHONE_MESSAGE, pattern=PHONE_PATTERN),
)

CERTIFICATE_RULES: Sequence[FieldRule] = (
    FieldRule("certificateName", "יש להזין שם תעודה", required=True, min_length=2),
    FieldRule(
        "issueDate",
        "יש להזין תאריך הנפקה תקין",
        pattern=ISSUE_DATE_PATTERN,
        parser=parse_issue_date,
    ),
)

MISSING_FILE_MESSAGES: Mapping[str, str] = {
    "invoice": "נדרש להעלות חשבונית",
    "certificate": "נדרש להעלות תעודה",
}


def apply_rules(rules: Sequence[FieldRule], values: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Evaluate every rule and collect one message per failing field."""

    errors: Dict[str, str] = {}
    for rule in rules:
        message = rule.check(values.get(rule.field))
        if message:
            errors[rule.field] = message
    return errors


def is_valid_phone(value: str) -> bool:
    return PHONE_PATTERN.fullmatch(value) is not None


def validate_attachment(attachment: Optional[Attachment], field: str) -> Dict[str, str]:
    """Check presence, size and type of the file chosen for an entry."""

    if attachment is None:
        return {field: MISSING_FILE_MESSAGES.get(field, "נדרש להעלות קובץ")}

    issues = []
    if attachment.size > MAX_FILE_SIZE:
        issues.append(FILE_TOO_LARGE_MESSAGE)
    if attachment.mime_type not in ACCEPTED_MIME_TYPES:
        issues.append(FILE_TYPE_MESSAGE)
    if issues:
        logger.debug("Rejected file %s: %s", attachment.name, "; ".join(issues))
        return {field: " ".join(issues)}
    return {}


def validate_identity(name: Optional[str], phone: Optional[str]) -> Dict[str, str]:
    return apply_rules(IDENTITY_RULES, {"professionalName": name, "professionalPhone": phone})


def validate_invoice_fields(
    client_name: Optional[str],
    client_phone: Optional[str],
    attachment: Optional[Attachment],
) -> Dict[str, str]:
    """Return all problems with a candidate invoice entry (empty when valid)."""

    errors = apply_rules(INVOICE_RULES, {"clientPhone": client_phone})
    errors.update(validate_attachment(attachment, "invoice"))
    return errors


def validate_certificate_fields(
    certificate_name: Optional[str],
    issue_date: Optional[str],
    attachment: Optional[Attachment],
) -> Dict[str, str]:
    """Return all problems with a candidate certificate entry (empty when valid)."""

    errors = apply_rules(
        CERTIFICATE_RULES, {"certificateName": certificate_name, "issueDate": issue_date}
    )
    errors.update(validate_attachment(attachment, "certificate"))
    return errors


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    stripped = (value or "").strip()
    return stripped or None


def build_identity(name: Optional[str], phone: Optional[str]) -> ProfessionalIdentity:
    """Return a validated identity or raise ``ValidationError`` with every field issue."""

    errors = validate_identity(name, phone)
    if errors:
        raise ValidationError(errors)
    return ProfessionalIdentity(name=(name or "").strip(), phone=(phone or "").strip())


def build_invoice_entry(
    client_name: Optional[str],
    client_phone: Optional[str],
    attachment: Optional[Attachment],
) -> InvoiceEntry:
    errors = validate_invoice_fields(client_name, client_phone, attachment)
    if errors:
        logger.debug("Invoice entry rejected on fields: %s", ", ".join(sorted(errors)))
        raise ValidationError(errors)
    return InvoiceEntry(
        file=attachment,
        client_name=_blank_to_none(client_name),
        client_phone=_blank_to_none(client_phone),
    )


def build_certificate_entry(
    certificate_name: Optional[str],
    issue_date: Optional[str],
    attachment: Optional[Attachment],
) -> CertificateEntry:
    errors = validate_certificate_fields(certificate_name, issue_date, attachment)
    if errors:
        logger.debug("Certificate entry rejected on fields: %s", ", ".join(sorted(errors)))
        raise ValidationError(errors)
    return CertificateEntry(
        file=attachment,
        certificate_name=(certificate_name or "").strip(),
        issue_date=_blank_to_none(issue_date),
    )
