"""Presentation helpers shared by the Streamlit page and its tests."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from intake.core.models import (
    Attachment,
    CertificateEntry,
    DocumentKind,
    Entry,
    InvoiceEntry,
    SubmitResult,
)

TAB_LABELS: Mapping[DocumentKind, str] = {
    DocumentKind.INVOICES: "העלאת חשבוניות",
    DocumentKind.CERTIFICATES: "העלאת תעודות מקצועיות",
}
LIST_HEADINGS: Mapping[DocumentKind, str] = {
    DocumentKind.INVOICES: "חשבוניות שהתווספו",
    DocumentKind.CERTIFICATES: "תעודות שהתווספו",
}
COUNT_NOUNS: Mapping[DocumentKind, str] = {
    DocumentKind.INVOICES: "חשבוניות",
    DocumentKind.CERTIFICATES: "תעודות מקצועיות",
}
UNNAMED_CLIENT = "לקוח ללא שם"
NO_PHONE = "ללא מספר טלפון"
SUBMITTING_LABEL = "שולח..."


def attachment_from_upload(upload: Any) -> Optional[Attachment]:
    """Convert a Streamlit ``UploadedFile`` (or ``None``) into an attachment."""

    if upload is None:
        return None
    return Attachment.from_upload(upload)


def issue_date_value(value: Union[date, str, None]) -> Optional[str]:
    """Render a date widget value as ``YYYY-MM-DD`` (``None`` when unset)."""

    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def submit_label(kind: DocumentKind, count: int, submitting: bool = False) -> str:
    if submitting:
        return SUBMITTING_LABEL
    return f"שלח {count} {COUNT_NOUNS[kind]}"


def list_heading(kind: DocumentKind, count: int) -> str:
    return f"{LIST_HEADINGS[kind]} ({count})"


def entry_title(entry: Entry) -> str:
    """First line shown for an accepted entry."""

    if isinstance(entry, InvoiceEntry):
        return entry.client_name or UNNAMED_CLIENT
    return entry.certificate_name


def entry_subtitle(entry: Entry) -> str:
    if isinstance(entry, InvoiceEntry):
        return entry.client_phone or NO_PHONE
    if isinstance(entry, CertificateEntry) and entry.issue_date:
        return f"תאריך הנפקה: {entry.issue_date}"
    return ""


def entries_to_rows(entries: Iterable[Entry]) -> List[Dict[str, Any]]:
    """Convert entries to dictionaries for tabular rendering."""

    def _sanitize(value: Any) -> Any:
        if isinstance(value, str):
            return " ".join(value.split())
        return value

    rows = []
    for position, entry in enumerate(entries, start=1):
        row = {
            "#": position,
            "title": entry_title(entry),
            "details": entry_subtitle(entry),
            "file": entry.file.name,
        }
        rows.append({key: _sanitize(value) for key, value in row.items()})
    return rows


def notice_outlived_by_edit(result: Optional[SubmitResult], kind: DocumentKind) -> bool:
    """Whether editing ``kind``'s list makes a shown refusal notice stale.

    Refusals never reach the gateway, so they have no outcome to acknowledge.
    """

    return result is not None and result.outcome is None and kind in result.kinds
