"""Data models for the professional record and its supporting document entries."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union


class DocumentKind(str, Enum):
    """Document lists a professional can submit; values double as wire names."""

    INVOICES = "invoices"
    CERTIFICATES = "certificates"


class SubmissionState(str, Enum):
    """Per-kind lifecycle of a submission."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Attachment:
    """A single file chosen for an entry, held in memory for the session."""

    name: str
    content: bytes = field(repr=False)
    mime_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "Attachment":
        """Read a file from disk, guessing its MIME type from the extension."""

        guessed = mime_type or mimetypes.guess_type(path.name)[0] or ""
        return cls(name=path.name, content=path.read_bytes(), mime_type=guessed)

    @classmethod
    def from_upload(cls, upload: Any) -> "Attachment":
        """Wrap an uploaded-file object exposing ``name``, ``type`` and ``getvalue()``."""

        return cls(
            name=upload.name,
            content=bytes(upload.getvalue()),
            mime_type=getattr(upload, "type", "") or "",
        )


@dataclass(frozen=True)
class ProfessionalIdentity:
    """Name and phone of the professional sending the documents."""

    name: str
    phone: str


@dataclass(frozen=True)
class InvoiceEntry:
    """An invoice issued to a client, with optional client contact details."""

    kind: ClassVar[DocumentKind] = DocumentKind.INVOICES

    file: Attachment
    client_name: Optional[str] = None
    client_phone: Optional[str] = None

    def metadata(self) -> Dict[str, str]:
        return {
            "clientName": self.client_name or "",
            "clientPhone": self.client_phone or "",
        }


@dataclass(frozen=True)
class CertificateEntry:
    """A professional certificate or license with its issue date."""

    kind: ClassVar[DocumentKind] = DocumentKind.CERTIFICATES

    file: Attachment
    certificate_name: str = ""
    issue_date: Optional[str] = None

    def metadata(self) -> Dict[str, str]:
        return {
            "certificateName": self.certificate_name,
            "issueDate": self.issue_date or "",
        }


Entry = Union[InvoiceEntry, CertificateEntry]

FilePart = Tuple[str, Tuple[str, bytes, str]]


@dataclass
class SubmissionPayload:
    """Transport-ready multipart body, shaped for ``requests`` ``data=``/``files=``."""

    document_type: str
    fields: List[Tuple[str, str]] = field(default_factory=list)
    files: List[FilePart] = field(default_factory=list)

    def field_value(self, name: str) -> Optional[str]:
        """Return the first form value sent under ``name``."""

        for key, value in self.fields:
            if key == name:
                return value
        return None

    def files_for(self, field_name: str) -> List[Tuple[str, bytes, str]]:
        return [part for key, part in self.files if key == field_name]


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of one network attempt: success, or failure with a generic reason."""

    ok: bool
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, status_code: Optional[int] = None) -> "SubmissionOutcome":
        return cls(ok=True, status_code=status_code)

    @classmethod
    def failure(cls, reason: str, status_code: Optional[int] = None) -> "SubmissionOutcome":
        return cls(ok=False, reason=reason, status_code=status_code)


@dataclass
class SubmitResult:
    """What the session hands back to the presentation layer after a submit action."""

    kinds: Tuple[DocumentKind, ...]
    state: SubmissionState
    message: str
    title: str = ""
    errors: Dict[str, str] = field(default_factory=dict)
    outcome: Optional[SubmissionOutcome] = None

    @property
    def succeeded(self) -> bool:
        return self.state is SubmissionState.SUCCESS

    @property
    def level(self) -> str:
        """Notification level understood by the UI (``success``/``warning``/``error``)."""

        if self.succeeded:
            return "success"
        if self.errors:
            return "warning"
        return "error"
