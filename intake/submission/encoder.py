"""Serialize the professional identity and entry lists into a multipart payload.

Metadata for each list travels as one JSON array field; files travel as one
part per entry under the list's shared field name. Record ``i`` and file ``i``
share a position, and the transmitted filename carries that position as a
prefix so the receiver can pair them even if parts are reordered in transit.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Sequence

from intake.core.models import DocumentKind, Entry, ProfessionalIdentity, SubmissionPayload

logger = logging.getLogger(__name__)

METADATA_FIELDS: Mapping[DocumentKind, str] = {
    DocumentKind.INVOICES: "clientsData",
    DocumentKind.CERTIFICATES: "certificatesData",
}
COMBINED_DOCUMENT_TYPE = "both"
KIND_ORDER = (DocumentKind.INVOICES, DocumentKind.CERTIFICATES)


def transmitted_filename(index: int, original: str) -> str:
    """Prefix a file name with the entry position, e.g. ``0_invoice.pdf``."""

    return f"{index}_{original}"


def entry_record(index: int, entry: Entry) -> Dict[str, Any]:
    """Build the metadata record sent for the entry at ``index``."""

    record: Dict[str, Any] = {"index": index}
    record.update(entry.metadata())
    record["fileName"] = transmitted_filename(index, entry.file.name)
    return record


def document_type_for(kinds: Sequence[DocumentKind]) -> str:
    if len(kinds) == 1:
        return kinds[0].value
    return COMBINED_DOCUMENT_TYPE


def encode_submission(
    identity: ProfessionalIdentity,
    lists: Mapping[DocumentKind, Sequence[Entry]],
) -> SubmissionPayload:
    """Produce the transport payload for one submission.

    ``lists`` maps each kind being sent to its entries in submission order.
    Every entry yields exactly one metadata record and one file part.
    """

    kinds = [kind for kind in KIND_ORDER if kind in lists]
    if not kinds:
        raise ValueError("at least one document list is required")

    payload = SubmissionPayload(document_type=document_type_for(kinds))
    payload.fields.append(("professionalName", identity.name))
    payload.fields.append(("professionalPhone", identity.phone))
    payload.fields.append(("documentType", payload.document_type))

    for kind in kinds:
        entries = list(lists[kind])
        if not entries:
            raise ValueError(f"cannot encode an empty {kind.value} list")

        records: List[Dict[str, Any]] = []
        for index, entry in enumerate(entries):
            if entry.kind is not kind:
                raise TypeError(f"{entry.kind.value} entry found in {kind.value} list")
            record = entry_record(index, entry)
            records.append(record)
            payload.files.append(
                (kind.value, (record["fileName"], entry.file.content, entry.file.mime_type))
            )

        payload.fields.append((METADATA_FIELDS[kind], json.dumps(records, ensure_ascii=False)))
        logger.info("Encoded %d %s for submission", len(records), kind.value)

    return payload


def decode_records(payload: SubmissionPayload, kind: DocumentKind) -> List[Dict[str, Any]]:
    """Read back the metadata records of one list from an encoded payload."""

    raw = payload.field_value(METADATA_FIELDS[kind])
    return json.loads(raw) if raw else []
