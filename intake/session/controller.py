"""Per-session orchestration of entry lists and validation-gated submission."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Protocol, Sequence, Tuple, Union

from intake.core.errors import ValidationError
from intake.core.models import (
    Attachment,
    DocumentKind,
    Entry,
    SubmissionOutcome,
    SubmissionPayload,
    SubmissionState,
    SubmitResult,
)
from intake.entries.store import EntryListStore
from intake.submission.encoder import KIND_ORDER, encode_submission
from intake.validation.rules import build_certificate_entry, build_identity, build_invoice_entry

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGES: Mapping[DocumentKind, Tuple[str, str]] = {
    DocumentKind.INVOICES: ("אין רשומות לשליחה", "יש להוסיף לפחות רשומת לקוח אחת"),
    DocumentKind.CERTIFICATES: ("אין תעודות לשליחה", "יש להוסיף לפחות תעודה מקצועית אחת"),
}
IN_PROGRESS_MESSAGE = ("שליחה בתהליך", "יש להמתין לסיום השליחה הקודמת")
INVALID_DETAILS_MESSAGE = ("פרטי בעל המקצוע חסרים", "יש לתקן את השדות המסומנים")
FAILURE_TITLE = "שגיאה בשליחה"
SUCCESS_TITLES: Mapping[str, str] = {
    DocumentKind.INVOICES.value: "החשבוניות נשלחו בהצלחה!",
    DocumentKind.CERTIFICATES.value: "התעודות המקצועיות נשלחו בהצלחה!",
    "both": "המסמכים נשלחו בהצלחה!",
}
SUCCESS_MESSAGE = "הנתונים התקבלו במערכת ויטופלו בהקדם."


class Gateway(Protocol):
    def send(self, payload: SubmissionPayload) -> SubmissionOutcome:
        ...


def success_title(kinds: Sequence[DocumentKind]) -> str:
    key = kinds[0].value if len(kinds) == 1 else "both"
    return SUCCESS_TITLES[key]


class SessionController:
    """Owns one entry list and one submission state per document kind.

    States move ``idle -> submitting -> success | error``. A settled kind can be
    submitted again or acknowledged back to ``idle``. While a kind is
    submitting, further submits for it are refused.
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self.stores: Dict[DocumentKind, EntryListStore] = {
            kind: EntryListStore(kind) for kind in DocumentKind
        }
        self._states: Dict[DocumentKind, SubmissionState] = {
            kind: SubmissionState.IDLE for kind in DocumentKind
        }

    # Entry list operations -------------------------------------------------

    def add_invoice(
        self,
        client_name: Optional[str],
        client_phone: Optional[str],
        attachment: Optional[Attachment],
    ) -> Dict[str, str]:
        """Validate and append an invoice entry; return field errors (empty when added)."""

        try:
            entry = build_invoice_entry(client_name, client_phone, attachment)
        except ValidationError as exc:
            return exc.errors
        self.stores[DocumentKind.INVOICES].append(entry)
        return {}

    def add_certificate(
        self,
        certificate_name: Optional[str],
        issue_date: Optional[str],
        attachment: Optional[Attachment],
    ) -> Dict[str, str]:
        """Validate and append a certificate entry; return field errors (empty when added)."""

        try:
            entry = build_certificate_entry(certificate_name, issue_date, attachment)
        except ValidationError as exc:
            return exc.errors
        self.stores[DocumentKind.CERTIFICATES].append(entry)
        return {}

    def remove(self, kind: DocumentKind, index: int) -> Entry:
        return self.stores[kind].remove_at(index)

    def entries(self, kind: DocumentKind) -> Tuple[Entry, ...]:
        return self.stores[kind].snapshot()

    # State -------------------------------------------------------------------

    def state(self, kind: DocumentKind) -> SubmissionState:
        return self._states[kind]

    def can_submit(self, kind: DocumentKind) -> bool:
        """Whether the submit control for ``kind`` should be enabled."""

        return self._states[kind] is not SubmissionState.SUBMITTING and not self.stores[kind].is_empty()

    def acknowledge(self, kind: DocumentKind) -> None:
        """Return a settled kind to idle once its outcome has been shown."""

        if self._states[kind] in (SubmissionState.SUCCESS, SubmissionState.ERROR):
            self._transition(kind, SubmissionState.IDLE)

    def _transition(self, kind: DocumentKind, new_state: SubmissionState) -> None:
        old_state = self._states[kind]
        self._states[kind] = new_state
        logger.info("%s: %s -> %s", kind.value, old_state.value, new_state.value)

    # Submission --------------------------------------------------------------

    def submit(
        self,
        kinds: Union[DocumentKind, str, Iterable[DocumentKind]],
        professional_name: Optional[str],
        professional_phone: Optional[str],
    ) -> SubmitResult:
        """Send every current entry of the requested kind(s) in one request.

        Validation problems (busy kind, invalid professional details, empty
        list) are reported without touching the network or any state.
        """

        requested = self._normalize_kinds(kinds)

        busy = [kind for kind in requested if self._states[kind] is SubmissionState.SUBMITTING]
        if busy:
            logger.warning("Ignoring submit for %s: already submitting", ", ".join(k.value for k in busy))
            return self._rejected(
                requested, busy[0], {"submit": IN_PROGRESS_MESSAGE[1]}, IN_PROGRESS_MESSAGE
            )

        try:
            identity = build_identity(professional_name, professional_phone)
        except ValidationError as exc:
            return self._rejected(requested, requested[0], exc.errors, INVALID_DETAILS_MESSAGE)

        for kind in requested:
            if self.stores[kind].is_empty():
                logger.info("Submit for %s refused: no entries", kind.value)
                title, message = EMPTY_LIST_MESSAGES[kind]
                return self._rejected(requested, kind, {kind.value: message}, (title, message))

        snapshot = {kind: self.stores[kind].snapshot() for kind in requested}
        payload = encode_submission(identity, snapshot)

        for kind in requested:
            self._transition(kind, SubmissionState.SUBMITTING)
        try:
            outcome = self.gateway.send(payload)
        except Exception:
            # A kind must never stay stuck in submitting.
            for kind in requested:
                self._transition(kind, SubmissionState.ERROR)
            raise

        return self._settle(requested, snapshot, outcome)

    def _settle(
        self,
        kinds: Tuple[DocumentKind, ...],
        snapshot: Mapping[DocumentKind, Sequence[Entry]],
        outcome: SubmissionOutcome,
    ) -> SubmitResult:
        if outcome.ok:
            for kind in kinds:
                self.stores[kind].clear()
                self._transition(kind, SubmissionState.SUCCESS)
            logger.info(
                "Submission succeeded: %s",
                ", ".join(f"{len(snapshot[kind])} {kind.value}" for kind in kinds),
            )
            return SubmitResult(
                kinds=kinds,
                state=SubmissionState.SUCCESS,
                title=success_title(kinds),
                message=SUCCESS_MESSAGE,
                outcome=outcome,
            )

        for kind in kinds:
            self._transition(kind, SubmissionState.ERROR)
        return SubmitResult(
            kinds=kinds,
            state=SubmissionState.ERROR,
            title=FAILURE_TITLE,
            message=outcome.reason or "",
            outcome=outcome,
        )

    def _rejected(
        self,
        kinds: Tuple[DocumentKind, ...],
        blocking: DocumentKind,
        errors: Dict[str, str],
        notice: Tuple[str, str],
    ) -> SubmitResult:
        """Report a refused submit with the state of the kind that refused it."""

        title, message = notice
        return SubmitResult(
            kinds=kinds,
            state=self._states[blocking],
            title=title,
            message=message,
            errors=errors,
        )

    @staticmethod
    def _normalize_kinds(kinds: Union[DocumentKind, str, Iterable[DocumentKind]]) -> Tuple[DocumentKind, ...]:
        if isinstance(kinds, str):
            return (DocumentKind(kinds),)
        requested = set(DocumentKind(kind) for kind in kinds)
        if not requested:
            raise ValueError("at least one document kind must be submitted")
        return tuple(kind for kind in KIND_ORDER if kind in requested)
