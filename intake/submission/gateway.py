"""Network exchange with the intake endpoint."""
from __future__ import annotations

import logging
from typing import Optional

import requests

from intake.core.errors import TransportError
from intake.core.models import SubmissionOutcome, SubmissionPayload
from intake.core.settings import IntakeSettings

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "אנא נסו שוב מאוחר יותר"


class SubmissionGateway:
    """Sends one payload per call as a single multipart POST, without retries."""

    def __init__(
        self,
        endpoint_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Optional[IntakeSettings] = None) -> "SubmissionGateway":
        settings = settings or IntakeSettings.load()
        return cls(settings.endpoint_url, timeout=settings.timeout_seconds)

    def send(self, payload: SubmissionPayload) -> SubmissionOutcome:
        """Deliver the payload and classify the result.

        Any non-2xx answer and any network failure resolve to the same
        generic ``Failure``; details go to the log only.
        """

        try:
            status_code = self._post(payload)
        except TransportError as exc:
            logger.warning(
                "Submission of %s (%d files) failed: %s",
                payload.document_type,
                len(payload.files),
                exc,
            )
            return SubmissionOutcome.failure(GENERIC_FAILURE_MESSAGE, status_code=exc.status_code)

        logger.info(
            "Submitted %s with %d files (HTTP %d)", payload.document_type, len(payload.files), status_code
        )
        return SubmissionOutcome.success(status_code=status_code)

    def _post(self, payload: SubmissionPayload) -> int:
        try:
            response = self.session.post(
                self.endpoint_url,
                data=payload.fields,
                files=payload.files,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"network error: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"endpoint answered HTTP {response.status_code}", status_code=response.status_code
            )
        return response.status_code
