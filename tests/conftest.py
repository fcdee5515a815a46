"""Pytest configuration to make the local package importable without installation."""
import sys
from pathlib import Path
from typing import List

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from intake.core.models import Attachment, SubmissionOutcome, SubmissionPayload
from intake.session.controller import SessionController

VALID_PHONE = "0501234567"


class StubGateway:
    """Records payloads and answers with a fixed outcome."""

    def __init__(self, outcome: SubmissionOutcome):
        self.outcome = outcome
        self.payloads: List[SubmissionPayload] = []

    def send(self, payload: SubmissionPayload) -> SubmissionOutcome:
        self.payloads.append(payload)
        return self.outcome


def make_attachment(name: str = "invoice.pdf", size: int = 1024, mime_type: str = "application/pdf") -> Attachment:
    return Attachment(name=name, content=b"%" * size, mime_type=mime_type)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep local secrets files and shell settings out of the tests."""

    monkeypatch.delenv("INTAKE_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("INTAKE_TIMEOUT_SECONDS", raising=False)
    monkeypatch.setenv("INTAKE_ENV_FILE", str(tmp_path / "missing.env"))


@pytest.fixture
def pdf_attachment() -> Attachment:
    return make_attachment()


@pytest.fixture
def succeeding_gateway() -> StubGateway:
    return StubGateway(SubmissionOutcome.success(status_code=200))


@pytest.fixture
def failing_gateway() -> StubGateway:
    return StubGateway(SubmissionOutcome.failure("אנא נסו שוב מאוחר יותר", status_code=500))


@pytest.fixture
def controller_factory():
    """Build a controller pre-filled with invoice and certificate entries."""

    def _build(gateway, invoices: int = 0, certificates: int = 0) -> SessionController:
        controller = SessionController(gateway)
        for index in range(invoices):
            errors = controller.add_invoice(
                f"Client {index}", VALID_PHONE, make_attachment(f"invoice_{index}.pdf")
            )
            assert errors == {}
        for index in range(certificates):
            errors = controller.add_certificate(
                f"Certificate {index}",
                "2023-05-01",
                make_attachment(f"cert_{index}.png", mime_type="image/png"),
            )
            assert errors == {}
        return controller

    return _build
