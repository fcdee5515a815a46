"""Session controller state transitions around submission."""
import pytest

from conftest import VALID_PHONE, StubGateway, make_attachment
from intake.core.models import DocumentKind, SubmissionOutcome, SubmissionState
from intake.session.controller import EMPTY_LIST_MESSAGES, SUCCESS_TITLES, SessionController

INVOICES = DocumentKind.INVOICES
CERTIFICATES = DocumentKind.CERTIFICATES


def test_initial_state_is_idle(succeeding_gateway):
    controller = SessionController(succeeding_gateway)

    assert controller.state(INVOICES) is SubmissionState.IDLE
    assert controller.state(CERTIFICATES) is SubmissionState.IDLE
    assert not controller.can_submit(INVOICES)


def test_add_invoice_returns_errors_and_does_not_store_invalid_entry(succeeding_gateway):
    controller = SessionController(succeeding_gateway)

    errors = controller.add_invoice("Client", "1501234567", None)

    assert set(errors) == {"clientPhone", "invoice"}
    assert controller.entries(INVOICES) == ()


def test_add_and_remove_entries(succeeding_gateway, pdf_attachment):
    controller = SessionController(succeeding_gateway)
    assert controller.add_certificate("First aid", None, pdf_attachment) == {}
    assert controller.add_certificate("Electrician", "2020-01-01", pdf_attachment) == {}

    removed = controller.remove(CERTIFICATES, 0)

    assert removed.certificate_name == "First aid"
    assert [entry.certificate_name for entry in controller.entries(CERTIFICATES)] == ["Electrician"]


@pytest.mark.parametrize("kind", [INVOICES, CERTIFICATES])
def test_empty_list_never_reaches_gateway(succeeding_gateway, kind):
    controller = SessionController(succeeding_gateway)

    result = controller.submit(kind, "Dana Levi", VALID_PHONE)

    assert succeeding_gateway.payloads == []
    assert controller.state(kind) is SubmissionState.IDLE
    assert result.state is SubmissionState.IDLE
    assert result.errors == {kind.value: EMPTY_LIST_MESSAGES[kind][1]}
    assert result.level == "warning"


def test_invalid_professional_details_block_submission(succeeding_gateway, controller_factory):
    controller = controller_factory(succeeding_gateway, invoices=2)

    result = controller.submit(INVOICES, "D", "123")

    assert succeeding_gateway.payloads == []
    assert set(result.errors) == {"professionalName", "professionalPhone"}
    assert controller.state(INVOICES) is SubmissionState.IDLE
    assert len(controller.entries(INVOICES)) == 2


@pytest.mark.parametrize("count", [1, 3])
def test_failed_submission_keeps_entries_for_retry(failing_gateway, controller_factory, count):
    controller = controller_factory(failing_gateway, invoices=count)

    result = controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    assert controller.state(INVOICES) is SubmissionState.ERROR
    assert len(controller.entries(INVOICES)) == count
    assert result.state is SubmissionState.ERROR
    assert result.level == "error"
    assert result.message == failing_gateway.outcome.reason
    assert controller.can_submit(INVOICES)


@pytest.mark.parametrize("count", [1, 4])
def test_successful_submission_clears_list(succeeding_gateway, controller_factory, count):
    controller = controller_factory(succeeding_gateway, invoices=count, certificates=2)

    result = controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    assert controller.state(INVOICES) is SubmissionState.SUCCESS
    assert controller.entries(INVOICES) == ()
    assert result.succeeded
    assert result.kinds == (INVOICES,)
    assert result.title == SUCCESS_TITLES["invoices"]
    # The other kind is untouched.
    assert controller.state(CERTIFICATES) is SubmissionState.IDLE
    assert len(controller.entries(CERTIFICATES)) == 2


def test_submission_sends_current_order_after_removal(succeeding_gateway, controller_factory):
    controller = controller_factory(succeeding_gateway, invoices=3)
    controller.remove(INVOICES, 0)

    controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    payload = succeeding_gateway.payloads[0]
    names = [part[0] for part in payload.files_for("invoices")]
    assert names == ["0_invoice_1.pdf", "1_invoice_2.pdf"]


def test_retry_after_failure_succeeds(controller_factory):
    gateway = StubGateway(SubmissionOutcome.failure("later"))
    controller = controller_factory(gateway, certificates=2)

    controller.submit(CERTIFICATES, "Dana Levi", VALID_PHONE)
    gateway.outcome = SubmissionOutcome.success(200)
    result = controller.submit(CERTIFICATES, "Dana Levi", VALID_PHONE)

    assert result.succeeded
    assert len(gateway.payloads) == 2
    assert controller.entries(CERTIFICATES) == ()


def test_combined_submission_sends_one_request(succeeding_gateway, controller_factory):
    controller = controller_factory(succeeding_gateway, invoices=2, certificates=1)

    result = controller.submit([CERTIFICATES, INVOICES], "Dana Levi", VALID_PHONE)

    assert len(succeeding_gateway.payloads) == 1
    assert succeeding_gateway.payloads[0].document_type == "both"
    assert result.kinds == (INVOICES, CERTIFICATES)
    assert result.title == SUCCESS_TITLES["both"]
    assert controller.entries(INVOICES) == ()
    assert controller.entries(CERTIFICATES) == ()


def test_combined_submission_requires_both_lists(succeeding_gateway, controller_factory):
    controller = controller_factory(succeeding_gateway, invoices=2)

    result = controller.submit([INVOICES, CERTIFICATES], "Dana Levi", VALID_PHONE)

    assert succeeding_gateway.payloads == []
    assert CERTIFICATES.value in result.errors
    assert len(controller.entries(INVOICES)) == 2


def test_submit_is_refused_while_same_kind_is_submitting(controller_factory):
    controller = None

    class ReentrantGateway:
        def __init__(self):
            self.calls = 0
            self.nested = None

        def send(self, payload):
            self.calls += 1
            assert controller.state(INVOICES) is SubmissionState.SUBMITTING
            assert not controller.can_submit(INVOICES)
            self.nested = controller.submit(INVOICES, "Dana Levi", VALID_PHONE)
            return SubmissionOutcome.success(200)

    gateway = ReentrantGateway()
    controller = controller_factory(gateway, invoices=1)

    result = controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    assert gateway.calls == 1
    assert "submit" in gateway.nested.errors
    assert result.succeeded


def test_other_kind_can_submit_while_one_is_submitting(controller_factory):
    controller = None
    seen = {}

    class Gateway:
        def send(self, payload):
            if payload.document_type == "invoices":
                seen["nested"] = controller.submit(CERTIFICATES, "Dana Levi", VALID_PHONE)
            return SubmissionOutcome.success(200)

    controller = controller_factory(Gateway(), invoices=1, certificates=1)

    controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    assert seen["nested"].succeeded
    assert controller.state(INVOICES) is SubmissionState.SUCCESS
    assert controller.state(CERTIFICATES) is SubmissionState.SUCCESS


def test_unexpected_gateway_exception_moves_kind_to_error(controller_factory):
    class ExplodingGateway:
        def send(self, payload):
            raise RuntimeError("boom")

    controller = controller_factory(ExplodingGateway(), invoices=2)

    with pytest.raises(RuntimeError):
        controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    assert controller.state(INVOICES) is SubmissionState.ERROR
    assert len(controller.entries(INVOICES)) == 2


def test_acknowledge_returns_settled_kind_to_idle(succeeding_gateway, controller_factory):
    controller = controller_factory(succeeding_gateway, invoices=1)
    controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    controller.acknowledge(INVOICES)
    controller.acknowledge(CERTIFICATES)

    assert controller.state(INVOICES) is SubmissionState.IDLE
    assert controller.state(CERTIFICATES) is SubmissionState.IDLE


def test_transitions_are_logged(succeeding_gateway, controller_factory, caplog):
    controller = controller_factory(succeeding_gateway, certificates=1)
    caplog.set_level("INFO")

    controller.submit(CERTIFICATES, "Dana Levi", VALID_PHONE)

    assert "certificates: idle -> submitting" in caplog.messages
    assert "certificates: submitting -> success" in caplog.messages


def test_entries_added_after_submission_are_independent(succeeding_gateway, controller_factory):
    controller = controller_factory(succeeding_gateway, invoices=1)
    controller.submit(INVOICES, "Dana Levi", VALID_PHONE)

    controller.add_invoice(None, None, make_attachment("next.pdf"))

    assert len(controller.entries(INVOICES)) == 1
    assert controller.can_submit(INVOICES)


def test_combined_refusal_reports_state_of_busy_kind(controller_factory):
    controller = None
    seen = {}

    class Gateway:
        def send(self, payload):
            seen["nested"] = controller.submit([INVOICES, CERTIFICATES], "Dana Levi", VALID_PHONE)
            return SubmissionOutcome.success(200)

    controller = controller_factory(Gateway(), invoices=1, certificates=1)

    controller.submit(CERTIFICATES, "Dana Levi", VALID_PHONE)

    nested = seen["nested"]
    assert "submit" in nested.errors
    assert nested.state is SubmissionState.SUBMITTING
    assert len(controller.entries(INVOICES)) == 1


def test_combined_refusal_reports_state_of_empty_kind(failing_gateway, controller_factory):
    controller = controller_factory(failing_gateway, invoices=1)
    controller.submit(INVOICES, "Dana Levi", VALID_PHONE)
    assert controller.state(INVOICES) is SubmissionState.ERROR

    result = controller.submit([INVOICES, CERTIFICATES], "Dana Levi", VALID_PHONE)

    assert set(result.errors) == {CERTIFICATES.value}
    assert result.state is SubmissionState.IDLE
