"""Streamlit page where a professional uploads invoices and certificates."""
from pathlib import Path
from typing import Dict

import streamlit as st

# Allow running via "streamlit run intake/ui/app.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from intake.core.logging import configure_logging
from intake.core.models import DocumentKind, SubmissionState, SubmitResult
from intake.session.controller import SessionController
from intake.submission.gateway import SubmissionGateway
from intake.ui.forms import (
    TAB_LABELS,
    attachment_from_upload,
    entries_to_rows,
    entry_subtitle,
    entry_title,
    issue_date_value,
    list_heading,
    notice_outlived_by_edit,
    submit_label,
)

ACCEPTED_EXTENSIONS = ["pdf", "jpg", "jpeg", "png"]


def _rerun_app() -> None:
    """Trigger a Streamlit rerun, compatible with newer and older APIs."""

    rerun = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if not rerun:
        raise RuntimeError("Streamlit does not expose a rerun helper.")
    rerun()


def _session_controller() -> SessionController:
    """Create the controller once per browser session."""

    if "controller" not in st.session_state:
        st.session_state.controller = SessionController(SubmissionGateway.from_settings())
    return st.session_state.controller


def _form_nonce(kind: DocumentKind) -> int:
    return st.session_state.setdefault(f"{kind.value}_form_nonce", 0)


def _reset_entry_form(kind: DocumentKind) -> None:
    """Give the add-entry widgets fresh keys so they render empty."""

    st.session_state[f"{kind.value}_form_nonce"] = _form_nonce(kind) + 1
    st.session_state.pop(f"{kind.value}_errors", None)
    if notice_outlived_by_edit(st.session_state.get("last_result"), kind):
        st.session_state.pop("last_result", None)


def _show_field_error(errors: Dict[str, str], field: str) -> None:
    if field in errors:
        st.error(errors[field])


def _render_notification(result: SubmitResult) -> None:
    renderer = {"success": st.success, "warning": st.warning, "error": st.error}.get(result.level, st.info)
    text = f"**{result.title}**  \n{result.message}" if result.title else result.message
    renderer(text)


def _professional_details() -> Dict[str, str]:
    st.subheader("פרטי בעל המקצוע")
    errors = st.session_state.get("identity_errors", {})
    cols = st.columns(2)
    with cols[0]:
        name = st.text_input("שם בעל המקצוע", key="professional_name", placeholder="הזן את שמך")
        _show_field_error(errors, "professionalName")
    with cols[1]:
        phone = st.text_input(
            "טלפון בעל המקצוע", key="professional_phone", placeholder="הזן את מספר הטלפון שלך"
        )
        _show_field_error(errors, "professionalPhone")
    return {"name": name, "phone": phone}


def _entry_list(controller: SessionController, kind: DocumentKind) -> None:
    entries = controller.entries(kind)
    if not entries:
        return

    st.markdown(f"#### {list_heading(kind, len(entries))}")
    locked = controller.state(kind) is SubmissionState.SUBMITTING
    for index, entry in enumerate(entries):
        row = st.columns([5, 1])
        with row[0]:
            st.markdown(f"**{entry_title(entry)}**")
            subtitle = entry_subtitle(entry)
            if subtitle:
                st.caption(subtitle)
            st.caption(f"📄 {entry.file.name}")
        with row[1]:
            if st.button("🗑️", key=f"remove_{kind.value}_{index}", disabled=locked, help="הסר רשומה"):
                controller.remove(kind, index)
                _rerun_app()


def _invoice_form(controller: SessionController) -> None:
    nonce = _form_nonce(DocumentKind.INVOICES)
    errors = st.session_state.get("invoices_errors", {})

    st.markdown("#### הוספת רשומה חדשה")
    cols = st.columns(2)
    with cols[0]:
        client_name = st.text_input("שם הלקוח", key=f"client_name_{nonce}", placeholder="הזן את שם הלקוח")
        _show_field_error(errors, "clientName")
    with cols[1]:
        client_phone = st.text_input("טלפון הלקוח", key=f"client_phone_{nonce}", placeholder="הזן מספר טלפון")
        _show_field_error(errors, "clientPhone")
    upload = st.file_uploader(
        "העלאת חשבונית (PDF, JPG, PNG עד 5MB)", type=ACCEPTED_EXTENSIONS, key=f"invoice_file_{nonce}"
    )
    _show_field_error(errors, "invoice")

    if st.button("➕ הוסף רשומה", key="add_invoice"):
        found = controller.add_invoice(client_name, client_phone, attachment_from_upload(upload))
        if found:
            st.session_state["invoices_errors"] = found
        else:
            _reset_entry_form(DocumentKind.INVOICES)
        _rerun_app()


def _certificate_form(controller: SessionController) -> None:
    nonce = _form_nonce(DocumentKind.CERTIFICATES)
    errors = st.session_state.get("certificates_errors", {})

    st.markdown("#### הוספת תעודה חדשה")
    cols = st.columns(2)
    with cols[0]:
        certificate_name = st.text_input(
            "שם התעודה", key=f"certificate_name_{nonce}", placeholder="הזן את שם התעודה"
        )
        _show_field_error(errors, "certificateName")
    with cols[1]:
        issue_date = st.date_input("תאריך הנפקה", value=None, key=f"issue_date_{nonce}")
        _show_field_error(errors, "issueDate")
    upload = st.file_uploader(
        "העלאת תעודה (PDF, JPG, PNG עד 5MB)", type=ACCEPTED_EXTENSIONS, key=f"certificate_file_{nonce}"
    )
    _show_field_error(errors, "certificate")

    if st.button("➕ הוסף תעודה", key="add_certificate"):
        found = controller.add_certificate(
            certificate_name, issue_date_value(issue_date), attachment_from_upload(upload)
        )
        if found:
            st.session_state["certificates_errors"] = found
        else:
            _reset_entry_form(DocumentKind.CERTIFICATES)
        _rerun_app()


def _submit(controller: SessionController, kinds, details: Dict[str, str]) -> None:
    result = controller.submit(kinds, details["name"], details["phone"])
    st.session_state["last_result"] = result
    identity_errors = {
        key: value for key, value in result.errors.items() if key.startswith("professional")
    }
    st.session_state["identity_errors"] = identity_errors
    _rerun_app()


def _submit_button(controller: SessionController, kind: DocumentKind, details: Dict[str, str]) -> None:
    submitting = controller.state(kind) is SubmissionState.SUBMITTING
    label = submit_label(kind, len(controller.entries(kind)), submitting=submitting)
    if st.button(
        label,
        key=f"submit_{kind.value}",
        type="primary",
        disabled=not controller.can_submit(kind),
        use_container_width=True,
    ):
        _submit(controller, kind, details)


def _outcome_panel(controller: SessionController) -> None:
    result = st.session_state.get("last_result")
    if result is None:
        return

    _render_notification(result)
    if st.button("סגור", key="dismiss_result"):
        for kind in result.kinds:
            controller.acknowledge(kind)
        st.session_state.pop("last_result", None)
        _rerun_app()


def main() -> None:
    """Render the document intake page."""

    st.set_page_config(page_title="העלאת מסמכים", layout="centered")
    if "logging_configured" not in st.session_state:
        configure_logging()
        st.session_state.logging_configured = True

    controller = _session_controller()

    st.title("העלאת חשבוניות ותעודות")
    details = _professional_details()
    _outcome_panel(controller)

    invoices_tab, certificates_tab = st.tabs(
        [TAB_LABELS[DocumentKind.INVOICES], TAB_LABELS[DocumentKind.CERTIFICATES]]
    )
    with invoices_tab:
        st.caption("באזור זה ניתן להעלות חשבוניות שביצעתם עבור לקוחות. ניתן להוסיף מספר חשבוניות בו-זמנית.")
        _entry_list(controller, DocumentKind.INVOICES)
        _invoice_form(controller)
        st.divider()
        _submit_button(controller, DocumentKind.INVOICES, details)
    with certificates_tab:
        st.caption("באזור זה ניתן להעלות תעודות הסמכה מקצועיות ורישיונות.")
        _entry_list(controller, DocumentKind.CERTIFICATES)
        _certificate_form(controller)
        st.divider()
        _submit_button(controller, DocumentKind.CERTIFICATES, details)

    with st.sidebar:
        st.subheader("סיכום המסמכים")
        for kind in DocumentKind:
            rows = entries_to_rows(controller.entries(kind))
            st.caption(list_heading(kind, len(rows)))
            if rows:
                st.dataframe(rows, use_container_width=True, hide_index=True)
        both_ready = all(controller.can_submit(kind) for kind in DocumentKind)
        if st.button("שלח את כל המסמכים", key="submit_both", disabled=not both_ready):
            _submit(controller, tuple(DocumentKind), details)


if __name__ == "__main__":
    main()
