"""Streamlit Web UI for resume-builder.

Two pages behind the session gate:
  /login      passwordless sign-in (magic link sent by email)
  /dashboard  resume form, template picker, AI tailoring, PDF preview/export
"""

from __future__ import annotations

import asyncio
import json
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY", "SUPABASE_URL", "SUPABASE_ANON_KEY"):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from resume_builder.auth.login import LoginValidationError, request_magic_link
from resume_builder.auth.route_gate import is_gated, resolve_route
from resume_builder.clients.auth_client import AuthError, MagicLinkAuth
from resume_builder.clients.llm_client import LLMClient
from resume_builder.config import load_config
from resume_builder.models.events import (
    EntryAdded,
    EntryFieldChanged,
    EntryRemoved,
    ListItemAdded,
    ListItemRemoved,
    PersonalFieldChanged,
)
from resume_builder.pipeline.text_tailor import TextTailor
from resume_builder.session.store import NotificationKind, SessionStore
from resume_builder.templates.styles import get_template_style, list_template_styles

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Builder",
    page_icon=":page_facing_up:",
    layout="wide",
)

CONFIG = load_config()

_TOAST_ICONS = {
    NotificationKind.SUCCESS: ":material/check_circle:",
    NotificationKind.ERROR: ":material/error:",
    NotificationKind.INFO: ":material/info:",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_auth() -> MagicLinkAuth:
    if "auth" not in st.session_state:
        try:
            st.session_state.auth = MagicLinkAuth()
        except AuthError as e:
            st.error(f"Auth client setup failed, check SUPABASE_URL / SUPABASE_ANON_KEY: {e}")
            st.stop()
    return st.session_state.auth


def _get_store() -> SessionStore:
    """The editing session, created when the dashboard first mounts."""
    if "store" not in st.session_state:
        st.session_state.store = SessionStore(
            template=CONFIG.export.default_template,
            notification_seconds=CONFIG.export.notification_seconds,
            pdf_filename=CONFIG.export.pdf_filename,
        )
        st.session_state.form_rev = 0
    return st.session_state.store


def _drop_store() -> None:
    store = st.session_state.pop("store", None)
    if store is not None:
        store.close()


def _bump_form() -> None:
    """Re-key form widgets so they re-read values from the document."""
    st.session_state.form_rev = st.session_state.get("form_rev", 0) + 1


def _wkey(*parts: object) -> str:
    return "_".join(str(p) for p in (st.session_state.get("form_rev", 0), *parts))


def _show_notifications(store: SessionStore) -> None:
    for note in store.pop_notifications():
        st.toast(note.message, icon=_TOAST_ICONS[note.kind])


def _navigate(path: str) -> None:
    st.query_params["page"] = path.lstrip("/")
    st.rerun()


def _current_path() -> str:
    return "/" + st.query_params.get("page", CONFIG.auth.home_path.lstrip("/"))


def _copy_to_clipboard(text: str) -> None:
    components.html(
        f"<script>window.parent.navigator.clipboard.writeText({json.dumps(text)});</script>",
        height=0,
    )


def _run(coro):
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Widget callbacks: every edit becomes one event
# ---------------------------------------------------------------------------


def _on_personal(field: str, key: str) -> None:
    _get_store().dispatch(PersonalFieldChanged(field, st.session_state[key]))


def _on_entry(section: str, index: int, field: str, key: str) -> None:
    _get_store().dispatch(EntryFieldChanged(section, index, field, st.session_state[key]))


def _on_add_entry(section: str) -> None:
    _get_store().dispatch(EntryAdded(section))
    _bump_form()


def _on_remove_entry(section: str, index: int) -> None:
    _get_store().dispatch(EntryRemoved(section, index))
    _bump_form()


def _on_add_item(section: str, key: str) -> None:
    _get_store().dispatch(ListItemAdded(section, st.session_state[key]))
    st.session_state[key] = ""


def _on_remove_item(section: str, value: str) -> None:
    _get_store().dispatch(ListItemRemoved(section, value))


# ---------------------------------------------------------------------------
# Login page
# ---------------------------------------------------------------------------


def _login_page(auth: MagicLinkAuth) -> None:
    st.markdown("## Resume Builder")
    st.caption("No password needed. We'll send a secure link to your email.")

    email = st.text_input("Email address", placeholder="you@example.com")
    if st.button("Send magic link", type="primary"):
        try:
            sent_to = request_magic_link(auth, email, CONFIG.auth.redirect_url)
        except LoginValidationError as e:
            st.error(str(e))
        except AuthError:
            st.toast("Failed to send magic link. Please try again.", icon=_TOAST_ICONS[NotificationKind.ERROR])
        else:
            st.success(f"Check your email! A sign-in link was sent to {sent_to}.")


# ---------------------------------------------------------------------------
# Dashboard sections
# ---------------------------------------------------------------------------


def _personal_section(store: SessionStore) -> None:
    st.subheader("Personal Information")
    p = store.document.personal
    fields = [
        ("full_name", "Full name"),
        ("title", "Professional title"),
        ("email", "Email"),
        ("phone", "Phone"),
        ("location", "Location"),
        ("website", "Website"),
    ]
    cols = st.columns(2)
    for i, (field, label) in enumerate(fields):
        key = _wkey("personal", field)
        with cols[i % 2]:
            st.text_input(
                label,
                value=getattr(p, field),
                key=key,
                on_change=_on_personal,
                args=(field, key),
            )
    key = _wkey("personal", "summary")
    st.text_area(
        "Professional summary",
        value=p.summary,
        key=key,
        on_change=_on_personal,
        args=("summary", key),
    )


def _experience_section(store: SessionStore) -> None:
    st.subheader("Experience")
    for i, exp in enumerate(store.document.experience):
        with st.container(border=True):
            cols = st.columns(2)
            for j, (field, label) in enumerate(
                [("company", "Company"), ("position", "Position"),
                 ("start_date", "Start date"), ("end_date", "End date")]
            ):
                key = _wkey("experience", i, field)
                with cols[j % 2]:
                    st.text_input(
                        label,
                        value=getattr(exp, field),
                        key=key,
                        on_change=_on_entry,
                        args=("experience", i, field, key),
                        disabled=(field == "end_date" and exp.current),
                    )
            key = _wkey("experience", i, "current")
            st.checkbox(
                "I currently work here",
                value=exp.current,
                key=key,
                on_change=_on_entry,
                args=("experience", i, "current", key),
            )
            key = _wkey("experience", i, "description")
            st.text_area(
                "Description",
                value=exp.description,
                key=key,
                on_change=_on_entry,
                args=("experience", i, "description", key),
            )
            _tailor_description_action(store, i)
            st.button(
                "Remove",
                key=_wkey("experience", i, "remove"),
                on_click=_on_remove_entry,
                args=("experience", i),
            )
    st.button("Add experience", on_click=_on_add_entry, args=("experience",))


def _education_section(store: SessionStore) -> None:
    st.subheader("Education")
    for i, edu in enumerate(store.document.education):
        with st.container(border=True):
            cols = st.columns(2)
            for j, (field, label) in enumerate(
                [("institution", "Institution"), ("degree", "Degree"),
                 ("field_of_study", "Field of study"), ("gpa", "GPA"),
                 ("start_date", "Start date"), ("end_date", "End date")]
            ):
                key = _wkey("education", i, field)
                with cols[j % 2]:
                    st.text_input(
                        label,
                        value=getattr(edu, field),
                        key=key,
                        on_change=_on_entry,
                        args=("education", i, field, key),
                    )
            st.button(
                "Remove",
                key=_wkey("education", i, "remove"),
                on_click=_on_remove_entry,
                args=("education", i),
            )
    st.button("Add education", on_click=_on_add_entry, args=("education",))


def _list_section(store: SessionStore, section: str, title: str, placeholder: str) -> None:
    st.subheader(title)
    key = f"{section}_input"
    st.text_input(
        f"Add {section[:-1]}",
        key=key,
        placeholder=placeholder,
        on_change=_on_add_item,
        args=(section, key),
    )
    items = getattr(store.document, section)
    for item in items:
        cols = st.columns([6, 1])
        cols[0].markdown(f"- {item}")
        cols[1].button(
            "Remove",
            key=f"remove_{section}_{item}",
            on_click=_on_remove_item,
            args=(section, item),
        )


def _make_tailor() -> TextTailor:
    llm = LLMClient(timeout=CONFIG.llm.timeout, max_attempts=CONFIG.llm.max_attempts)
    return TextTailor(
        llm,
        model=CONFIG.llm.model,
        temperature=CONFIG.llm.temperature,
        max_tokens=CONFIG.llm.max_tokens,
    )


def _tailor_description_action(store: SessionStore, index: int) -> None:
    with st.expander("Tailor description with AI"):
        instruction = st.text_input(
            "Tailor this role for",
            key=_wkey("experience", index, "tailor_input"),
            placeholder="e.g. a platform engineering role",
        )
        if st.button("Tailor description", key=_wkey("experience", index, "tailor")):
            with st.spinner("Tailoring..."):
                if _run(store.tailor_description(_make_tailor(), index, instruction)):
                    _bump_form()
                    st.rerun()


def _ai_section(store: SessionStore) -> None:
    st.subheader("AI Tailoring")
    instruction = st.text_area(
        "What should your resume be tailored for?",
        placeholder="e.g. a senior backend role at a fintech startup",
    )
    if st.button("Tailor summary"):
        with st.spinner("Tailoring..."):
            if _run(store.tailor_summary(_make_tailor(), instruction)):
                _bump_form()
                st.rerun()


def _sidebar(store: SessionStore, auth: MagicLinkAuth) -> None:
    with st.sidebar:
        st.title("Resume Builder")
        styles = list_template_styles()
        ids = [s.id for s in styles]
        chosen = st.radio(
            "Template",
            ids,
            index=ids.index(store.template),
            format_func=lambda t: get_template_style(t).name,
        )
        store.select_template(chosen)
        st.caption(get_template_style(chosen).description)

        st.divider()
        if st.button("Reset form"):
            st.session_state.confirm_reset = True
        if st.session_state.get("confirm_reset"):
            st.warning("Are you sure you want to reset all fields?")
            c1, c2 = st.columns(2)
            if c1.button("Yes, reset"):
                store.reset()
                _bump_form()
                st.session_state.confirm_reset = False
                st.rerun()
            if c2.button("Cancel"):
                st.session_state.confirm_reset = False
                st.rerun()

        st.divider()
        if st.button("Log out"):
            try:
                auth.sign_out()
            except AuthError:
                logger.warning("Sign-out failed", exc_info=True)
            _drop_store()
            st.toast("Logged out successfully!", icon=_TOAST_ICONS[NotificationKind.INFO])
            _navigate(CONFIG.auth.login_path)


def _export_section(store: SessionStore) -> None:
    st.subheader("Export")
    cols = st.columns(2)
    if cols[0].button("Generate PDF", type="primary"):
        store.export_pdf()
    if cols[1].button("Copy as text"):
        text = store.copy_text()
        _copy_to_clipboard(text)
        st.code(text, language=None)

    preview = store.refresh_preview()
    if preview is not None:
        st.download_button(
            label="Download PDF",
            data=preview.export.content,
            file_name=preview.export.filename,
            mime="application/pdf",
        )
        st.markdown(
            f'<iframe src="{preview.data_url}" title="PDF Preview" width="100%" height="800" '
            'style="border: none;"></iframe>',
            unsafe_allow_html=True,
        )


def _dashboard_page(auth: MagicLinkAuth) -> None:
    store = _get_store()
    _sidebar(store, auth)

    st.header("Resume Builder Dashboard")
    form_col, preview_col = st.columns([3, 2])
    with form_col:
        _personal_section(store)
        _experience_section(store)
        _education_section(store)
        _list_section(store, "skills", "Skills", "e.g. Python")
        _list_section(store, "achievements", "Achievements", "e.g. Employee of the year 2023")
        _ai_section(store)
    with preview_col:
        _export_section(store)

    _show_notifications(store)


# ---------------------------------------------------------------------------
# Main router
# ---------------------------------------------------------------------------

auth = _get_auth()

token_hash = st.query_params.get("token_hash")
if token_hash:
    try:
        auth.verify_link(token_hash)
    except AuthError:
        st.error("This sign-in link is invalid or has expired.")
    del st.query_params["token_hash"]

path = _current_path()
if not is_gated(path, CONFIG.auth):
    _navigate(CONFIG.auth.home_path)

decision = resolve_route(path, auth.has_session(), CONFIG.auth)
if not decision.allowed:
    _navigate(decision.redirect_to)

if path.startswith(CONFIG.auth.login_path):
    _login_page(auth)
else:
    _dashboard_page(auth)
