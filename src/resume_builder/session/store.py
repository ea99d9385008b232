"""Per-view editing state: document, template, notifications and PDF preview.

A ``SessionStore`` is created when the editing view mounts and closed when it
goes away (logout, or leaving the page). Nothing here is module-global.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from resume_builder.export.pdf_renderer import PdfExport, PdfRenderError, render_pdf
from resume_builder.export.plain_text import to_plain_text
from resume_builder.models.events import (
    DocumentReset,
    EntryFieldChanged,
    PersonalFieldChanged,
    ResumeEvent,
    apply_event,
)
from resume_builder.models.resume import ResumeDocument
from resume_builder.pipeline.text_tailor import TailoringError, TextTailor
from resume_builder.templates.styles import DEFAULT_TEMPLATE, TemplateId, get_template_style

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str
    expires_at: float

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


class PdfPreview:
    """Inline-preview handle for an export; release() drops the embedded data."""

    def __init__(self, export: PdfExport):
        self.export = export
        self._data_url: str | None = export.data_url()

    @property
    def data_url(self) -> str | None:
        return self._data_url

    @property
    def released(self) -> bool:
        return self._data_url is None

    def release(self) -> None:
        self._data_url = None


class SessionStore:
    def __init__(
        self,
        template: TemplateId | str = DEFAULT_TEMPLATE,
        notification_seconds: float = 3.0,
        pdf_filename: str = "resume.pdf",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.document = ResumeDocument.blank_form()
        self.template = get_template_style(template).id
        self.notification_seconds = notification_seconds
        self.pdf_filename = pdf_filename
        self._clock = clock
        self._notifications: list[Notification] = []
        self._preview: PdfPreview | None = None
        self._export_seq = 0
        self.closed = False

    def __enter__(self) -> SessionStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -- editing ----------------------------------------------------------

    def dispatch(self, event: ResumeEvent) -> None:
        apply_event(self.document, event)
        self.release_preview()

    def select_template(self, template: TemplateId | str) -> None:
        template_id = get_template_style(template).id
        if template_id != self.template:
            self.template = template_id
            self.release_preview()

    def reset(self) -> None:
        self.dispatch(DocumentReset())
        self.notify(NotificationKind.INFO, "Form reset successfully!")

    # -- notifications ----------------------------------------------------

    def notify(self, kind: NotificationKind, message: str) -> Notification:
        note = Notification(kind, message, self._clock() + self.notification_seconds)
        self._notifications.append(note)
        return note

    def active_notifications(self) -> list[Notification]:
        now = self._clock()
        self._notifications = [n for n in self._notifications if not n.expired(now)]
        return list(self._notifications)

    def pop_notifications(self) -> list[Notification]:
        pending = self.active_notifications()
        self._notifications.clear()
        return pending

    # -- export -----------------------------------------------------------

    @property
    def preview(self) -> PdfPreview | None:
        return self._preview

    def begin_export(self) -> int:
        self._export_seq += 1
        return self._export_seq

    def finish_export(self, token: int, export: PdfExport) -> bool:
        """Accept an export's result unless a newer export has started."""
        if token != self._export_seq:
            logger.debug("Discarding superseded export #%d", token)
            return False
        self.release_preview()
        self._preview = PdfPreview(export)
        return True

    def release_preview(self) -> None:
        if self._preview is not None:
            self._preview.release()
            self._preview = None

    def _render(self) -> PdfExport | None:
        token = self.begin_export()
        export = render_pdf(self.document, self.template, filename=self.pdf_filename)
        if not self.finish_export(token, export):
            return None
        return export

    def export_pdf(self) -> PdfExport | None:
        try:
            export = self._render()
        except PdfRenderError:
            self.notify(NotificationKind.ERROR, "Failed to generate PDF. Please try again.")
            return None
        if export is not None:
            self.notify(NotificationKind.SUCCESS, "PDF generated successfully!")
        return export

    def refresh_preview(self) -> PdfPreview | None:
        """Re-render the preview if an edit or template change made it stale.

        Silent: a render failure leaves no preview and no notification.
        """
        if self._preview is None:
            try:
                self._render()
            except PdfRenderError:
                logger.warning("Preview render failed", exc_info=True)
        return self._preview

    def copy_text(self) -> str:
        text = to_plain_text(self.document)
        self.notify(NotificationKind.SUCCESS, "Resume copied to clipboard!")
        return text

    # -- AI tailoring -----------------------------------------------------

    async def tailor_summary(self, tailor: TextTailor, instruction: str) -> bool:
        try:
            text = await tailor.tailor(instruction)
        except TailoringError as e:
            self.notify(NotificationKind.ERROR, str(e))
            return False
        self.dispatch(PersonalFieldChanged("summary", text))
        self.notify(NotificationKind.SUCCESS, "Summary tailored!")
        return True

    async def tailor_description(self, tailor: TextTailor, index: int, instruction: str) -> bool:
        try:
            text = await tailor.tailor(instruction)
        except TailoringError as e:
            self.notify(NotificationKind.ERROR, str(e))
            return False
        self.dispatch(EntryFieldChanged("experience", index, "description", text))
        self.notify(NotificationKind.SUCCESS, "Description tailored!")
        return True

    # -- lifecycle --------------------------------------------------------

    def close(self) -> None:
        self.release_preview()
        self._notifications.clear()
        self.closed = True
