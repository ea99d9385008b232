"""PDF and plain-text export for resume-builder."""
from resume_builder.export.pdf_renderer import (
    PdfExport,
    PdfRenderError,
    render_pdf,
)
from resume_builder.export.plain_text import to_plain_text

__all__ = ["PdfExport", "PdfRenderError", "render_pdf", "to_plain_text"]
