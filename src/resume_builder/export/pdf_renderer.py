"""Draw laid-out resume pages into a PDF with fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path

from fpdf import FPDF

from resume_builder.export.layout import A4, FontStyle, PageGeometry, RenderedPage, paginate
from resume_builder.models.resume import ResumeDocument
from resume_builder.templates.styles import FontSpec, TemplateId, get_template_style

logger = logging.getLogger(__name__)

# Fixed so that identical input renders to identical bytes
PDF_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)

# TTF search paths per family and fpdf2 style (macOS, Linux, Windows)
_FONT_PATHS: dict[str, dict[str, list[str]]] = {
    "comic sans ms": {
        "": [
            "/System/Library/Fonts/Supplemental/Comic Sans MS.ttf",
            "/usr/share/fonts/truetype/msttcorefonts/Comic_Sans_MS.ttf",
            "/usr/share/fonts/truetype/msttcorefonts/comic.ttf",
            "C:/Windows/Fonts/comic.ttf",
        ],
        "B": [
            "/System/Library/Fonts/Supplemental/Comic Sans MS Bold.ttf",
            "/usr/share/fonts/truetype/msttcorefonts/Comic_Sans_MS_Bold.ttf",
            "/usr/share/fonts/truetype/msttcorefonts/comicbd.ttf",
            "C:/Windows/Fonts/comicbd.ttf",
        ],
        "I": [
            "/usr/share/fonts/truetype/msttcorefonts/comici.ttf",
            "C:/Windows/Fonts/comici.ttf",
        ],
    },
}

# Core PDF fonts only cover Latin-1
_CORE_FONT_SUBSTITUTIONS = {
    "\u2022": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
}


class PdfRenderError(RuntimeError):
    """fpdf2 failed to produce the PDF document."""


@dataclass
class PdfExport:
    """A rendered resume: PDF bytes plus the page layout they were drawn from."""

    content: bytes
    pages: list[RenderedPage]
    template: TemplateId
    filename: str = "resume.pdf"

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:application/pdf;base64,{encoded}"


def _find_font_files(family: str) -> dict[str, str]:
    """Map fpdf2 style ("", "B", "I") to an installed TTF for the family."""
    found: dict[str, str] = {}
    for style, paths in _FONT_PATHS.get(family.lower(), {}).items():
        for path in paths:
            if Path(path).exists():
                found[style] = path
                break
    return found


def resolve_font(pdf: FPDF, font: FontSpec) -> str:
    """Register the template font with fpdf2 and return the family to use.

    Falls back to the core font when the preferred family is not installed
    or fails to load.
    """
    if font.is_core:
        return font.family.lower()
    files = _find_font_files(font.family)
    if "" not in files:
        logger.info("Font %r not installed, falling back to %s", font.family, font.fallback)
        return font.fallback
    try:
        for style in ("", "B", "I"):
            pdf.add_font(font.family, style, files.get(style, files[""]))
    except Exception:
        logger.warning("Failed to load font %r, falling back to %s", font.family, font.fallback)
        return font.fallback
    return font.family


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    for char, replacement in _CORE_FONT_SUBSTITUTIONS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _new_pdf(geometry: PageGeometry, title: str) -> FPDF:
    pdf = FPDF(orientation="portrait", unit="mm", format=(geometry.width, geometry.height))
    pdf.set_auto_page_break(auto=False)
    pdf.creation_date = PDF_CREATION_DATE
    pdf.set_title(title)
    pdf.add_page()
    return pdf


def _measurer(pdf: FPDF, family: str):
    def measure(text: str, style: FontStyle, size: float) -> float:
        pdf.set_font(family, style.fpdf_style, size)
        return pdf.get_string_width(_safe_text(text, pdf))

    return measure


def _draw_pages(pdf: FPDF, pages: list[RenderedPage], family: str) -> None:
    for page in pages:
        if page.number > 1:
            pdf.add_page()
        for line in page.lines:
            if not line.text:
                continue
            pdf.set_font(family, line.style.fpdf_style, line.font_size)
            pdf.set_text_color(*line.color)
            pdf.text(line.x, line.y, _safe_text(line.text, pdf))
        for rule in page.rules:
            pdf.set_line_width(rule.width)
            pdf.line(rule.x1, rule.y, rule.x2, rule.y)


def render_pdf(
    document: ResumeDocument,
    template: TemplateId | str = TemplateId.MODERN,
    geometry: PageGeometry = A4,
    filename: str = "resume.pdf",
) -> PdfExport:
    """Lay out the resume with the template's style and draw it as a PDF."""
    style = get_template_style(template)
    pdf = _new_pdf(geometry, document.personal.full_name or "Resume")
    family = resolve_font(pdf, style.font)

    pages = paginate(document, style, _measurer(pdf, family), geometry)
    _draw_pages(pdf, pages, family)

    buf = BytesIO()
    try:
        pdf.output(buf)
    except Exception as e:
        logger.error("PDF output failed", exc_info=True)
        raise PdfRenderError("Failed to generate PDF") from e

    logger.info("Rendered %s resume: %d page(s)", style.id.value, len(pages))
    return PdfExport(
        content=buf.getvalue(),
        pages=pages,
        template=style.id,
        filename=filename,
    )
