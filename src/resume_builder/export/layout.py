"""Lay a resume out onto fixed-size pages of positioned text.

The layout is a single pass with a vertical cursor. Text is wrapped to the
usable width, each wrapped line is placed at the cursor, and a new page is
opened whenever the next line would cross the bottom margin. All units are
millimetres on an A4 portrait page.

Measuring text is delegated to a ``TextMeasurer`` so the same layout can be
driven by real font metrics (see ``pdf_renderer``) or by a fixed-width
stand-in in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from resume_builder.models.resume import ResumeDocument
from resume_builder.templates.styles import BLACK, RGB, TemplateStyle


class FontStyle(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"

    @property
    def fpdf_style(self) -> str:
        return {"normal": "", "bold": "B", "italic": "I"}[self.value]


TextMeasurer = Callable[[str, FontStyle, float], float]

# Font sizes (pt) per content role
NAME_SIZE = 20
TITLE_SIZE = 12
HEADER_SIZE = 14
ENTRY_HEADING_SIZE = 12
BODY_SIZE = 10

# Vertical gaps (mm)
PERSONAL_GAP = 5
SECTION_GAP = 10
HEADER_GAP = 2
RULE_GAP = 5
BLOCK_GAP = 5

RULE_WIDTH = 0.5
BULLET = "•"

NAME_PLACEHOLDER = "Your Name"
TITLE_PLACEHOLDER = "Professional Title"


@dataclass(frozen=True)
class PageGeometry:
    width: float = 210.0
    height: float = 297.0
    margin: float = 10.0
    text_width: float = 190.0
    line_height: float = 7.0

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margin

    @property
    def right_edge(self) -> float:
        return self.width - self.margin


A4 = PageGeometry()


@dataclass(frozen=True)
class TextLine:
    text: str
    x: float
    y: float  # baseline
    font_size: float
    style: FontStyle = FontStyle.NORMAL
    color: RGB = BLACK


@dataclass(frozen=True)
class Rule:
    x1: float
    x2: float
    y: float
    width: float = RULE_WIDTH


@dataclass
class RenderedPage:
    number: int
    lines: list[TextLine] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    @property
    def text(self) -> list[str]:
        return [line.text for line in self.lines]


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """Word-wrap text at whitespace so lines fit ``max_width``.

    Explicit newlines start a new line. Words are never split; a word wider
    than ``max_width`` gets a line of its own. Blank text gives one empty line.
    """
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if measure(candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


class Paginator:
    """Running-cursor page builder."""

    def __init__(
        self,
        style: TemplateStyle,
        measure: TextMeasurer,
        geometry: PageGeometry = A4,
    ):
        self.style = style
        self.measure = measure
        self.geometry = geometry
        self.pages: list[RenderedPage] = [RenderedPage(number=1)]
        self.y = geometry.margin

    @property
    def page(self) -> RenderedPage:
        return self.pages[-1]

    def new_page(self) -> None:
        self.pages.append(RenderedPage(number=len(self.pages) + 1))
        self.y = self.geometry.margin

    def advance(self, amount: float) -> None:
        self.y += amount

    def add_text(
        self,
        text: str,
        size: float,
        style: FontStyle = FontStyle.NORMAL,
        color: RGB = BLACK,
    ) -> None:
        geo = self.geometry
        wrapped = wrap_text(text, geo.text_width, lambda s: self.measure(s, style, size))
        for line in wrapped:
            if self.y + geo.line_height > geo.bottom_limit:
                self.new_page()
            self.page.lines.append(TextLine(line, geo.margin, self.y, size, style, color))
            self.y += geo.line_height

    def add_section_header(self, section: str) -> None:
        title = self.style.section_title(section).upper()
        geo = self.geometry
        # header, gap and rule stay together on one page
        if self.style.header_rule and self.y + geo.line_height + HEADER_GAP > geo.bottom_limit:
            self.new_page()
        self.add_text(title, HEADER_SIZE, FontStyle.BOLD, self.style.accent_color)
        self.advance(HEADER_GAP)
        if self.style.header_rule:
            self.page.rules.append(Rule(self.geometry.margin, self.geometry.right_edge, self.y))
            self.advance(RULE_GAP)


def contact_line(document: ResumeDocument) -> str:
    p = document.personal
    parts = [
        p.email and f"Email: {p.email}",
        p.phone and f"Phone: {p.phone}",
        p.location and f"Location: {p.location}",
        p.website and f"Website: {p.website}",
    ]
    return " | ".join(part for part in parts if part)


def paginate(
    document: ResumeDocument,
    style: TemplateStyle,
    measure: TextMeasurer,
    geometry: PageGeometry = A4,
) -> list[RenderedPage]:
    """Lay the document out in the fixed section order and return its pages."""
    pager = Paginator(style, measure, geometry)
    body = style.body_color
    personal = document.personal

    pager.add_text(
        personal.full_name or NAME_PLACEHOLDER, NAME_SIZE, FontStyle.BOLD, style.personal_color
    )
    pager.add_text(
        personal.title or TITLE_PLACEHOLDER, TITLE_SIZE, FontStyle.ITALIC, style.personal_color
    )
    pager.advance(PERSONAL_GAP)
    pager.add_text(contact_line(document), BODY_SIZE, FontStyle.NORMAL, body)

    if personal.summary:
        pager.advance(SECTION_GAP)
        pager.add_section_header("summary")
        pager.add_text(personal.summary, BODY_SIZE, FontStyle.NORMAL, body)

    if document.experience:
        pager.advance(SECTION_GAP)
        pager.add_section_header("experience")
        for exp in document.experience:
            pager.add_text(
                f"{exp.position} at {exp.company}", ENTRY_HEADING_SIZE, FontStyle.BOLD, body
            )
            pager.add_text(exp.date_range, BODY_SIZE, FontStyle.ITALIC, body)
            if exp.description:
                pager.add_text(exp.description, BODY_SIZE, FontStyle.NORMAL, body)
            pager.advance(BLOCK_GAP)

    if document.education:
        pager.advance(SECTION_GAP)
        pager.add_section_header("education")
        for edu in document.education:
            pager.add_text(
                f"{edu.degree} in {edu.field_of_study}", ENTRY_HEADING_SIZE, FontStyle.BOLD, body
            )
            gpa = f" | GPA: {edu.gpa}" if edu.gpa else ""
            pager.add_text(f"{edu.institution}{gpa}", BODY_SIZE, FontStyle.NORMAL, body)
            pager.add_text(edu.date_range, BODY_SIZE, FontStyle.ITALIC, body)
            pager.advance(BLOCK_GAP)

    if document.skills:
        pager.advance(SECTION_GAP)
        pager.add_section_header("skills")
        pager.add_text(", ".join(document.skills), BODY_SIZE, FontStyle.NORMAL, body)

    if document.achievements:
        pager.advance(SECTION_GAP)
        pager.add_section_header("achievements")
        for achievement in document.achievements:
            pager.add_text(f"{BULLET} {achievement}", BODY_SIZE, FontStyle.NORMAL, body)
            pager.advance(BLOCK_GAP)

    return pager.pages
