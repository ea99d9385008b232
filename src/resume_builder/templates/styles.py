"""Template identifiers and their fixed style configurations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

BLACK: RGB = (0, 0, 0)

CORE_FONT_FAMILIES = ("helvetica", "times", "courier")

SECTIONS = ("summary", "experience", "education", "skills", "achievements")

DEFAULT_SECTION_TITLES: Mapping[str, str] = MappingProxyType(
    {
        "summary": "Summary",
        "experience": "Experience",
        "education": "Education",
        "skills": "Skills",
        "achievements": "Achievements",
    }
)


class TemplateId(str, Enum):
    """Closed set of visual templates."""

    MODERN = "modern"
    CORPORATE = "corporate"
    CREATIVE = "creative"


@dataclass(frozen=True)
class FontSpec:
    """Preferred font family plus the core PDF font used when it is missing."""

    family: str
    fallback: str = "helvetica"

    @property
    def is_core(self) -> bool:
        return self.family.lower() in CORE_FONT_FAMILIES


@dataclass(frozen=True)
class TemplateStyle:
    id: TemplateId
    name: str
    description: str
    font: FontSpec
    accent_color: RGB  # section headers
    personal_color: RGB  # name and title
    body_color: RGB = BLACK
    header_rule: bool = False
    section_titles: Mapping[str, str] = field(default_factory=dict)

    def section_title(self, section: str) -> str:
        """Display title for a section, with this template's wording."""
        return self.section_titles.get(section, DEFAULT_SECTION_TITLES.get(section, section.title()))


_STYLES: dict[TemplateId, TemplateStyle] = {
    TemplateId.MODERN: TemplateStyle(
        id=TemplateId.MODERN,
        name="Modern",
        description="Clean and minimal design with subtle gradients.",
        font=FontSpec("helvetica"),
        accent_color=(0, 102, 204),
        personal_color=BLACK,
    ),
    TemplateId.CORPORATE: TemplateStyle(
        id=TemplateId.CORPORATE,
        name="Corporate",
        description="Formal structure with bold sections and lines.",
        font=FontSpec("times"),
        accent_color=BLACK,
        personal_color=BLACK,
        header_rule=True,
    ),
    TemplateId.CREATIVE: TemplateStyle(
        id=TemplateId.CREATIVE,
        name="Creative",
        description="Vibrant colors and asymmetric layout.",
        font=FontSpec("Comic Sans MS", fallback="helvetica"),
        accent_color=(255, 105, 180),
        personal_color=(255, 105, 180),
        section_titles=MappingProxyType(
            {
                "summary": "My Story",
                "experience": "Adventures",
                "education": "Learning Journey",
                "skills": "Superpowers",
                "achievements": "Trophies",
            }
        ),
    ),
}

DEFAULT_TEMPLATE = TemplateId.MODERN


def get_template_style(template: TemplateId | str) -> TemplateStyle:
    """Return the style configuration for a template identifier."""
    try:
        template_id = TemplateId(template)
    except ValueError:
        logger.warning("Unknown template %r, using %s", template, DEFAULT_TEMPLATE.value)
        template_id = DEFAULT_TEMPLATE
    return _STYLES[template_id]


def list_template_styles() -> list[TemplateStyle]:
    """All template styles in picker order."""
    return [_STYLES[t] for t in TemplateId]
