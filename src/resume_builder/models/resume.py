"""Pydantic models for the resume being edited, with in-place mutations.

Every mutation is total: an unknown field name or an out-of-range index is
ignored (and logged at debug level) instead of raising, so UI callbacks can
forward raw widget values without guarding them.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class PersonalInfo(BaseModel):
    full_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    summary: str = ""


class Experience(BaseModel):
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False  # end_date is ignored while set
    description: str = ""

    @property
    def date_range(self) -> str:
        end = "Present" if self.current else self.end_date
        return f"{self.start_date} - {end}"

    @property
    def is_blank(self) -> bool:
        return not any(
            (self.company, self.position, self.start_date, self.end_date, self.description)
        ) and not self.current


class Education(BaseModel):
    institution: str = ""
    degree: str = ""
    field_of_study: str = Field(default="", alias="field")
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""

    model_config = {"populate_by_name": True}

    @property
    def date_range(self) -> str:
        return f"{self.start_date} - {self.end_date}"

    @property
    def is_blank(self) -> bool:
        return not any(
            (
                self.institution,
                self.degree,
                self.field_of_study,
                self.start_date,
                self.end_date,
                self.gpa,
            )
        )


def _unique_items(values: list[str]) -> list[str]:
    """Trim, drop blanks and keep the first occurrence of each value."""
    seen: list[str] = []
    for value in values:
        item = value.strip()
        if item and item not in seen:
            seen.append(item)
    return seen


def _coerce(model_cls: type[BaseModel], field: str, value: Any) -> Any:
    if model_cls.model_fields[field].annotation is bool:
        return bool(value)
    return "" if value is None else str(value)


def _resolve_field(model_cls: type[BaseModel], field: str) -> str | None:
    if field in model_cls.model_fields:
        return field
    for name, info in model_cls.model_fields.items():
        if info.alias == field:
            return name
    return None


class ResumeDocument(BaseModel):
    """The resume owned by one editing session."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)

    @field_validator("skills", "achievements")
    @classmethod
    def _dedupe(cls, values: list[str]) -> list[str]:
        return _unique_items(values)

    @classmethod
    def blank_form(cls) -> ResumeDocument:
        """The form's starting state: one empty experience and education entry."""
        return cls(experience=[Experience()], education=[Education()])

    # -- personal ---------------------------------------------------------

    def set_personal(self, field: str, value: Any) -> None:
        name = _resolve_field(PersonalInfo, field)
        if name is None:
            logger.debug("Ignoring unknown personal field %r", field)
            return
        setattr(self.personal, name, _coerce(PersonalInfo, name, value))

    # -- repeated entries -------------------------------------------------

    def add_experience(self, entry: Experience | None = None) -> None:
        self.experience.append(entry if entry is not None else Experience())

    def update_experience(self, index: int, field: str, value: Any) -> None:
        _update_entry(self.experience, Experience, index, field, value)

    def remove_experience(self, index: int) -> None:
        _remove_entry(self.experience, index)

    def add_education(self, entry: Education | None = None) -> None:
        self.education.append(entry if entry is not None else Education())

    def update_education(self, index: int, field: str, value: Any) -> None:
        _update_entry(self.education, Education, index, field, value)

    def remove_education(self, index: int) -> None:
        _remove_entry(self.education, index)

    # -- ordered sets -----------------------------------------------------

    def add_skill(self, value: str) -> bool:
        return _add_unique(self.skills, value)

    def remove_skill(self, value: str) -> None:
        self.skills[:] = [s for s in self.skills if s != value]

    def add_achievement(self, value: str) -> bool:
        return _add_unique(self.achievements, value)

    def remove_achievement(self, value: str) -> None:
        self.achievements[:] = [a for a in self.achievements if a != value]

    def reset(self) -> None:
        blank = ResumeDocument.blank_form()
        self.personal = blank.personal
        self.experience = blank.experience
        self.education = blank.education
        self.skills = blank.skills
        self.achievements = blank.achievements


def _update_entry(
    entries: list[Any],
    model_cls: type[BaseModel],
    index: int,
    field: str,
    value: Any,
) -> None:
    if not 0 <= index < len(entries):
        logger.debug("Ignoring update of %s #%d: no such entry", model_cls.__name__, index)
        return
    name = _resolve_field(model_cls, field)
    if name is None:
        logger.debug("Ignoring unknown %s field %r", model_cls.__name__, field)
        return
    setattr(entries[index], name, _coerce(model_cls, name, value))


def _remove_entry(entries: list[Any], index: int) -> None:
    if 0 <= index < len(entries):
        del entries[index]
    else:
        logger.debug("Ignoring removal of entry #%d: no such entry", index)


def _add_unique(items: list[str], value: str) -> bool:
    item = (value or "").strip()
    if not item or item in items:
        return False
    items.append(item)
    return True
