"""Field-change events and the single function that applies them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Union

from resume_builder.models.resume import ResumeDocument

logger = logging.getLogger(__name__)

EntrySection = Literal["experience", "education"]
ListSection = Literal["skills", "achievements"]


@dataclass(frozen=True)
class PersonalFieldChanged:
    field: str
    value: str


@dataclass(frozen=True)
class EntryFieldChanged:
    section: EntrySection
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class EntryAdded:
    section: EntrySection


@dataclass(frozen=True)
class EntryRemoved:
    section: EntrySection
    index: int


@dataclass(frozen=True)
class ListItemAdded:
    section: ListSection
    value: str


@dataclass(frozen=True)
class ListItemRemoved:
    section: ListSection
    value: str


@dataclass(frozen=True)
class DocumentReset:
    pass


ResumeEvent = Union[
    PersonalFieldChanged,
    EntryFieldChanged,
    EntryAdded,
    EntryRemoved,
    ListItemAdded,
    ListItemRemoved,
    DocumentReset,
]


def apply_event(document: ResumeDocument, event: ResumeEvent) -> ResumeDocument:
    """Apply one event to the document in place and return it.

    Never raises: events naming an unknown section are dropped.
    """
    if isinstance(event, PersonalFieldChanged):
        document.set_personal(event.field, event.value)
    elif isinstance(event, EntryFieldChanged):
        if event.section == "experience":
            document.update_experience(event.index, event.field, event.value)
        elif event.section == "education":
            document.update_education(event.index, event.field, event.value)
        else:
            logger.debug("Dropping event for unknown section %r", event.section)
    elif isinstance(event, EntryAdded):
        if event.section == "experience":
            document.add_experience()
        elif event.section == "education":
            document.add_education()
        else:
            logger.debug("Dropping event for unknown section %r", event.section)
    elif isinstance(event, EntryRemoved):
        if event.section == "experience":
            document.remove_experience(event.index)
        elif event.section == "education":
            document.remove_education(event.index)
        else:
            logger.debug("Dropping event for unknown section %r", event.section)
    elif isinstance(event, ListItemAdded):
        if event.section == "skills":
            document.add_skill(event.value)
        elif event.section == "achievements":
            document.add_achievement(event.value)
        else:
            logger.debug("Dropping event for unknown section %r", event.section)
    elif isinstance(event, ListItemRemoved):
        if event.section == "skills":
            document.remove_skill(event.value)
        elif event.section == "achievements":
            document.remove_achievement(event.value)
        else:
            logger.debug("Dropping event for unknown section %r", event.section)
    elif isinstance(event, DocumentReset):
        document.reset()
    else:
        logger.debug("Dropping unsupported event %r", event)
    return document
