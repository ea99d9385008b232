"""Data models for the resume builder."""

from resume_builder.models.events import (
    DocumentReset,
    EntryAdded,
    EntryFieldChanged,
    EntryRemoved,
    ListItemAdded,
    ListItemRemoved,
    PersonalFieldChanged,
    ResumeEvent,
    apply_event,
)
from resume_builder.models.resume import (
    Education,
    Experience,
    PersonalInfo,
    ResumeDocument,
)

__all__ = [
    "DocumentReset",
    "Education",
    "EntryAdded",
    "EntryFieldChanged",
    "EntryRemoved",
    "Experience",
    "ListItemAdded",
    "ListItemRemoved",
    "PersonalFieldChanged",
    "PersonalInfo",
    "ResumeDocument",
    "ResumeEvent",
    "apply_event",
]
