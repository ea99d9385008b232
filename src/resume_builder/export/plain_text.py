"""Linearize a resume into plain text for the clipboard."""

from __future__ import annotations

from resume_builder.models.resume import Education, Experience, ResumeDocument
from resume_builder.templates.styles import DEFAULT_SECTION_TITLES


def _join_populated(parts: list[str], sep: str = " | ") -> str:
    return sep.join(p for p in parts if p)


def _personal_block(document: ResumeDocument) -> str:
    p = document.personal
    lines = [
        p.full_name,
        p.title,
        _join_populated([p.email, p.phone]),
        _join_populated([p.location, p.website]),
    ]
    return "\n".join(line for line in lines if line)


def _experience_entry(exp: Experience) -> str:
    lines = [f"{exp.position} at {exp.company}", exp.date_range]
    if exp.description:
        lines.append(exp.description)
    return "\n".join(lines)


def _education_entry(edu: Education) -> str:
    lines = [f"{edu.degree} in {edu.field_of_study}", edu.institution, edu.date_range]
    if edu.gpa:
        lines.append(f"GPA: {edu.gpa}")
    return "\n".join(lines)


def _section(key: str, body: str) -> str:
    return f"{DEFAULT_SECTION_TITLES[key]}\n{body}"


def to_plain_text(document: ResumeDocument) -> str:
    """Render every populated section in fixed order, blocks split by blank lines."""
    blocks: list[str] = []

    personal = _personal_block(document)
    if personal:
        blocks.append(personal)

    if document.personal.summary:
        blocks.append(_section("summary", document.personal.summary))

    experience = [_experience_entry(e) for e in document.experience if not e.is_blank]
    if experience:
        blocks.append(_section("experience", "\n\n".join(experience)))

    education = [_education_entry(e) for e in document.education if not e.is_blank]
    if education:
        blocks.append(_section("education", "\n\n".join(education)))

    if document.skills:
        blocks.append(_section("skills", ", ".join(document.skills)))

    if document.achievements:
        blocks.append(_section("achievements", "\n".join(document.achievements)))

    return "\n\n".join(blocks)
