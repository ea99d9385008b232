"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_builder.clients.llm_client import LLMClient, LLMResponse
from resume_builder.export.layout import FontStyle
from resume_builder.models.resume import (
    Education,
    Experience,
    PersonalInfo,
    ResumeDocument,
)

CHAR_WIDTH = 2.0


def fixed_width_measure(text: str, style: FontStyle, size: float) -> float:
    """Every character is 2mm wide: 95 characters fill the 190mm line."""
    return len(text) * CHAR_WIDTH


@pytest.fixture
def measure():
    return fixed_width_measure


@pytest.fixture
def sample_document() -> ResumeDocument:
    return ResumeDocument(
        personal=PersonalInfo(
            full_name="Jane Doe",
            title="Backend Engineer",
            email="jane@example.com",
            phone="555-0100",
            location="Berlin",
            website="https://jane.dev",
            summary="Engineer with eight years of experience building payment APIs.",
        ),
        experience=[
            Experience(
                company="Acme",
                position="Engineer",
                start_date="2020-01",
                end_date="2020-12",
                current=True,
                description="Built the billing service in Python.",
            ),
            Experience(
                company="Globex",
                position="Intern",
                start_date="2018-06",
                end_date="2019-12",
            ),
        ],
        education=[
            Education(
                institution="TU Berlin",
                degree="BSc",
                field_of_study="Computer Science",
                start_date="2014",
                end_date="2018",
                gpa="3.8",
            ),
        ],
        skills=["Python", "Go", "PostgreSQL"],
        achievements=["Speaker at PyCon 2023", "Led migration to Kubernetes"],
    )


@pytest.fixture
def long_document(sample_document) -> ResumeDocument:
    """More content than fits on one page."""
    doc = sample_document.model_copy(deep=True)
    for i in range(25):
        doc.add_experience(
            Experience(
                company=f"Company {i}",
                position="Engineer",
                start_date="2010",
                end_date="2011",
                description="Worked on distributed systems and wrote a lot of tests. " * 3,
            )
        )
    return doc


@pytest.fixture
def mock_llm() -> LLMClient:
    llm = AsyncMock(spec=LLMClient)
    llm.generate.return_value = LLMResponse(
        text="  Results-driven engineer focused on fintech.  ",
        input_tokens=40,
        output_tokens=12,
    )
    return llm
