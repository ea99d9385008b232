"""Tests for the resume document model and its mutations."""

import pytest

from resume_builder.models.resume import (
    Education,
    Experience,
    PersonalInfo,
    ResumeDocument,
)


class TestResumeDocument:
    def test_defaults_are_empty(self):
        doc = ResumeDocument()
        assert doc.personal == PersonalInfo()
        assert doc.experience == []
        assert doc.education == []
        assert doc.skills == []
        assert doc.achievements == []

    def test_blank_form_has_one_entry_each(self):
        doc = ResumeDocument.blank_form()
        assert doc.experience == [Experience()]
        assert doc.education == [Education()]

    def test_serialization(self, sample_document):
        data = sample_document.model_dump()
        restored = ResumeDocument(**data)
        assert restored == sample_document

    def test_education_accepts_field_alias(self):
        edu = Education.model_validate({"degree": "MSc", "field": "Physics"})
        assert edu.field_of_study == "Physics"

    def test_duplicate_skills_dropped_on_load(self):
        doc = ResumeDocument(skills=["Go", "Python", "Go", " ", "Python "])
        assert doc.skills == ["Go", "Python"]


class TestPersonal:
    def test_set_personal(self):
        doc = ResumeDocument()
        doc.set_personal("full_name", "Jane")
        assert doc.personal.full_name == "Jane"

    def test_blank_name_is_legal(self):
        doc = ResumeDocument()
        doc.set_personal("full_name", "Jane")
        doc.set_personal("full_name", "")
        assert doc.personal.full_name == ""

    def test_unknown_field_is_ignored(self):
        doc = ResumeDocument()
        doc.set_personal("favourite_color", "blue")
        assert doc.personal == PersonalInfo()


class TestEntries:
    def test_add_preserves_order(self):
        doc = ResumeDocument()
        doc.add_experience(Experience(company="A"))
        doc.add_experience(Experience(company="B"))
        doc.add_experience()
        assert [e.company for e in doc.experience] == ["A", "B", ""]

    def test_update_experience(self):
        doc = ResumeDocument.blank_form()
        doc.update_experience(0, "company", "Acme")
        doc.update_experience(0, "current", True)
        assert doc.experience[0].company == "Acme"
        assert doc.experience[0].current is True

    def test_update_out_of_range_is_noop(self):
        doc = ResumeDocument.blank_form()
        doc.update_experience(5, "company", "Acme")
        doc.update_education(-1, "degree", "BSc")
        assert doc.experience == [Experience()]
        assert doc.education == [Education()]

    def test_update_unknown_field_is_noop(self):
        doc = ResumeDocument.blank_form()
        doc.update_education(0, "salary", "lots")
        assert doc.education == [Education()]

    def test_update_education_by_alias(self):
        doc = ResumeDocument.blank_form()
        doc.update_education(0, "field", "Maths")
        assert doc.education[0].field_of_study == "Maths"

    def test_remove_shifts_indices(self):
        doc = ResumeDocument()
        for name in ("A", "B", "C"):
            doc.add_education(Education(institution=name))
        doc.remove_education(1)
        assert [e.institution for e in doc.education] == ["A", "C"]
        doc.remove_education(1)
        assert [e.institution for e in doc.education] == ["A"]

    def test_remove_out_of_range_is_noop(self):
        doc = ResumeDocument.blank_form()
        doc.remove_experience(3)
        assert len(doc.experience) == 1

    def test_unchecking_current_keeps_end_date(self):
        doc = ResumeDocument()
        doc.add_experience(Experience(start_date="2020-01", end_date="2020-12"))
        doc.update_experience(0, "current", True)
        doc.update_experience(0, "current", False)
        assert doc.experience[0].end_date == "2020-12"
        assert doc.experience[0].date_range == "2020-01 - 2020-12"


class TestDateRange:
    def test_current_reads_present(self):
        exp = Experience(start_date="2020-01", end_date="2020-12", current=True)
        assert exp.date_range == "2020-01 - Present"

    def test_past_job_shows_end_date(self):
        exp = Experience(start_date="2018", end_date="2019")
        assert exp.date_range == "2018 - 2019"

    def test_education_end_date_as_is(self):
        assert Education(start_date="2014").date_range == "2014 - "


class TestOrderedSets:
    def test_add_skill_twice_keeps_one(self):
        doc = ResumeDocument()
        assert doc.add_skill("Go") is True
        assert doc.add_skill("Go") is False
        assert doc.skills == ["Go"]

    def test_duplicate_keeps_original_position(self):
        doc = ResumeDocument()
        for skill in ("Go", "Python", "Go", "Rust"):
            doc.add_skill(skill)
        assert doc.skills == ["Go", "Python", "Rust"]

    def test_uniqueness_is_case_sensitive(self):
        doc = ResumeDocument()
        doc.add_skill("go")
        doc.add_skill("Go")
        assert doc.skills == ["go", "Go"]

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_skill_ignored(self, value):
        doc = ResumeDocument()
        assert doc.add_skill(value) is False
        assert doc.skills == []

    def test_remove_skill_exact_match(self):
        doc = ResumeDocument(skills=["Go", "Python"])
        doc.remove_skill("go")
        assert doc.skills == ["Go", "Python"]
        doc.remove_skill("Go")
        assert doc.skills == ["Python"]

    def test_achievements(self):
        doc = ResumeDocument()
        doc.add_achievement("Won hackathon")
        doc.add_achievement("Won hackathon")
        doc.add_achievement("Published paper")
        doc.remove_achievement("Won hackathon")
        assert doc.achievements == ["Published paper"]


class TestReset:
    def test_reset_restores_blank_form(self, sample_document):
        sample_document.reset()
        assert sample_document == ResumeDocument.blank_form()
