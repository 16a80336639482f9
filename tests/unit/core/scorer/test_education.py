"""
Unit tests for degree classification and education scoring.
"""
import pytest

from core.scorer.education import (
    calculate_education_score,
    classify_degree,
    extract_required_degree,
    highest_degree,
)
from core.scorer.models import EducationEntry


class TestClassifyDegree:

    @pytest.mark.parametrize("text,expected", [
        ("PhD in Physics", "phd"),
        ("Ph.D.", "phd"),
        ("Master of Science", "masters"),
        ("MSc Computer Science", "masters"),
        ("MBA", "masters"),
        ("Bachelor of Arts", "bachelors"),
        ("B.Sc. Mathematics", "bachelors"),
        ("High School Diploma", "none"),
        ("", "none"),
    ])
    def test_levels(self, text, expected):
        assert classify_degree(text) == expected

    def test_job_description_takes_highest_mentioned(self):
        description = "Bachelor's degree required, Master's degree preferred."
        assert extract_required_degree(description) == "masters"

    def test_highest_degree_across_entries(self):
        education = (
            EducationEntry(institution="A", degree="Bachelor of Science"),
            EducationEntry(institution="B", degree="Master of Engineering"),
        )
        assert highest_degree(education) == "masters"
        assert highest_degree(()) == "none"


class TestEducationScore:

    def test_masters_required_bachelors_held(self):
        assert calculate_education_score("masters", "bachelors") == 10

    def test_none_required(self):
        assert calculate_education_score("none", "none") == 15

    def test_meets_or_exceeds(self):
        assert calculate_education_score("bachelors", "bachelors") == 15
        assert calculate_education_score("bachelors", "phd") == 15

    def test_two_levels_below(self):
        assert calculate_education_score("phd", "bachelors") == 5
        assert calculate_education_score("masters", "none") == 5
