"""
Unit tests for location, job type and salary alignment.
"""
import unittest

from core.scorer.models import JobDetails, SalaryRange, UserProfile
from core.scorer.other_fit import (
    calculate_other_score,
    job_type_points,
    location_points,
    salary_points,
)


class TestLocationPoints(unittest.TestCase):

    def test_remote_always_matches(self):
        self.assertEqual(location_points("Remote (EU)", ["Berlin"]), 5)

    def test_preferred_location_substring(self):
        self.assertEqual(location_points("Berlin, Germany", ["berlin"]), 5)

    def test_non_preferred_location(self):
        self.assertEqual(location_points("Paris, France", ["Berlin"]), 0)

    def test_missing_data_is_neutral(self):
        self.assertEqual(location_points(None, ["Berlin"]), 3)
        self.assertEqual(location_points("Paris", []), 3)


class TestJobTypePoints(unittest.TestCase):

    def test_match_is_case_insensitive(self):
        self.assertEqual(job_type_points("Full-Time", ["full-time"]), 5)

    def test_mismatch(self):
        self.assertEqual(job_type_points("contract", ["full-time"]), 0)

    def test_missing_data_is_neutral(self):
        self.assertEqual(job_type_points("", ["full-time"]), 3)
        self.assertEqual(job_type_points("contract", []), 3)


class TestSalaryPoints(unittest.TestCase):

    def test_meets_expectation(self):
        self.assertEqual(salary_points(SalaryRange(min=100000), SalaryRange(min=100000)), 5)

    def test_within_twenty_percent(self):
        self.assertEqual(salary_points(SalaryRange(min=85000), SalaryRange(min=100000)), 3)

    def test_well_below(self):
        self.assertEqual(salary_points(SalaryRange(min=50000), SalaryRange(min=100000)), 1)

    def test_currency_mismatch_is_neutral(self):
        job = SalaryRange(min=50000, currency="EUR")
        expected = SalaryRange(min=100000, currency="USD")
        self.assertEqual(salary_points(job, expected), 3)

    def test_missing_data_is_neutral(self):
        self.assertEqual(salary_points(None, SalaryRange(min=100000)), 3)
        self.assertEqual(salary_points(SalaryRange(max=90000), SalaryRange(min=100000)), 3)


class TestOtherScore(unittest.TestCase):

    def test_all_factors_matched(self):
        job = JobDetails(
            description="x",
            location="Remote",
            job_type="full-time",
            salary_range=SalaryRange(min=120000),
        )
        profile = UserProfile(
            preferred_job_types=("full-time",),
            salary_expectation=SalaryRange(min=100000),
        )
        score, details = calculate_other_score(job, profile)
        self.assertEqual(score, 15)
        self.assertEqual(details, {"location": 5, "job_type": 5, "salary": 5})

    def test_nothing_known_is_neutral(self):
        score, _ = calculate_other_score(JobDetails(description="x"), UserProfile())
        self.assertEqual(score, 9)
