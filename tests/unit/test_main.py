"""
Tests for the command-line entry point.
"""
import json
import os
from unittest.mock import AsyncMock, patch

import main
from core.config_loader import AppConfig
from core.errors import NotFoundError
from core.orchestrator import AnalysisResult, AnalysisState, ScoringOrchestrator


class TestMain:

    def test_init_db_creates_tables(self, tmp_path):
        db_path = tmp_path / "applytrack.db"
        config = AppConfig(database={"url": f"sqlite:///{db_path}"})

        with patch("main.load_config", return_value=config):
            assert main.main(["init-db"]) == 0

        assert os.path.exists(db_path)

    def test_analyze_prints_failure_json(self, capsys):
        config = AppConfig(database={"url": "sqlite://"}, reasoning={"api_key": "test"})
        result = AnalysisResult(state=AnalysisState.FAILED, error=NotFoundError("Application not found."))

        with patch("main.load_config", return_value=config), \
                patch.object(ScoringOrchestrator, "analyze_job_match", new=AsyncMock(return_value=result)):
            exit_code = main.main(["analyze", "--application-id", "a", "--user-id", "u"])

        assert exit_code == 1
        output = json.loads(capsys.readouterr().out)
        assert output == {
            "success": False,
            "state": "failed",
            "code": "NOT_FOUND",
            "error": "Application not found."
        }

    def test_analyze_without_api_key(self):
        config = AppConfig(database={"url": "sqlite://"})
        with patch("main.load_config", return_value=config):
            assert main.main(["analyze", "--application-id", "a", "--user-id", "u"]) == 2


    def test_score_prints_base_breakdown(self, tmp_path, capsys):
        document = {
            "job": {
                "description": (
                    "Frontend role using React, TypeScript, Node.js, Kubernetes and AWS. "
                    "5+ years of experience. Bachelor's degree required."
                ),
                "location": "Remote",
                "job_type": "full-time",
                "salary_range": {"min": 120000, "max": 150000, "currency": "USD"},
            },
            "profile": {
                "skills": ["React", "TypeScript", "Node.js", "Python"],
                "experience": [{
                    "company": "Acme",
                    "position": "Frontend Engineer",
                    "start_date": "2019-01-01",
                    "end_date": "2024-01-01",
                    "skills_used": ["React", "TypeScript"],
                }],
                "education": [{"institution": "State University", "degree": "Bachelor of Science"}],
                "preferred_job_types": ["full-time"],
                "salary_expectation": {"min": 100000, "currency": "USD"},
            },
        }
        input_path = tmp_path / "match.json"
        input_path.write_text(json.dumps(document))

        with patch("main.load_config", return_value=AppConfig()):
            exit_code = main.main(["score", "--input", str(input_path), "--as-of", "2024-06-01"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["total"] == 84
        assert output["skills_score"] == 24
        assert output["missing_skills"] == ["Kubernetes", "AWS"]

    def test_score_rejects_experience_without_start_date(self, tmp_path, capsys):
        input_path = tmp_path / "match.json"
        input_path.write_text(json.dumps({
            "job": {"description": "React developer"},
            "profile": {
                "skills": ["React"],
                "experience": [{"company": "a", "position": "b", "start_date": ""}],
            },
        }))

        with patch("main.load_config", return_value=AppConfig()):
            exit_code = main.main(["score", "--input", str(input_path)])

        assert exit_code == 2
        assert capsys.readouterr().out == ""

    def test_score_missing_file(self, tmp_path):
        with patch("main.load_config", return_value=AppConfig()):
            assert main.main(["score", "--input", str(tmp_path / "absent.json")]) == 2
