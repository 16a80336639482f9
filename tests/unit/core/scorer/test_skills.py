"""
Unit tests for skill normalization and required-skill extraction.
"""
import pytest

from core.scorer.skills import (
    display_name,
    extract_required_skills,
    match_skills,
    normalize,
)


class TestNormalize:

    @pytest.mark.parametrize("raw", ["React", "react", "REACT", "React.js", "reactjs", " React JS "])
    def test_react_variants_share_one_token(self, raw):
        assert normalize(raw) == "react"

    def test_node_variants(self):
        assert normalize("Node.js") == normalize("nodejs") == normalize("node") == "node"

    def test_separators_removed(self):
        assert normalize("CI-CD") == normalize("ci_cd") == normalize("CI CD") == "cicd"

    def test_js_alone_is_kept(self):
        assert normalize("JS") == "js"

    def test_idempotent(self):
        for raw in ["Vue.js", "TypeScript", "ASP.NET", "C++", "  Express.JS  "]:
            assert normalize(normalize(raw)) == normalize(raw)

    def test_empty_input(self):
        assert normalize("") == ""
        assert normalize(None) == ""


class TestExtractRequiredSkills:

    def test_detects_vocabulary_terms_in_order(self):
        description = "Strong AWS background, Kubernetes, React.js and TypeScript required."
        assert extract_required_skills(description) == ["TypeScript", "React", "Kubernetes", "AWS"]

    def test_java_not_matched_inside_javascript(self):
        skills = extract_required_skills("Senior JavaScript developer wanted")
        assert "JavaScript" in skills
        assert "Java" not in skills

    def test_aliases_map_to_vocabulary_entry(self):
        skills = extract_required_skills("Experience with k8s and postgres is a plus")
        assert skills == ["PostgreSQL", "Kubernetes"]

    def test_symbols_in_names(self):
        skills = extract_required_skills("Backend in C# or C++, deployed via CI/CD")
        assert skills == ["C++", "C#", "CI/CD"]

    def test_no_duplicates_for_repeated_mentions(self):
        skills = extract_required_skills("React, react, REACT and React.js")
        assert skills == ["React"]

    def test_empty_description(self):
        assert extract_required_skills("") == []
        assert extract_required_skills(None) == []


class TestMatchSkills:

    def test_split_into_matching_and_missing(self):
        matching, missing = match_skills(
            ["TypeScript", "React", "Node.js", "Kubernetes", "AWS"],
            ["react.js", "typescript", "NodeJS", "Python"],
        )
        assert matching == ["TypeScript", "React", "Node.js"]
        assert missing == ["Kubernetes", "AWS"]

    def test_display_name_uses_vocabulary_casing(self):
        assert display_name("postgresql") == "PostgreSQL"
        assert display_name("  Elixir ") == "Elixir"
