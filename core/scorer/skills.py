#!/usr/bin/env python3
"""
Skill Normalization - Canonical skill tokens and required-skill extraction.

Both the job's required skills and the user's declared skills go through
normalize() before any set comparison, so "React.js", "REACT" and "react"
all compare equal.
"""

from typing import Dict, Iterable, List, Optional, Pattern, Set, Tuple
import re

_SEPARATORS = re.compile(r"[.\s_\-]+")
_JS_SUFFIX = "js"

# Fixed vocabulary of technical terms detected in job descriptions.
# Display casing is what gets reported back to the user.
SKILL_VOCABULARY: Tuple[str, ...] = (
    "JavaScript",
    "TypeScript",
    "Python",
    "Java",
    "C++",
    "C#",
    "Ruby",
    "PHP",
    "Go",
    "Rust",
    "Swift",
    "Kotlin",
    "React",
    "Vue",
    "Angular",
    "Node.js",
    "Express",
    "Django",
    "Flask",
    "Spring",
    "ASP.NET",
    "Rails",
    "Laravel",
    "SQL",
    "PostgreSQL",
    "MySQL",
    "MongoDB",
    "Redis",
    "Docker",
    "Kubernetes",
    "AWS",
    "Azure",
    "GCP",
    "Git",
    "CI/CD",
    "Jenkins",
    "Terraform",
    "Ansible",
    "Linux",
    "Agile",
    "Scrum",
    "REST",
    "GraphQL",
    "Microservices",
    "TDD",
    "DevOps",
)

# Extra surface forms that should be detected as the same vocabulary entry.
_EXTRA_ALIASES: Dict[str, Tuple[str, ...]] = {
    "Node.js": ("node", "nodejs"),
    "React": ("react.js", "reactjs"),
    "Vue": ("vue.js", "vuejs"),
    "Express": ("express.js", "expressjs"),
    "Kubernetes": ("k8s",),
    "PostgreSQL": ("postgres",),
    "Go": ("golang",),
    "GCP": ("google cloud",),
}


def normalize(raw: str) -> str:
    """Return the canonical comparison token for a skill name.

    Lower-cases, drops whitespace/dot/hyphen/underscore separators and
    strips trailing "js" suffixes. Idempotent: normalize(normalize(x)) == normalize(x).
    """
    token = _SEPARATORS.sub("", (raw or "").strip().lower())
    while token.endswith(_JS_SUFFIX) and len(token) > len(_JS_SUFFIX):
        token = token[:-len(_JS_SUFFIX)]
    return token


def normalize_all(skills: Iterable[str]) -> Set[str]:
    """Normalized set of skill tokens, ignoring blanks."""
    return {n for n in (normalize(s) for s in skills) if n}


def _alias_pattern(alias: str) -> Pattern:
    # Whole-token match: "java" must not match inside "javascript",
    # but "react" must match "React.js".
    escaped = r"\s+".join(re.escape(part) for part in alias.lower().split())
    return re.compile(rf"(?<![\w+#]){escaped}(?![\w+#])")


def _build_patterns() -> List[Tuple[str, str, List[Pattern]]]:
    patterns = []
    for display in SKILL_VOCABULARY:
        aliases = (display,) + _EXTRA_ALIASES.get(display, ())
        compiled = [_alias_pattern(a) for a in dict.fromkeys(a.lower() for a in aliases)]
        patterns.append((display, normalize(display), compiled))
    return patterns


_VOCABULARY_PATTERNS = _build_patterns()
_DISPLAY_BY_KEY = {key: display for display, key, _ in _VOCABULARY_PATTERNS}


def display_name(skill: str) -> str:
    """Vocabulary display casing for a skill, or the stripped input if unknown."""
    return _DISPLAY_BY_KEY.get(normalize(skill), skill.strip())


def extract_required_skills(description: Optional[str]) -> List[str]:
    """Detect vocabulary skills mentioned in a job description.

    Returns display names in vocabulary order, one per normalized key.
    """
    if not description:
        return []
    text = description.lower()
    found = []
    seen = set()
    for display, key, compiled in _VOCABULARY_PATTERNS:
        if key in seen:
            continue
        if any(p.search(text) for p in compiled):
            found.append(display)
            seen.add(key)
    return found


def match_skills(
    required_skills: List[str],
    user_skills: Iterable[str]
) -> Tuple[List[str], List[str]]:
    """Split required skills into (matching, missing) against the user's skills."""
    user_keys = normalize_all(user_skills)
    matching = [s for s in required_skills if normalize(s) in user_keys]
    missing = [s for s in required_skills if normalize(s) not in user_keys]
    return matching, missing
