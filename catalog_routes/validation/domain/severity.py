from typing import Literal

from catalog_routes.slugs.domain.rules import ISSUE_ORDER

ValidationTag = Literal["missing", "empty", "hasExtension", "hasSpecialChars", "hasWhitespace", "hasUpperCase", "duplicate"]
Severity = Literal["hard", "soft"]

ISSUE_CATEGORIES: tuple[str, ...] = (*ISSUE_ORDER, "duplicate")

# Hard issues block deployment.
HARD_ISSUES: frozenset[str] = frozenset({"missing", "empty", "duplicate"})


def severity_of(tag: str) -> Severity:
    return "hard" if tag in HARD_ISSUES else "soft"


def has_hard_issue(tags: tuple[str, ...]) -> bool:
    return any(tag in HARD_ISSUES for tag in tags)
