from dataclasses import dataclass
from typing import Literal

IssueTag = Literal["missing", "empty", "hasExtension", "hasSpecialChars", "hasWhitespace", "hasUpperCase"]


@dataclass(frozen=True)
class SlugRecord:
    raw: str | None
    cleaned: str
    issues: tuple[IssueTag, ...]

    @property
    def is_routable(self) -> bool:
        return bool(self.cleaned)
