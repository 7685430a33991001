from dataclasses import dataclass
from typing import Literal, Optional

Severity = Literal["low", "medium", "high", "critical"]
Mode = Literal["text", "code", "commit"]
CodeCategory = Literal[
    "comments", "naming", "commits", "docstrings", "tests", "errors", "api"
]

VERSION = "0.3.0"

SEV_ORDER = {"low": 0, "medium": 1, "high": 2, "critical": 3}
SEVERITIES = ("critical", "high", "medium", "low")

CODE_CATEGORIES = (
    "comments",
    "naming",
    "commits",
    "docstrings",
    "tests",
    "errors",
    "api",
)


@dataclass(frozen=True)
class TextRule:
    needle: str
    message: str
    replacement: Optional[str]
    severity: Severity


@dataclass
class Finding:
    line: int
    col: int
    matched: str
    message: str
    replacement: Optional[str]
    severity: Severity
    rule_id: str = ""

    @property
    def end_col(self) -> int:
        return self.col + len(self.matched.encode("utf-8"))

    @property
    def fixable(self) -> bool:
        return self.replacement is not None
