from typing import Collection, List, Optional

from .errors import InvalidRuleError
from .models import CODE_CATEGORIES, Finding
from .rules_commit import check_commit_line
from .utils import byte_col, split_lines

COMMENT_MARKERS = ("#", "//", "--")
TODO_PREFIXES = ("# todo:", "// todo:", "-- todo:", "/* todo:")
BARE_TODO_MESSAGES = frozenset(
    [
        "",
        "add error handling",
        "fix this",
        "handle this",
        "implement",
        "add tests",
        "clean up",
        "refactor",
    ]
)
DOCSTRING_PHRASES = (
    "this function serves as",
    "this class represents",
    "this method handles",
    "this module provides",
)
ANEMIC_SUFFIXES = ("Manager", "Handler", "Helper", "Util", "Utility", "Service")
TYPE_IN_NAME = (
    ("userDataObject", "user"),
    ("configurationSettings", "config"),
    ("errorMessageString", "message"),
    ("listOfUsers", "users"),
)


def parse_categories(raw: Optional[str]) -> List[str]:
    """Parse a comma-separated category list; ``None`` or blank means all."""
    if not raw:
        return []
    categories = []
    for item in raw.split(","):
        name = item.strip()
        if not name:
            continue
        if name not in CODE_CATEGORIES:
            raise InvalidRuleError(
                f"unknown rule '{name}'. Valid: {', '.join(CODE_CATEGORIES)}"
            )
        if name not in categories:
            categories.append(name)
    return categories


def is_section_header(line: str) -> bool:
    if not line.startswith(COMMENT_MARKERS):
        return False
    rest = line.lstrip("#").lstrip("/").lstrip()

    if len(rest) >= 3 and all(c in "-= " for c in rest):
        return True
    if rest.startswith(("---", "===")) or rest.endswith(("---", "===")):
        return True

    words = rest.split()
    if not words:
        return False
    for word in words:
        word = word.rstrip(":")
        if len(word) < 2 or not all(c.isupper() or c == "_" for c in word):
            return False
    return True


def is_bare_todo(line: str) -> bool:
    lower = line.lower()
    for prefix in TODO_PREFIXES:
        if lower.startswith(prefix):
            if lower[len(prefix):].strip() in BARE_TODO_MESSAGES:
                return True
    return False


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def find_suffix_token(line: str, suffix: str) -> Optional[int]:
    """Char index of the first ``suffix`` glued to a preceding identifier and ending one.

    ``userManager`` qualifies, ``Manager`` alone and ``ManagerFactory`` do not.
    """
    cursor = 0
    while cursor < len(line):
        idx = line.find(suffix, cursor)
        if idx < 0:
            return None
        end = idx + len(suffix)
        before_ok = idx > 0 and _is_ident_char(line[idx - 1])
        after_ok = end >= len(line) or not _is_ident_char(line[end])
        if before_ok and after_ok:
            return idx
        cursor = end
    return None


def check_naming(line: str, lineno: int) -> List[Finding]:
    findings = []
    for suffix in ANEMIC_SUFFIXES:
        idx = find_suffix_token(line, suffix)
        if idx is not None:
            findings.append(
                Finding(
                    line=lineno,
                    col=byte_col(line, idx),
                    matched=suffix,
                    message=f"Anemic type suffix '{suffix}': name the responsibility, not the role",
                    replacement=None,
                    severity="high",
                    rule_id="code/anemic-suffix",
                )
            )

    lower = line.lower()
    for bad, suggestion in TYPE_IN_NAME:
        idx = lower.find(bad.lower())
        if idx >= 0:
            findings.append(
                Finding(
                    line=lineno,
                    col=byte_col(lower, idx),
                    matched=bad,
                    message=f"Type-in-name anti-pattern: use '{suggestion}' instead",
                    replacement=None,
                    severity="medium",
                    rule_id="code/type-in-name",
                )
            )
    return findings


def apply_code_rules(content: str, enabled: Collection[str] = ()) -> List[Finding]:
    """Scan source code for comment, docstring, naming and commit tells.

    An empty ``enabled`` runs every category. ``tests``, ``errors`` and ``api``
    are accepted but have no checks yet.
    """
    run_all = not enabled

    def on(category: str) -> bool:
        return run_all or category in enabled

    findings: List[Finding] = []
    for idx, line in enumerate(split_lines(content)):
        lineno = idx + 1
        trimmed = line.strip()
        lower = trimmed.lower()

        if on("comments"):
            if is_section_header(trimmed):
                findings.append(
                    Finding(
                        line=lineno,
                        col=0,
                        matched=trimmed,
                        message="Section header comment: dividers add noise without value",
                        replacement=None,
                        severity="high",
                        rule_id="code/section-header",
                    )
                )
            if is_bare_todo(trimmed):
                findings.append(
                    Finding(
                        line=lineno,
                        col=0,
                        matched=trimmed,
                        message="Bare TODO without context or ticket reference",
                        replacement=None,
                        severity="critical",
                        rule_id="code/bare-todo",
                    )
                )

        if on("docstrings"):
            for phrase in DOCSTRING_PHRASES:
                pos = lower.find(phrase)
                if pos >= 0:
                    findings.append(
                        Finding(
                            line=lineno,
                            col=byte_col(lower, pos),
                            matched=phrase,
                            message=f"LLM docstring boilerplate: '{phrase}'",
                            replacement=None,
                            severity="high",
                            rule_id="code/docstring-boilerplate",
                        )
                    )

        if on("naming"):
            findings.extend(check_naming(line, lineno))

        if on("commits"):
            findings.extend(check_commit_line(line, lineno))

    return findings


def run_code_rules(content: str, ctx) -> List[Finding]:
    findings = apply_code_rules(content, ctx.categories)
    # commit files scanned with a narrowed category list still get commit checks
    if ctx.is_commit_file and ctx.categories and "commits" not in ctx.categories:
        findings.extend(apply_code_rules(content, ["commits"]))
    return findings


def get_rules():
    return [run_code_rules]
