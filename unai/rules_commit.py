from typing import Iterable, List

from .boundary import LoweredLine, is_word_boundary
from .models import Finding
from .utils import byte_col, split_lines

VAGUE_PHRASES = ("update stuff", "fix things", "wip", "misc changes", "minor fixes")

# Human subjects use the imperative; generated ones drift into past tense (Lopes 2024).
PAST_TENSE_VERBS = frozenset(
    [
        "added",
        "fixed",
        "updated",
        "changed",
        "removed",
        "modified",
        "implemented",
        "refactored",
        "created",
        "deleted",
        "moved",
        "improved",
        "enhanced",
        "cleaned",
        "bumped",
        "dropped",
        "replaced",
        "resolved",
        "addressed",
        "reverted",
    ]
)

VAGUE_SCOPE_WORDS = ("various", "several", "multiple", "many")


def _finding(lineno, col, matched, message, severity, rule) -> Finding:
    return Finding(
        line=lineno,
        col=col,
        matched=matched,
        message=message,
        replacement=None,
        severity=severity,
        rule_id=f"commit/{rule}",
    )


def _subject_verb(lower: str) -> str:
    words = lower.split()
    if not words:
        return ""
    if words[0].endswith(":"):
        return words[1] if len(words) > 1 else ""
    return words[0]


def _title_case_words(line: str) -> List[str]:
    words = line.split()
    if words and words[0].endswith(":"):
        words = words[1:]
    return words


def check_commit_line(raw: str, lineno: int) -> List[Finding]:
    """Commit-message checks for one line; the subject checks only fire on line 1.

    Matching runs on the trimmed, lowercased line. Columns and ``matched`` are
    taken from ``raw`` so they stay aligned with the untrimmed input.
    """
    findings: List[Finding] = []
    line = raw.strip()
    lead = len(raw) - len(raw.lstrip())
    lowered = LoweredLine(line)
    lower = lowered.lower

    def locate(idx: int, length: int):
        span = lowered.span(idx, idx + length)
        if span is None:
            return byte_col(raw, lead), line
        start, stop = span
        return byte_col(raw, lead + start), raw[lead + start : lead + stop]

    for phrase in VAGUE_PHRASES:
        idx = lower.find(phrase)
        if idx >= 0:
            col, matched = locate(idx, len(phrase))
            findings.append(
                _finding(
                    lineno,
                    col,
                    matched,
                    f"Vague commit message: '{phrase}'",
                    "low",
                    "vague-phrase",
                )
            )

    if lineno == 1:
        verb = _subject_verb(lower)
        if verb in PAST_TENSE_VERBS:
            col, matched = locate(max(lower.find(verb), 0), len(verb))
            findings.append(
                _finding(
                    lineno,
                    col,
                    matched,
                    "Past tense in commit subject: use imperative mood ('add' not 'added')",
                    "high",
                    "past-tense",
                )
            )

        for word in VAGUE_SCOPE_WORDS:
            for idx in _find_iter(lower, word):
                if is_word_boundary(lower, idx, idx + len(word)):
                    col, matched = locate(idx, len(word))
                    findings.append(
                        _finding(
                            lineno,
                            col,
                            matched,
                            "Vague scope in commit subject: name the specific change",
                            "high",
                            "vague-scope",
                        )
                    )
                    break

        words = _title_case_words(line)
        capitalized = sum(1 for w in words if w[0].isupper())
        if len(words) >= 3 and capitalized >= 3:
            findings.append(
                _finding(
                    lineno,
                    byte_col(raw, lead),
                    line,
                    "Title-case commit subject: use sentence case",
                    "medium",
                    "title-case",
                )
            )

    if lineno == 3 and line:
        findings.append(
            _finding(
                lineno,
                byte_col(raw, lead),
                line,
                "Commit body on single-purpose change may over-explain (arxiv:2601.17406)",
                "low",
                "over-explanation",
            )
        )

    return findings


def _find_iter(haystack: str, needle: str) -> Iterable[int]:
    cursor = 0
    while True:
        idx = haystack.find(needle, cursor)
        if idx < 0:
            return
        yield idx
        cursor = idx + len(needle)


def apply_commit_rules(content: str) -> List[Finding]:
    findings: List[Finding] = []
    for idx, line in enumerate(split_lines(content)):
        findings.extend(check_commit_line(line, idx + 1))
    return findings


def run_commit_rules(content: str, ctx) -> List[Finding]:
    return apply_commit_rules(content)


def get_rules():
    return [run_commit_rules]
