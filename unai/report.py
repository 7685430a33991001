import difflib
import json
import sys
from typing import Dict, Iterable, List, Optional, TextIO

from .models import SEVERITIES, VERSION, Finding
from .utils import char_byte_offsets, split_lines

RED = "\033[0;31m"
YELLOW = "\033[0;33m"
BOLD_RED = "\033[1;31m"
BOLD_YELLOW = "\033[1;33m"
NC = "\033[0m"

SEVERITY_COLORS = {
    "critical": BOLD_RED,
    "high": BOLD_YELLOW,
    "medium": YELLOW,
    "low": "",
}


def _summarize(findings: Iterable[Finding]) -> Dict[str, int]:
    totals = {"total": 0, "critical": 0, "high": 0, "medium": 0, "low": 0}
    for f in findings:
        totals["total"] += 1
        totals[f.severity] += 1
    return totals


def to_text_report(findings: List[Finding], mode: str, color: bool = False) -> str:
    """Severity-grouped summary, most severe first."""
    lines = [f"Mode: {mode}  |  {len(findings)} finding(s)"]
    for sev in SEVERITIES:
        group = [f for f in findings if f.severity == sev]
        if not group:
            continue
        style = SEVERITY_COLORS[sev] if color else ""
        reset = NC if color and style else ""
        lines.append("")
        lines.append(f"{style}{sev.upper()} ({len(group)}){reset}")
        for f in group:
            lines.append(f"  line {f.line}: {f.message} '{f.matched}'")
    return "\n".join(lines) + "\n"


def to_dry_run(findings: List[Finding]) -> str:
    fixable = [f for f in findings if f.fixable]
    flagged = [f for f in findings if not f.fixable]
    lines = []
    if fixable:
        lines.append(f"--- Auto-fixable ({len(fixable)}) ---")
        for f in fixable:
            if f.replacement == "":
                lines.append(f"  line {f.line:>4}: [remove] {f.matched!r}  : {f.message}")
            else:
                lines.append(
                    f"  line {f.line:>4}: {f.matched!r} → {f.replacement!r}  : {f.message}"
                )
    if flagged:
        lines.append(f"--- Flagged (no auto-fix) ({len(flagged)}) ---")
        for f in flagged:
            lines.append(f"  line {f.line:>4}: {f.matched!r}  : {f.message}")
    return "\n".join(lines) + "\n" if lines else ""


def _display_col(line: str, byte_col: int) -> int:
    offsets = char_byte_offsets(line)
    for idx, off in enumerate(offsets):
        if off >= byte_col:
            return idx
    return len(line)


def print_annotated(
    content: str,
    findings: List[Finding],
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> None:
    """Echo each line to ``out`` with caret annotations for its findings on ``err``."""
    out = out or sys.stdout
    err = err or sys.stderr
    by_line: Dict[int, List[Finding]] = {}
    for f in findings:
        by_line.setdefault(f.line, []).append(f)

    for idx, line in enumerate(split_lines(content)):
        out.write(line + "\n")
        for f in by_line.get(idx + 1, []):
            arrow = " " * _display_col(line, f.col) + "^"
            if f.replacement == "":
                hint = " (remove line)"
            elif f.replacement is not None:
                hint = f' → "{f.replacement}"'
            else:
                hint = ""
            err.write(f"  {arrow}{hint}\n")
            err.write(f"  {f.message}\n")


def unified_diff(
    original: str, modified: str, orig_name: str = "original", mod_name: str = "cleaned"
) -> str:
    """Line diff with three lines of context; empty when the lines are identical."""
    a = split_lines(original)
    b = split_lines(modified)
    if a == b:
        return ""
    diff = difflib.unified_diff(a, b, fromfile=orig_name, tofile=mod_name, lineterm="")
    return "\n".join(diff) + "\n"


def to_json(findings: List[Finding], mode: str, filename: Optional[str] = None) -> str:
    report = {
        "version": VERSION,
        "mode": mode,
        "file": filename,
        "findings": [
            {
                "line": f.line,
                "column": f.col,
                "end_column": f.end_col,
                "matched": f.matched,
                "message": f.message,
                "severity": f.severity,
                "replacement": f.replacement,
                "source": mode,
            }
            for f in findings
        ],
        "summary": _summarize(findings),
    }
    return json.dumps(report, indent=2, ensure_ascii=False) + "\n"


def to_markdown(findings: List[Finding], mode: str, filename: Optional[str] = None) -> str:
    if not findings:
        return "✅ No LLM-isms found.\n"
    lines = ["# unai Report", ""]
    if filename:
        lines.append(f"**File:** `{filename}`  ")
    lines.append(f"**Mode:** {mode}")
    totals = _summarize(findings)
    lines.append(
        "**Summary:** "
        + ", ".join(
            f"{label.capitalize()}: {count}"
            for label, count in totals.items()
            if count > 0 or label == "total"
        )
    )
    lines.append("")
    for idx, f in enumerate(findings, start=1):
        lines.append(f"## {idx}. [{f.severity.upper()}] {f.rule_id} (line {f.line}, col {f.col})")
        lines.append(f"{f.message}\n")
        lines.append(f"Matched: `{f.matched}`")
        if f.replacement == "":
            lines.append("**Fix:** remove the line")
        elif f.replacement is not None:
            lines.append(f"**Fix:** replace with `{f.replacement}`")
        lines.append("")
    return "\n".join(lines)


def to_sarif(findings: List[Finding], filename: Optional[str] = None) -> str:
    rules = {}
    results = []
    uri = filename or "<stdin>"
    for f in findings:
        rules.setdefault(
            f.rule_id,
            {"id": f.rule_id, "shortDescription": {"text": f.message[:80]}},
        )
        results.append(
            {
                "ruleId": f.rule_id,
                "level": {
                    "low": "note",
                    "medium": "warning",
                    "high": "error",
                    "critical": "error",
                }[f.severity],
                "message": {"text": f.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": uri},
                            "region": {
                                "startLine": max(f.line, 1),
                                "startColumn": f.col + 1,
                                "endColumn": f.end_col + 1,
                            },
                        }
                    }
                ],
            }
        )
    sarif = {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "unai",
                        "version": VERSION,
                        "rules": list(rules.values()),
                    }
                },
                "results": results,
            }
        ],
    }
    return json.dumps(sarif, indent=2) + "\n"
