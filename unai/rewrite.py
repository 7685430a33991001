import logging
from typing import Dict, Iterable, List, Set

from .models import Finding
from .utils import is_utf8_boundary, split_lines

logger = logging.getLogger(__name__)


def apply_case(original: str, replacement: str) -> str:
    """Capitalise ``replacement`` when ``original`` starts with an uppercase letter."""
    if not original or not replacement:
        return replacement
    if original[0].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


def _fix_line(line: str, fixes: List[Finding]) -> str:
    data = line.encode("utf-8")
    for f in sorted(fixes, key=lambda f: f.col, reverse=True):
        end = f.col + len(f.matched.encode("utf-8"))
        if (
            end > len(data)
            or not is_utf8_boundary(data, f.col)
            or not is_utf8_boundary(data, end)
        ):
            logger.warning(
                "skipping invalid offset at line %d col %d (line length %d)",
                f.line,
                f.col,
                len(data),
            )
            continue
        original = data[f.col:end].decode("utf-8")
        fixed = apply_case(original, f.replacement).encode("utf-8")
        data = data[: f.col] + fixed + data[end:]
    return data.decode("utf-8")


def clean(content: str, findings: Iterable[Finding]) -> str:
    """Apply every auto-fixable finding to ``content``.

    A replacement of ``""`` drops the whole line; ``None`` means flag only.
    Findings pointing outside the buffer are ignored, and a fix whose byte
    range does not fit the line is logged and skipped.
    """
    lines = split_lines(content)
    drop: Set[int] = set()
    fixes: Dict[int, List[Finding]] = {}

    for f in findings:
        idx = f.line - 1
        if idx < 0 or idx >= len(lines) or f.replacement is None:
            continue
        if f.replacement == "":
            drop.add(idx)
        else:
            fixes.setdefault(idx, []).append(f)

    for idx, line_fixes in fixes.items():
        if idx in drop:
            continue
        lines[idx] = _fix_line(lines[idx], line_fixes)

    out = "\n".join(line for idx, line in enumerate(lines) if idx not in drop)
    if content.endswith("\n"):
        out += "\n"
    return out
