"""Word boundaries, inline backtick spans and lowercase/original offset mapping.

All positions here are character indices into a Python ``str``. Byte columns are
derived from them only when a Finding is built.
"""

import unicodedata
from typing import List, Optional, Tuple

from .utils import char_byte_offsets

# Accents and other generic diacritics; they never glue a match to a word.
COMBINING_DIACRITICS = range(0x0300, 0x0370)


def lower_chars(text: str) -> str:
    """Lowercase one character at a time.

    ``str.lower`` on a whole string is context-sensitive (a word-final ``Σ``
    becomes ``ς``); needles and lines must lower the same way to match.
    """
    return "".join(ch.lower() for ch in text)


def is_word_char(ch: str) -> bool:
    """Letters and digits, plus script vowel signs such as Devanagari ``ा``.

    Combining marks outside the generic diacritics block are treated as part of
    the word they follow.
    """
    if ch.isalnum():
        return True
    if unicodedata.category(ch) not in ("Mn", "Mc"):
        return False
    return ord(ch) not in COMBINING_DIACRITICS


def is_word_boundary(line: str, start: int, end: int) -> bool:
    """True when ``line[start:end]`` is not glued to a word character on either side.

    ``_`` is not a word character here; naming checks handle it themselves.
    """
    if start < 0 or end > len(line) or start > end:
        return False
    before_ok = start == 0 or not is_word_char(line[start - 1])
    after_ok = end >= len(line) or not is_word_char(line[end])
    return before_ok and after_ok


def is_in_backtick_span(line: str, start: int, end: int) -> bool:
    """True when ``[start, end)`` sits entirely inside one single-backtick span.

    The toggle runs before the position test so the backtick itself is never
    inside. An unclosed backtick keeps the rest of the line inside.
    """
    inside = False
    for i, ch in enumerate(line):
        if ch == "`":
            inside = not inside
        if i >= start:
            if not inside or ch == "`":
                return False
            for j in range(i + 1, len(line)):
                if j >= end:
                    return True
                if line[j] == "`":
                    return False
            return True
    return False


class LoweredLine:
    """A line lowercased character by character, with a map back to the original.

    ``str.lower`` may expand a character (``İ`` becomes ``i̇``), so positions in
    :attr:`lower` are translated through :meth:`to_original`; a position that
    falls inside such an expansion has no original counterpart.
    """

    def __init__(self, line: str):
        self.original = line
        pieces = [ch.lower() for ch in line]
        self.lower = "".join(pieces)
        self._group_start = {}
        pos = 0
        for idx, piece in enumerate(pieces):
            self._group_start[pos] = idx
            pos += len(piece)
        self._group_start[pos] = len(line)
        self._byte_offsets = char_byte_offsets(line)

    def to_original(self, lower_idx: int) -> Optional[int]:
        return self._group_start.get(lower_idx)

    def span(self, lower_start: int, lower_end: int) -> Optional[Tuple[int, int]]:
        start = self.to_original(lower_start)
        end = self.to_original(lower_end)
        if start is None or end is None:
            return None
        return start, end

    def byte_offset(self, orig_idx: int) -> int:
        return self._byte_offsets[orig_idx]

    def find_all(self, needle: str) -> List[int]:
        """Non-overlapping forward search of ``needle`` in the lowered line."""
        hits = []
        if not needle:
            return hits
        cursor = 0
        while True:
            pos = self.lower.find(needle, cursor)
            if pos < 0:
                return hits
            hits.append(pos)
            cursor = pos + len(needle)
