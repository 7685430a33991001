import os
import sys
from typing import List, Optional, Tuple

from .errors import InputError

MAX_INPUT_BYTES = 64 * 1024 * 1024


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` (stripping a trailing ``\\r``); a final newline adds no line."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def char_byte_offsets(s: str) -> List[int]:
    """Byte offset of every character in ``s`` plus a one-past-the-end sentinel."""
    offsets = []
    pos = 0
    for ch in s:
        offsets.append(pos)
        pos += len(ch.encode("utf-8"))
    offsets.append(pos)
    return offsets


def byte_col(s: str, char_idx: int) -> int:
    return len(s[:char_idx].encode("utf-8"))


def is_utf8_boundary(data: bytes, pos: int) -> bool:
    if pos < 0 or pos > len(data):
        return False
    if pos == len(data):
        return True
    return (data[pos] & 0xC0) != 0x80


def read_text(path: str, limit: int = MAX_INPUT_BYTES) -> str:
    try:
        size = os.path.getsize(path)
    except OSError as e:
        raise InputError(f"Cannot read '{path}': {e.strerror or e}") from e
    if size > limit:
        raise InputError(f"'{path}' exceeds {limit // (1024 * 1024)} MiB size limit")
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise InputError(f"Cannot read '{path}': {e.strerror or e}") from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"Cannot read '{path}': not valid UTF-8") from e


def read_stdin(limit: int = MAX_INPUT_BYTES) -> str:
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    try:
        data = stream.read(limit + 1)
    except OSError as e:
        raise InputError(f"Cannot read stdin: {e}") from e
    if isinstance(data, str):
        data = data.encode("utf-8")
    if len(data) > limit:
        raise InputError(f"stdin input exceeds {limit // (1024 * 1024)} MiB size limit")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError("Cannot read stdin: stdin is not valid UTF-8") from e


def read_input(path: Optional[str]) -> Tuple[str, Optional[str]]:
    """Return ``(content, basename)``; ``path=None`` reads stdin."""
    if path is None:
        return read_stdin(), None
    return read_text(path), os.path.basename(path) or path
