from typing import Set

from .utils import split_lines

HTML_OPEN = "<!-- unai-ignore -->"
HTML_CLOSE = "<!-- /unai-ignore -->"
BLOCK_START = ("// unai-ignore-start", "# unai-ignore-start")
BLOCK_END = ("// unai-ignore-end", "# unai-ignore-end")
NEXT_LINE = ("// unai-ignore-next-line", "# unai-ignore-next-line")


def collect_ignored_lines(content: str) -> Set[int]:
    """1-based line numbers suppressed by ``unai-ignore`` directives.

    Directives must be the whole (trimmed) line. Marker lines themselves are
    never ignored, and blocks do not nest: a second opener is a no-op and the
    first closer ends the block.
    """
    ignored: Set[int] = set()
    in_html_block = False
    in_code_block = False
    skip_next = False

    for idx, line in enumerate(split_lines(content)):
        lineno = idx + 1
        trimmed = line.strip()

        if skip_next:
            ignored.add(lineno)
            skip_next = False
            continue

        if trimmed == HTML_OPEN:
            in_html_block = True
        elif trimmed == HTML_CLOSE:
            in_html_block = False
        elif trimmed in BLOCK_START:
            in_code_block = True
        elif trimmed in BLOCK_END:
            in_code_block = False
        elif trimmed in NEXT_LINE:
            skip_next = True
        elif in_html_block or in_code_block:
            ignored.add(lineno)

    return ignored
