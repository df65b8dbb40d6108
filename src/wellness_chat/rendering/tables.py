"""Markdown table detection and HTML rendering.

Scans chat text line by line for runs of pipe-containing lines, validates
each run as a table (header row, separator row, at least one data row), and
renders qualifying runs as ``<table class="chat-table">`` HTML.  Everything
else passes through untouched, line breaks included.

Pipeline position: runs FIRST, on raw unescaped text, because the separator
check and cell splitting need the original characters.  Cell text is escaped
here, when the table is rendered.
"""

import html
import logging
from bisect import bisect_right

from wellness_chat.rendering.inline import format_inline
from wellness_chat.rendering.patterns import CELL_DELIMITER, CODE_BLOCK_RE, TABLE_CSS_CLASS, TABLE_SEPARATOR_RE
from wellness_chat.rendering.schema import TableBlock

logger = logging.getLogger(__name__)


# ─── Line Classification ─────────────────────────────────────────────────────


def is_table_row(line: str) -> bool:
    """Return True if the line could belong to a table (contains a pipe)."""
    return CELL_DELIMITER in line


def is_separator_row(line: str) -> bool:
    """Return True for a header/body separator such as '|---|:---:|'."""
    return bool(TABLE_SEPARATOR_RE.match(line.strip()))


def split_cells(line: str) -> list[str]:
    """Split a row on pipes, trim each cell, and drop empty cells."""
    cells = (cell.strip() for cell in line.strip().split(CELL_DELIMITER))
    return [cell for cell in cells if cell]


def fenced_lines(lines: list[str]) -> set[int]:
    """Return indices of lines that overlap a fenced code block.

    Uses the same pattern the renderer uses for code blocks, so a fence only
    counts once a closing fence follows it.  A stray or unclosed fence
    marks nothing.
    """
    text = "\n".join(lines)
    starts = [0]
    for line in lines[:-1]:
        starts.append(starts[-1] + len(line) + 1)

    fenced: set[int] = set()
    for match in CODE_BLOCK_RE.finditer(text):
        first = bisect_right(starts, match.start()) - 1
        last = bisect_right(starts, match.end() - 1) - 1
        fenced.update(range(first, last + 1))
    return fenced


# ─── Run Detection ───────────────────────────────────────────────────────────


def _collect_run(lines: list[str], start: int, fenced: set[int]) -> int:
    """Return the index one past the maximal run of pipe lines beginning at *start*."""
    end = start
    while end < len(lines) and is_table_row(lines[end]) and end not in fenced:
        end += 1
    return end


def _build_table(run: list[str], start: int) -> TableBlock | None:
    """Validate a run of pipe lines; return a TableBlock or None if it is not a table."""
    # Header + separator + at least one data row
    if len(run) < 3:
        return None
    if not is_separator_row(run[1]):
        return None

    rows = [split_cells(line) for line in run[2:]]
    return TableBlock(
        header=split_cells(run[0]),
        rows=[row for row in rows if row],
        start=start,
        end=start + len(run) - 1,
    )


def scan_lines(lines: list[str]) -> list[str | TableBlock]:
    """Group lines into pass-through lines and validated TableBlocks, in order.

    A run of pipe lines that fails validation is emitted line by line,
    verbatim.  Lines inside a fenced code block are never table candidates.
    """
    fenced = fenced_lines(lines)
    segments: list[str | TableBlock] = []
    i = 0
    while i < len(lines):
        if i in fenced or not is_table_row(lines[i]):
            segments.append(lines[i])
            i += 1
            continue

        end = _collect_run(lines, i, fenced)
        table = _build_table(lines[i:end], i)
        if table is None:
            segments.extend(lines[i:end])
        else:
            logger.debug("Table at lines %d-%d: %d columns, %d rows", table.start, table.end, len(table.header), len(table.rows))
            segments.append(table)
        i = end
    return segments


# ─── HTML Rendering ──────────────────────────────────────────────────────────


def _render_cell(tag: str, cell: str) -> str:
    """Escape a raw cell and apply inline formatting."""
    return f"<{tag}>{format_inline(html.escape(cell, quote=False))}</{tag}>"


def render_table_html(table: TableBlock) -> str:
    """Convert a validated TableBlock into a single-line HTML table.

    A header row with no cells gets no <thead>, the same way empty data rows
    get no <tr>.
    """
    parts = [f'<table class="{TABLE_CSS_CLASS}">']
    if table.header:
        parts.append("<thead><tr>")
        parts.extend(_render_cell("th", cell) for cell in table.header)
        parts.append("</tr></thead>")
    parts.append("<tbody>")

    # Data rows (separator already discarded)
    for row in table.rows:
        parts.append("<tr>")
        parts.extend(_render_cell("td", cell) for cell in row)
        parts.append("</tr>")

    parts.append("</tbody></table>")
    return "".join(parts)


# ─── Public Entry Points ─────────────────────────────────────────────────────


def split_tables(text: str) -> list[tuple[str, bool]]:
    """Split *text* into ``(content, is_table)`` segments, one per line or table.

    Table segments hold rendered HTML; every other segment is a source line,
    byte-identical.  Any internal failure yields the whole text as a single
    non-table segment, since a broken table scan must never abort rendering.
    """
    try:
        return [
            (seg, False) if isinstance(seg, str) else (render_table_html(seg), True)
            for seg in scan_lines(text.split("\n"))
        ]
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Table extraction failed; continuing without tables")
        return [(text, False)]


def extract_tables(text: str) -> str:
    """Return *text* with every valid markdown table replaced by its HTML.

    Non-table content is returned byte-identical; on internal failure the
    input comes back unchanged.
    """
    return "\n".join(content for content, _ in split_tables(text))
