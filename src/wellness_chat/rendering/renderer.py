"""Markdown-to-HTML rendering for AI chat replies.

``render`` runs a fixed, ordered pipeline of pure string-to-string stages:

   1. protect_tables        tables rendered and parked behind block tokens
   2. escape_html           &, <, > escaped; tokens are unaffected
   3. protect_code_blocks   ```fenced``` code rendered and parked
   4. protect_inline_code   `code` rendered and parked
   5. apply_bold            **x** / __x__
   6. apply_italic          *x* / _x_
   7. apply_horizontal_rules
   8. apply_blockquotes     single-line "> " quotes
   9. apply_headers         ###, ##, #
  10. apply_ordered_lists   "1. x" runs wrapped in <ol>
  11. apply_unordered_lists "- x" / "* x" runs wrapped in <ul>
  12. isolate_blocks        block lines moved into paragraphs of their own
  13. wrap_paragraphs       blank lines -> </p><p>, newlines -> <br>
  14. clean_paragraphs      <p> stripped from around block elements
  15. PlaceholderStore.restore

Order is load-bearing: each stage relies on what earlier stages guarantee
(e.g. italics after bold, list wrapping after item tagging).  The whole
pipeline sits behind one failure boundary; any fault yields the escaped
original text in a single paragraph.

Not idempotent: rendering rendered HTML double-escapes it.  Store the plain
reply text and render it once.
"""

import html
import logging
import re

from wellness_chat.rendering.inline import apply_bold, apply_italic
from wellness_chat.rendering.patterns import (
    BLANK_LINE_RE,
    BLOCK_TAG_PREFIXES,
    BLOCKQUOTE_RE,
    CODE_BLOCK_RE,
    EMPTY_PARAGRAPH_RE,
    HEADER_RES,
    HR_RE,
    INLINE_CODE_RE,
    OL_ITEM_CLASS,
    ORDERED_ITEM_RE,
    P_AFTER_BLOCK_RE,
    P_BEFORE_BLOCK_RE,
    PARAGRAPH_BREAK_RE,
    UL_ITEM_CLASS,
    UNORDERED_ITEM_RE,
)
from wellness_chat.rendering.placeholders import INLINE, PlaceholderStore
from wellness_chat.rendering.tables import split_tables

logger = logging.getLogger(__name__)


# ─── Protection Stages ───────────────────────────────────────────────────────


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def protect_tables(text: str, store: PlaceholderStore) -> str:
    """Render every markdown table and replace it with a block token.

    Shares split_tables with extract_tables, so a failed table scan renders
    the text without tables.
    """
    return "\n".join(store.stash(content) if is_table else content for content, is_table in split_tables(text))


def escape_html(text: str) -> str:
    """Escape &, < and > so no input text can be read as markup."""
    return html.escape(text, quote=False)


def protect_code_blocks(text: str, store: PlaceholderStore) -> str:
    """Render fenced code blocks and park each behind a block token on its own line."""

    def _stash(match: re.Match) -> str:
        code = match.group(1)
        if code.endswith("\n"):
            code = code[:-1]
        return "\n" + store.stash(f"<pre><code>{code}</code></pre>") + "\n"

    return CODE_BLOCK_RE.sub(_stash, text)


def protect_inline_code(text: str, store: PlaceholderStore) -> str:
    """Render `code` spans and park each behind an inline token."""
    return INLINE_CODE_RE.sub(lambda m: store.stash(f"<code>{m.group(1)}</code>", INLINE), text)


# ─── Block Stages ────────────────────────────────────────────────────────────


def apply_horizontal_rules(text: str) -> str:
    return HR_RE.sub("<hr>", text)


def apply_blockquotes(text: str) -> str:
    """One <blockquote> per quoted line; consecutive quote lines are not merged."""
    return BLOCKQUOTE_RE.sub(r"<blockquote>\1</blockquote>", text)


def apply_headers(text: str) -> str:
    for pattern, tag in HEADER_RES:
        text = pattern.sub(rf"<{tag}>\1</{tag}>", text)
    return text


def _wrap_list_runs(text: str, item_class: str, list_tag: str) -> str:
    """Wrap each maximal run of consecutive tagged <li> lines in one list element.

    The run collapses onto a single line and the internal item class is
    removed from the items.
    """
    opener = f'<li class="{item_class}">'
    lines: list[str] = []
    run: list[str] = []
    for line in text.split("\n"):
        if line.startswith(opener):
            run.append("<li>" + line[len(opener) :])
            continue
        if run:
            lines.append(f"<{list_tag}>{''.join(run)}</{list_tag}>")
            run = []
        lines.append(line)
    if run:
        lines.append(f"<{list_tag}>{''.join(run)}</{list_tag}>")
    return "\n".join(lines)


def apply_ordered_lists(text: str) -> str:
    text = ORDERED_ITEM_RE.sub(rf'<li class="{OL_ITEM_CLASS}">\1</li>', text)
    return _wrap_list_runs(text, OL_ITEM_CLASS, "ol")


def apply_unordered_lists(text: str) -> str:
    text = UNORDERED_ITEM_RE.sub(rf'<li class="{UL_ITEM_CLASS}">\1</li>', text)
    return _wrap_list_runs(text, UL_ITEM_CLASS, "ul")


# ─── Paragraph Stages ────────────────────────────────────────────────────────


def isolate_blocks(text: str, store: PlaceholderStore) -> str:
    """Surround every block-level line with blank lines.

    After this, paragraph wrapping gives each block a paragraph of its own,
    which clean_paragraphs then removes.  Block tokens (tables, code blocks)
    become paragraph-exempt the same way.
    """
    lines: list[str] = []
    for line in text.split("\n"):
        if line.startswith(BLOCK_TAG_PREFIXES) or store.is_block_token(line):
            lines.extend(("", line, ""))
        else:
            lines.append(line)
    return "\n".join(lines)


def wrap_paragraphs(text: str) -> str:
    """Blank lines become paragraph breaks, single newlines become <br>."""
    text = BLANK_LINE_RE.sub("", text).strip("\n")
    text = PARAGRAPH_BREAK_RE.sub("</p><p>", text)
    text = text.replace("\n", "<br>")
    return f"<p>{text}</p>"


def clean_paragraphs(text: str, store: PlaceholderStore) -> str:
    """Lift block elements and block tokens out of <p>, then drop empty paragraphs."""
    text = P_BEFORE_BLOCK_RE.sub("", text)
    text = P_AFTER_BLOCK_RE.sub(r"\1", text)
    text = re.sub(rf"<p>({store.block_pattern.pattern})</p>", r"\1", text)
    return EMPTY_PARAGRAPH_RE.sub("", text)


# ─── Entry Points ────────────────────────────────────────────────────────────


def fallback_html(text: str) -> str:
    """Degraded output: the escaped original text in one paragraph."""
    return f"<p>{escape_html(text)}</p>"


def _run_pipeline(text: str) -> str:
    text = normalize_newlines(text)
    store = PlaceholderStore(text)

    out = protect_tables(text, store)
    out = escape_html(out)
    out = protect_code_blocks(out, store)
    out = protect_inline_code(out, store)
    out = apply_bold(out)
    out = apply_italic(out)
    out = apply_horizontal_rules(out)
    out = apply_blockquotes(out)
    out = apply_headers(out)
    out = apply_ordered_lists(out)
    out = apply_unordered_lists(out)
    out = isolate_blocks(out, store)
    out = wrap_paragraphs(out)
    out = clean_paragraphs(out, store)
    return store.restore(out)


def render(text: str) -> str:
    """Render a chat reply's markdown as an HTML fragment.

    Never raises: on any internal fault the escaped original text is
    returned in a single paragraph.  ``None`` renders as an empty string.
    """
    text = "" if text is None else str(text)
    try:
        return _run_pipeline(text)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Markdown rendering failed for %d chars; returning escaped text", len(text))
        return fallback_html(text)
