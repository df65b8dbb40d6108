"""Compiled regex patterns and constants for chat-reply markdown rendering.

Line-anchored patterns (headers, lists, rules, blockquotes) are compiled with
re.MULTILINE and run against text that has already been HTML-escaped, which
is why the blockquote marker is ``&gt;`` rather than ``>``.  Inline patterns
never cross a newline.  Used by tables.py and renderer.py.
"""

import re

# ─── Table Patterns ───────────────────────────────────────────────────────────

# CSS class carried by every rendered table
TABLE_CSS_CLASS = "chat-table"

# Column delimiter for markdown table rows
CELL_DELIMITER = "|"

# Header/body separator row, e.g. "|---|:---:|" (pipes, hyphens, colons, whitespace only)
TABLE_SEPARATOR_RE = re.compile(r"^[\s|:-]+$")


# ─── Block Patterns ──────────────────────────────────────────────────────────

# Fenced code block.  An optional language hint on the opening line is dropped.
# Also decides which lines the table scanner treats as code; escaping leaves
# backticks and newlines alone, so matches agree on raw and escaped text.
CODE_BLOCK_RE = re.compile(r"```(?:[\w+#.-]*\n)?(.*?)```", re.DOTALL)

# Horizontal rule: a line of three or more hyphens
HR_RE = re.compile(r"^-{3,}[ \t]*$", re.MULTILINE)

# Blockquote line (input already escaped, so "> " arrives as "&gt; ")
BLOCKQUOTE_RE = re.compile(r"^&gt; (.+)$", re.MULTILINE)

# Headers, most specific first so "#" never claims a "##" line
HEADER_RES = (
    (re.compile(r"^### (.+)$", re.MULTILINE), "h3"),
    (re.compile(r"^## (.+)$", re.MULTILINE), "h2"),
    (re.compile(r"^# (.+)$", re.MULTILINE), "h1"),
)

# List items: "1. text" and "- text" / "* text"
ORDERED_ITEM_RE = re.compile(r"^\d+\. (.+)$", re.MULTILINE)
UNORDERED_ITEM_RE = re.compile(r"^[*-] (.+)$", re.MULTILINE)

# Internal classes marking list items until their runs are wrapped
OL_ITEM_CLASS = "ol-item"
UL_ITEM_CLASS = "ul-item"


# ─── Inline Patterns ─────────────────────────────────────────────────────────

INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")

# Bold: **text** anywhere, __text__ only between non-word characters
BOLD_STAR_RE = re.compile(r"\*\*([^*\n]+?)\*\*")
BOLD_UNDERSCORE_RE = re.compile(r"(?<!\w)__([^_\n]+?)__(?!\w)")

# Italic: *text* must hug its content, so "2 * 3 * 4" and "* item" stay literal
ITALIC_STAR_RE = re.compile(r"\*(?![\s*])([^*\n]+?)(?<!\s)\*")
ITALIC_UNDERSCORE_RE = re.compile(r"(?<!\w)_(?![\s_])([^_\n]+?)(?<!\s)_(?!\w)")


# ─── Paragraph Patterns ──────────────────────────────────────────────────────

# Whitespace-only line contents (treated as blank before paragraph wrapping)
BLANK_LINE_RE = re.compile(r"^[ \t]+$", re.MULTILINE)

PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")

# Opening tags of block-level elements that must never sit inside <p>
BLOCK_TAG_PREFIXES = ("<h1>", "<h2>", "<h3>", "<hr>", "<blockquote>", "<ul>", "<ol>", "<pre>")

# <p> directly before / </p> directly after a block-level element
P_BEFORE_BLOCK_RE = re.compile(r"<p>(?=<(?:h[1-3]|hr|blockquote|ul|ol|pre)>)")
P_AFTER_BLOCK_RE = re.compile(r"(</h[1-3]>|<hr>|</blockquote>|</ul>|</ol>|</pre>)</p>")

# Paragraphs left empty once block elements have been lifted out
EMPTY_PARAGRAPH_RE = re.compile(r"<p>(?:\s|<br>)*</p>")
