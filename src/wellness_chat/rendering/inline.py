"""Inline markdown rules: code spans, bold, and italic.

Every function here expects text that is already HTML-escaped and returns
text with the corresponding tags inserted.  None of the patterns cross a
newline, so an unmatched delimiter can never pull a tag across a paragraph
boundary.
"""

from wellness_chat.rendering.patterns import (
    BOLD_STAR_RE,
    BOLD_UNDERSCORE_RE,
    INLINE_CODE_RE,
    ITALIC_STAR_RE,
    ITALIC_UNDERSCORE_RE,
)


def apply_bold(text: str) -> str:
    """Convert **text** and __text__ to <strong> (non-greedy, one line at a time)."""
    text = BOLD_STAR_RE.sub(r"<strong>\1</strong>", text)
    return BOLD_UNDERSCORE_RE.sub(r"<strong>\1</strong>", text)


def apply_italic(text: str) -> str:
    """Convert *text* and _text_ to <em>.  Must run after apply_bold."""
    text = ITALIC_STAR_RE.sub(r"<em>\1</em>", text)
    return ITALIC_UNDERSCORE_RE.sub(r"<em>\1</em>", text)


def format_inline(text: str) -> str:
    """Apply code, bold and italic rules to a single escaped fragment.

    Code spans are split out first so their contents never pick up emphasis.
    Used for table cells, which bypass the main pipeline.
    """
    parts = INLINE_CODE_RE.split(text)
    # re.split with one group: even indices are prose, odd indices are code contents
    for i, part in enumerate(parts):
        if i % 2:
            parts[i] = f"<code>{part}</code>"
        else:
            parts[i] = apply_italic(apply_bold(part))
    return "".join(parts)
