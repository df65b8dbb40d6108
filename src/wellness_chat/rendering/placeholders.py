"""Placeholder tokens that shield finished HTML from later pipeline stages.

Tables and code are rendered early, then parked behind opaque tokens while
escaping, emphasis and paragraph wrapping run over the surrounding text.
Tokens are built from ASCII letters and digits only, so no stage can match
or alter them, and the token stem is re-drawn until it does not occur in the
input.  Block tokens end up on a line of their own and are lifted out of
paragraphs; inline tokens stay where they were placed.
"""

import re
import secrets

from wellness_chat.rendering.errors import PlaceholderError

BLOCK = "B"
INLINE = "I"


class PlaceholderStore:
    """Per-render registry of stashed HTML fragments.

    One store is created for every ``render`` call and discarded afterwards;
    it is never shared between calls.
    """

    def __init__(self, source: str):
        self._stem = self._new_stem(source)
        self._fragments: list[tuple[str, str]] = []  # (kind, html)
        self._token_re = re.compile(re.escape(self._stem) + r"([BI])(\d+)Z")
        self._block_re = re.compile(re.escape(self._stem) + r"B\d+Z")

    @staticmethod
    def _new_stem(source: str) -> str:
        """Return a token stem that does not appear anywhere in *source*."""
        while True:
            stem = f"PH{secrets.token_hex(4)}"
            if stem not in source:
                return stem

    def __len__(self) -> int:
        return len(self._fragments)

    @property
    def block_pattern(self) -> re.Pattern:
        """Regex matching any block token minted by this store."""
        return self._block_re

    def stash(self, html: str, kind: str = BLOCK) -> str:
        """Store *html* and return the token that stands in for it."""
        if kind not in (BLOCK, INLINE):
            raise ValueError(f"Unknown placeholder kind: {kind!r}")
        self._fragments.append((kind, html))
        return f"{self._stem}{kind}{len(self._fragments) - 1}Z"

    def is_block_token(self, line: str) -> bool:
        """Return True if *line* is exactly one block token."""
        return bool(self._block_re.fullmatch(line))

    def restore(self, text: str) -> str:
        """Replace every token in *text* with its stored HTML, exactly once each.

        Raises PlaceholderError if a token is missing, duplicated, or unknown,
        since restoring anyway would leak a token or drop content.
        """
        found = [int(m.group(2)) for m in self._token_re.finditer(text)]
        if sorted(found) != list(range(len(self._fragments))):
            raise PlaceholderError(f"Expected {len(self._fragments)} placeholders exactly once each, found {len(found)}")

        def _swap(match: re.Match) -> str:
            kind, html = self._fragments[int(match.group(2))]
            if kind != match.group(1):
                raise PlaceholderError(f"Placeholder {match.group(0)} changed kind")
            return html

        return self._token_re.sub(_swap, text)
