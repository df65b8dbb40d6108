"""Unit tests for PlaceholderStore token minting and restoration."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from wellness_chat.rendering import placeholders
from wellness_chat.rendering.errors import PlaceholderError, RenderError
from wellness_chat.rendering.placeholders import BLOCK, INLINE, PlaceholderStore


class TestStash:

    def test_token_alphabet(self):
        """Tokens are letters and digits only, so escaping and markdown rules cannot touch them."""
        store = PlaceholderStore("")
        token = store.stash("<table></table>")
        assert token.isalnum()
        assert token.isascii()

    def test_tokens_are_distinct(self):
        store = PlaceholderStore("")
        tokens = {store.stash(f"<i>{i}</i>") for i in range(12)}
        assert len(tokens) == 12
        assert len(store) == 12

    def test_unknown_kind_rejected(self):
        store = PlaceholderStore("")
        with pytest.raises(ValueError):
            store.stash("<hr>", kind="X")

    def test_stem_avoids_source_text(self, monkeypatch):
        stems = iter(["deadbeef", "cafef00d"])
        monkeypatch.setattr(placeholders.secrets, "token_hex", lambda _n: next(stems))
        store = PlaceholderStore("literal PHdeadbeef in the reply")
        assert store.stash("<hr>").startswith("PHcafef00d")


class TestBlockTokens:

    def test_block_token_detected(self):
        store = PlaceholderStore("")
        assert store.is_block_token(store.stash("<pre></pre>", BLOCK)) is True

    def test_inline_token_is_not_block(self):
        store = PlaceholderStore("")
        assert store.is_block_token(store.stash("<code>x</code>", INLINE)) is False

    def test_token_with_surrounding_text_is_not_block(self):
        store = PlaceholderStore("")
        token = store.stash("<pre></pre>")
        assert store.is_block_token(f"see {token}") is False


class TestRestore:

    def test_restores_in_place(self):
        store = PlaceholderStore("")
        first = store.stash("<table>1</table>")
        second = store.stash("<code>2</code>", INLINE)
        assert store.restore(f"a {second} b\n{first}") == "a <code>2</code> b\n<table>1</table>"

    def test_many_tokens_do_not_collide(self):
        """Token 1 must not be confused with token 10."""
        store = PlaceholderStore("")
        fragments = [f"<b>{i}</b>" for i in range(11)]
        tokens = [store.stash(fragment) for fragment in fragments]
        assert store.restore("|".join(tokens)) == "|".join(fragments)

    def test_nothing_stashed(self):
        assert PlaceholderStore("").restore("plain") == "plain"

    def test_missing_token_raises(self):
        store = PlaceholderStore("")
        store.stash("<table></table>")
        with pytest.raises(PlaceholderError):
            store.restore("the token was lost")

    def test_duplicated_token_raises(self):
        store = PlaceholderStore("")
        token = store.stash("<table></table>")
        with pytest.raises(PlaceholderError):
            store.restore(token + token)

    def test_placeholder_error_is_render_error(self):
        assert issubclass(PlaceholderError, RenderError)
