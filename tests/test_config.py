"""Unit tests for the config module."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from pathlib import Path

from wellness_chat.config import HOST, MAX_MESSAGE_LENGTH, PORT, ROOT


class TestConfig:

    def test_root_is_project_root(self):
        """ROOT should point to the project root (contains pyproject.toml)."""
        assert isinstance(ROOT, Path)
        assert (ROOT / "pyproject.toml").exists()

    def test_max_message_length_positive(self):
        assert isinstance(MAX_MESSAGE_LENGTH, int)
        assert MAX_MESSAGE_LENGTH > 0

    def test_bind_address(self):
        assert isinstance(HOST, str)
        assert isinstance(PORT, int)
