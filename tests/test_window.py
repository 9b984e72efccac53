# ───────────────────────── tests/test_window.py ─────────────────────────
"""
Tests for context window construction.
"""

import pytest

from stylecheck.text_format import tokenize
from stylecheck.window import EMPTY_WINDOW, ContextWindow, SearchCursor, WindowBuilder

WORDS = {"a", "dog", "the", "cat", "sat", "on", "mat", "and", "slept"}


@pytest.fixture
def builder():
    return WindowBuilder(WORDS.__contains__)


class TestContextWindow:
    """Test the window value type."""

    def test_error_slot_must_be_in_range(self):
        """A slot outside the words is rejected."""
        with pytest.raises(ValueError):
            ContextWindow(words=("a",), error_slot=1)

    def test_error_word(self):
        """The error word is the word at the slot."""
        window = ContextWindow(words=("the", "cta"), error_slot=1)
        assert window.error_word == "cta"
        assert len(window) == 2
        assert EMPTY_WINDOW.error_word is None


class TestWindowBuilder:
    """Test window bounds and shrinking."""

    def test_full_window(self, builder):
        """Two words to each side are kept when all are valid."""
        window = builder.build_window("The dog sat on the mat", "on")
        assert window.words == ("dog", "sat", "on", "the", "mat")
        assert window.error_slot == 2
        assert window.token_index == 3

    def test_clamped_at_document_start(self, builder):
        """The window never reaches before the first word."""
        window = builder.build_window("Teh dog sat on", "Teh")
        assert window.words == ("teh", "dog", "sat")
        assert window.error_slot == 0

    def test_known_error_excluded(self, builder):
        """A known error to the left moves the window start past it."""
        window = builder.build_window("A dog the cat sat", "cat", other_error_offsets=[6])
        assert window.words == ("cat", "sat")
        assert window.error_slot == 0

    def test_unknown_word_excluded(self, builder):
        """Words failing the word test shrink the window from the right."""
        window = builder.build_window("the cta sta on mat", "cta")
        assert window.words == ("the", "cta")
        assert window.error_slot == 1

    def test_nearest_intruder_wins(self, builder):
        """Of two intruders on one side, the closer one sets the bound."""
        window = builder.build_window("xq zz cat sat on", "cat")
        assert window.words == ("cat", "sat", "on")
        assert window.error_slot == 0

    def test_words_lowercased(self, builder):
        """Window words are lowercased."""
        window = builder.build_window("The Cat sat.", "Cat")
        assert window.words == ("the", "cat", "sat")

    def test_flagged_word_not_found(self, builder):
        """An absent word yields the empty window."""
        assert builder.build_window("The dog sat", "cat") == EMPTY_WINDOW

    def test_squeezed_to_flagged_word(self):
        """Intruders on both sides leave the flagged word alone."""
        builder = WindowBuilder(lambda word: False)
        tokens = tokenize("xx yy zz")
        window = builder.build_at(tokens, 1, other_error_indices=[0, 2])
        assert window.words == ("yy",)
        assert window.error_slot == 0

    def test_index_out_of_range(self, builder):
        """Indices outside the document give the empty window."""
        assert builder.build_at(tokenize("the cat"), 5) == EMPTY_WINDOW


class TestSearchCursor:
    """Test resuming searches with an explicit cursor."""

    def test_repeated_word_found_in_order(self, builder):
        """Advancing the cursor finds the next occurrence of the same word."""
        text = "the cta sat and the cta slept"
        first = builder.build_window(text, "cta")
        cursor = SearchCursor().advance(first)
        second = builder.build_window(text, "cta", cursor=cursor)

        assert first.token_index == 1
        assert cursor == SearchCursor(2)
        assert second.token_index == 5

    def test_empty_window_keeps_cursor(self):
        """A failed search leaves the cursor where it was."""
        cursor = SearchCursor(4)
        assert cursor.advance(EMPTY_WINDOW) is cursor
