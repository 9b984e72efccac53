# ───────────────────────── src/stylecheck/window.py ─────────────────────────
"""
Context windows for n-gram scoring.

A window is the short run of cleaned words around a flagged token. Other
erroneous words inside that run would corrupt the n-gram estimate, so the
window is shrunk to stop just short of them:

    text:    "A dog the cat sat"      flagged: "cat"   known error: "the"
    initial: [dog, the, cat, sat]     (flagged index +/- 2)
    shrunk:  [cat, sat]               error slot 0

Sequential callers can thread a SearchCursor through ``build_window`` so each
word search resumes after the previous hit instead of rescanning the whole
document. The cursor is an immutable value owned by the caller, so parallel
workers never share one; ``build_at`` skips the search entirely when the
token index is already known.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Collection, Iterable, List, Optional, Sequence, Tuple

from .text_format import Token, clean_word, tokenize

logger = logging.getLogger(__name__)

MAX_N_GRAM_SIZE = 3


@dataclass(frozen=True)
class ContextWindow:
    """Cleaned words around a flagged token.

    Attributes:
        words: Lowercase, punctuation-stripped words.
        error_slot: Index of the flagged word in ``words``, or None.
        token_index: Document word index of the flagged token, or None.
    """

    words: Tuple[str, ...] = ()
    error_slot: Optional[int] = None
    token_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.error_slot is not None and not 0 <= self.error_slot < len(self.words):
            raise ValueError("error_slot must index into the window")

    def __len__(self) -> int:
        return len(self.words)

    @property
    def error_word(self) -> Optional[str]:
        if self.error_slot is None:
            return None
        return self.words[self.error_slot]


EMPTY_WINDOW = ContextWindow()


@dataclass(frozen=True)
class SearchCursor:
    """Document word index where the next flagged-word search begins."""

    position: int = 0

    def advance(self, window: ContextWindow) -> "SearchCursor":
        """Return the cursor positioned just after the window's flagged token."""
        if window.token_index is None:
            return self
        return SearchCursor(window.token_index + 1)


class WindowBuilder:
    """Builds sanitized context windows around flagged tokens.

    Args:
        is_word: Predicate deciding whether a cleaned window word is valid.
            Invalid words other than the flagged word shrink the window.
        max_ngram_size: Order of the n-gram model; the window reaches
            ``max_ngram_size - 1`` words to each side.

    Examples:
        >>> builder = WindowBuilder(lambda w: w in {"a", "dog", "the", "cat", "sat"})
        >>> builder.build_window("A dog the cat sat", "cat", other_error_offsets=[6])
        ContextWindow(words=('cat', 'sat'), error_slot=0, token_index=3)
    """

    def __init__(
        self, is_word: Callable[[str], bool], max_ngram_size: int = MAX_N_GRAM_SIZE
    ):
        self.is_word = is_word
        self.max_ngram_size = max_ngram_size

    def build_window(
        self,
        text: str,
        flagged_word: str,
        other_error_offsets: Iterable[int] = (),
        cursor: SearchCursor = SearchCursor(),
    ) -> ContextWindow:
        """Locate ``flagged_word`` at or after the cursor and build its window.

        Args:
            text: The document text
            flagged_word: The flagged token as it appears in the text
            other_error_offsets: Start offsets of other known errors
            cursor: Where to start searching; advance it with
                ``cursor.advance(window)`` for the next call

        Returns:
            The window, or an empty window if the word is not found
        """
        tokens = tokenize(text)
        index = next(
            (
                i
                for i in range(max(cursor.position, 0), len(tokens))
                if tokens[i].text == flagged_word
            ),
            None,
        )
        if index is None:
            logger.debug(f"Flagged word {flagged_word!r} not found after {cursor}")
            return EMPTY_WINDOW

        offsets = set(other_error_offsets)
        error_indices = [i for i, token in enumerate(tokens) if token.start in offsets]
        return self.build_at(tokens, index, error_indices)

    def build_at(
        self,
        tokens: Sequence[Token],
        index: int,
        other_error_indices: Collection[int] = (),
    ) -> ContextWindow:
        """Build the window around ``tokens[index]``.

        Args:
            tokens: Every token of the document
            index: Document index of the flagged token
            other_error_indices: Document indices of other known errors

        Returns:
            The shrunk window with its error slot, or an empty window
        """
        if not 0 <= index < len(tokens):
            return EMPTY_WINDOW

        reach = self.max_ngram_size - 1
        first = max(index - reach, 0)
        last = min(index + reach, len(tokens) - 1)
        offset = first

        window = [clean_word(token.text) for token in tokens[first : last + 1]]
        flagged = window[index - offset]

        # Shrink around other errors; the nearest one on each side wins
        for position in self._intruders(window, offset, index, other_error_indices):
            if first <= position < index:
                first = position + 1
            elif index < position <= last:
                last = position - 1

        local_first = first - offset
        local_last = last - offset
        if local_last < local_first:
            local_last = min(local_first + 2, len(window) - 1)
            if local_last < local_first:
                return EMPTY_WINDOW

        words = tuple(window[local_first : local_last + 1])
        slot = index - first
        if not 0 <= slot < len(words) or words[slot] != flagged:
            logger.debug(f"Flagged word {flagged!r} fell out of its window")
            return ContextWindow(words=words, token_index=index)

        logger.debug(f"Window for {flagged!r}: {words} (slot {slot})")
        return ContextWindow(words=words, error_slot=slot, token_index=index)

    def _intruders(
        self,
        window: List[str],
        offset: int,
        index: int,
        other_error_indices: Collection[int],
    ) -> List[int]:
        """Return document indices of erroneous window words, left to right."""
        known = set(other_error_indices)
        flagged = window[index - offset]
        intruders = []
        for local, word in enumerate(window):
            position = local + offset
            if position == index:
                continue
            if position in known or (not self.is_word(word) and word != flagged):
                intruders.append(position)
        return intruders
