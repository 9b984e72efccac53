# ───────────────────────── src/stylecheck/text_format.py ─────────────────────────
"""
Tokenization and small text helpers shared by the engine.

Words are contiguous runs of letters, digits, apostrophes and hyphens. Each
token keeps the offset of its first character in the source text so that
suggestions can be mapped back to the document.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List

# Letters/digits (no underscore), apostrophes and hyphens
WORD_PATTERN = re.compile(r"(?:[^\W_]|['\-])+")

SENTENCE_DELIM = "."

# Single letters that are words on their own
SINGLE_LETTER_WORDS = frozenset("iavx")


@dataclass(frozen=True)
class Token:
    """A word of the document and its start offset."""

    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def tokenize(text: str) -> List[Token]:
    """Split text into word tokens with start offsets.

    Args:
        text: The document text

    Returns:
        Tokens in document order

    Examples:
        >>> [t.text for t in tokenize("It's a well-known fact.")]
        ["It's", 'a', 'well-known', 'fact']
    """
    return [Token(match.group(), match.start()) for match in WORD_PATTERN.finditer(text)]


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in "'-"


def clean_word(word: str) -> str:
    """Strip leading/trailing punctuation and whitespace, then lowercase.

    Apostrophes and hyphens are kept so contractions and compounds survive.

    Examples:
        >>> clean_word('"Hello,')
        'hello'
        >>> clean_word("don't!")
        "don't"
    """
    start = 0
    end = len(word)
    while start < end and not _is_word_char(word[start]):
        start += 1
    while end > start and not _is_word_char(word[end - 1]):
        end -= 1
    return word[start:end].lower()


def is_first_word_in_sentence(text: str, position: int) -> bool:
    """Return True if the word starting at ``position`` opens a sentence.

    Walks backwards over non-alphanumeric characters; a period or the start
    of the text means a new sentence.

    Raises:
        ValueError: If position is outside the text
    """
    if position < 0 or position >= len(text):
        raise ValueError("Position out of range!")
    p = position - 1
    while p >= 0 and not text[p].isalnum():
        if text[p] == SENTENCE_DELIM:
            return True
        p -= 1
    return p < 0


def capitalize_words(words: Iterable[str]) -> List[str]:
    """Upper-case the first character of every word, leaving the rest alone."""
    return [word[:1].upper() + word[1:] for word in words]


def current_sentence(text: str, position: int) -> str:
    """Return the period-delimited sentence containing ``position``.

    Raises:
        ValueError: If position is outside the text
    """
    if position < 0 or position >= len(text):
        raise ValueError("Error index out of range.")
    start = text.rfind(SENTENCE_DELIM, 0, position) + 1
    end = text.find(SENTENCE_DELIM, position)
    if end == -1:
        end = len(text)
    return text[start:end].strip()


def count_occurrences(text: str, char: str, case_sensitive: bool = True) -> int:
    """Count occurrences of a single character in a string."""
    if case_sensitive or not char.isalpha():
        return text.count(char)
    return text.lower().count(char.lower())


def is_numerical_string(text: str, punctuation: bool = False) -> bool:
    """Return True if the string is a number.

    Args:
        text: The string to check
        punctuation: If True, allow a single decimal point and any commas
    """
    for char in text:
        if char.isdigit():
            continue
        if not punctuation:
            return False
        if char == "," or (char == "." and text.count(".") == 1):
            continue
        return False
    return True


def is_single_letter_word(word: str) -> bool:
    return len(word) == 1 and word.lower() in SINGLE_LETTER_WORDS


def contains_letters_or_digits(text: str) -> bool:
    return any(char.isalnum() for char in text)


def contains_non_letters_inside(text: str) -> bool:
    """Return True if a character other than the first or last is not a word char."""
    if not text:
        return False
    if len(text) == 1:
        return not text.isalnum()
    return any(not _is_word_char(char) for char in text[1:-1])


def is_possible_word(word: str) -> bool:
    """Check whether a token can possibly be a word by its format alone."""
    return (
        bool(word)
        and not (len(word) == 1 and not word.isalnum())
        and contains_letters_or_digits(word)
        and not contains_non_letters_inside(word)
    )
