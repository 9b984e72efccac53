# ───────────────────────── src/stylecheck/heuristics.py ─────────────────────────
"""
Flag-suppression heuristics.

These filters decide whether a flagged word should be left alone even
though the lexicon does not know it. They are approximate, not
authoritative: each one trades some missed misspellings for fewer false
alarms, and each can be switched off in ``Config``.
"""

from typing import Callable, Iterable, Tuple

from .text_format import clean_word, count_occurrences, is_first_word_in_sentence

# American to British substring rewrites
BRITISH_REWRITES: Tuple[Tuple[str, str], ...] = (
    ("er", "re"),
    ("o", "ou"),
    ("ize", "ise"),
    ("ization", "isation"),
    ("ized", "ised"),
    ("se", "ce"),
    ("ction", "xion"),
    ("yze", "yse"),
    ("og", "ogue"),
)


def is_hyphenated(word: str) -> bool:
    """Return True for compounds joined by one or two hyphens.

    Approximate. Hyphens are counted in the flagged word only, not across
    the whole document: a compound elsewhere in the text never suppresses
    another flag.

    Examples:
        >>> is_hyphenated("mother-in-law")
        True
        >>> is_hyphenated("well--known--thing---")
        False
    """
    return count_occurrences(word, "-") in (1, 2)


def is_proper_noun(text: str, position: int, word: str) -> bool:
    """Return True if a capitalized word sits in the middle of a sentence."""
    return word[:1].isupper() and not is_first_word_in_sentence(text, position)


def british_variants(word: str, rewrites: Iterable[Tuple[str, str]] = BRITISH_REWRITES):
    """Yield the cleaned word produced by each rewrite that changes it."""
    for old, new in rewrites:
        variant = word.replace(old, new)
        if variant != word:
            yield clean_word(variant)


def is_british_spelling(word: str, is_word: Callable[[str], bool]) -> bool:
    """Return True if any British-style rewrite of the word is a valid word.

    Examples:
        >>> is_british_spelling("colour", {"color"}.__contains__)
        False
        >>> is_british_spelling("analyze", {"analyse"}.__contains__)
        True
    """
    return any(is_word(variant) for variant in british_variants(word))
