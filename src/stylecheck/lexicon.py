# ───────────────────────── src/stylecheck/lexicon.py ─────────────────────────
"""
Searchable English lexicon and the common-misspellings map.

The Lexicon answers membership queries in O(1) and proposes nearest
dictionary words by edit distance. Nearest-word results are assembled from
three sources, in this order:

    1. full forms of a known contraction ("dont" is not one, "don't" is)
    2. splits of accidentally joined words ("noone" -> "no one")
    3. dictionary words sorted by Levenshtein distance

Dictionary words are kept in corpus load order, so ties between equally
distant neighbours resolve the same way on every run.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from .distance import levenshtein

# Max number of dictionary neighbours considered when ranking
NUM_CLOSE_WORDS = 30

# Neighbour scan skips words whose length differs by this much or more
MAX_LENGTH_DIFFERENCE = 3


class Lexicon:
    """Immutable dictionary words plus user-added words and contractions.

    Attributes:
        max_length_difference (int): Length window for the neighbour scan.

    Examples:
        >>> lexicon = Lexicon(["the", "ten", "tea", "no", "one"])
        >>> lexicon.is_valid_word("the")
        True
        >>> lexicon.nearest_words("teh", 3)
        ['ten', 'tea', 'the']
        >>> lexicon.multi_word_splits("noone")
        ['no one']
    """

    def __init__(
        self,
        words: Iterable[str],
        contractions: Optional[Mapping[str, List[str]]] = None,
        max_length_difference: int = MAX_LENGTH_DIFFERENCE,
    ):
        # dict preserves load order for deterministic neighbour ties
        self._dictionary: Dict[str, None] = dict.fromkeys(
            word.lower() for word in words
        )
        self._user_words: Dict[str, None] = {}
        self._contractions: Dict[str, List[str]] = {
            key.lower().strip(): list(forms)
            for key, forms in (contractions or {}).items()
        }
        self.max_length_difference = max_length_difference

    def __len__(self) -> int:
        return len(self._dictionary) + len(self._user_words)

    def __contains__(self, word: str) -> bool:
        return self.is_valid_word(word)

    def add_user_word(self, word: str) -> None:
        """Add a word to the user dictionary (stored lowercase)."""
        lower = word.lower()
        if lower not in self._dictionary:
            self._user_words.setdefault(lower, None)

    def add_all(self, words: Iterable[str]) -> None:
        """Add every word of another dictionary to the user dictionary."""
        for word in words:
            self.add_user_word(word)

    def is_valid_word(self, word: str) -> bool:
        """Return True if the word is in either dictionary."""
        return self.is_dictionary_word(word) or self.is_user_word(word)

    def is_dictionary_word(self, word: str) -> bool:
        return word in self._dictionary

    def is_user_word(self, word: str) -> bool:
        return word in self._user_words

    def is_contraction(self, word: str) -> bool:
        return word.lower().strip() in self._contractions

    def full_forms(self, contraction: str) -> List[str]:
        """Return all full forms of a contraction, or an empty list."""
        return list(self._contractions.get(contraction.lower().strip(), []))

    def words(self) -> List[str]:
        """Return dictionary words followed by user words."""
        return list(self._dictionary) + list(self._user_words)

    def nearest_words(self, word: str, n: int = NUM_CLOSE_WORDS) -> List[str]:
        """Return the closest words to ``word``, best first.

        A word that is already valid is returned alone, regardless of ``n``.
        Otherwise every dictionary and user word whose length differs by less
        than ``max_length_difference`` is scored by edit distance and the
        ``n`` closest are kept, behind any contraction full forms and
        multi-word splits.

        Args:
            word: The word to compare to
            n: Number of edit-distance neighbours to keep

        Returns:
            Contraction forms, then splits, then neighbours
        """
        if self.is_valid_word(word):
            return [word]

        scored = []
        for candidate in self.words():
            if abs(len(candidate) - len(word)) < self.max_length_difference:
                scored.append((levenshtein(word, candidate), candidate))

        # sort is stable: equal distances keep lexicon order
        scored.sort(key=lambda pair: pair[0])
        neighbours = [candidate for _, candidate in scored[:n]]

        return self.full_forms(word) + self.multi_word_splits(word) + neighbours

    def multi_word_splits(self, word: str) -> List[str]:
        """Suggest the word pairs that may have been joined by accident.

        Every split point that leaves two valid words yields ``"w1 w2"``.

        Examples:
            >>> Lexicon(["a", "lot", "alot"]).multi_word_splits("alot")
            ['a lot']
        """
        suggestions = []
        for i in range(1, len(word) - 1):
            first, second = word[:i], word[i:]
            if self.is_valid_word(first) and self.is_valid_word(second):
                suggestions.append(f"{first} {second}")
        return suggestions


class MisspellingMap:
    """Commonly misspelled words and their corrections.

    Corrections keep their corpus order. Duplicates are allowed here; they
    are removed when candidate lists are merged.
    """

    def __init__(self, entries: Optional[Mapping[str, List[str]]] = None):
        self._map: Dict[str, List[str]] = {}
        for word, corrections in (entries or {}).items():
            self.add_word(word, corrections)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._map

    def add_word(self, word: str, corrections: Iterable[str]) -> None:
        self._map[word.lower()] = list(corrections)

    def corrections(self, word: str) -> List[str]:
        """Return the corrections for a word, or an empty list."""
        return list(self._map.get(word.lower(), []))
