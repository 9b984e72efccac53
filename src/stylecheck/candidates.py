# ───────────────────────── src/stylecheck/candidates.py ─────────────────────────
"""
Replacement candidate discovery.
"""

from typing import Iterable, List, Optional

from .lexicon import NUM_CLOSE_WORDS, Lexicon, MisspellingMap


def merge_unique(*sources: Iterable[str]) -> List[str]:
    """Concatenate sources, keeping only the first occurrence of each entry."""
    return list(dict.fromkeys(item for source in sources for item in source))


class CandidateGenerator:
    """Collects replacement candidates for a flagged word.

    Known corrections from the misspellings corpus come first, then the
    lexicon's nearest words (contraction forms, word splits and edit-distance
    neighbours). Duplicates are dropped, first occurrence wins. No scoring
    happens here.

    Args:
        lexicon: Dictionary used for nearest-word search
        misspellings: Common misspellings and their corrections
        num_close_words: Edit-distance neighbours requested from the lexicon
    """

    def __init__(
        self,
        lexicon: Lexicon,
        misspellings: Optional[MisspellingMap] = None,
        num_close_words: int = NUM_CLOSE_WORDS,
    ):
        self.lexicon = lexicon
        self.misspellings = misspellings or MisspellingMap()
        self.num_close_words = num_close_words

    def generate(self, word: str) -> List[str]:
        """Return deduplicated candidates for ``word`` in discovery order."""
        return merge_unique(
            self.misspellings.corrections(word),
            self.lexicon.nearest_words(word, self.num_close_words),
        )
