# ───────────────────────── src/stylecheck/synonyms.py ─────────────────────────
"""
WordNet thesaurus lookups.

Synsets are visited most frequent sense first (by the tagged-corpus count of
the queried word's lemma), so the synonyms of the dominant sense lead the
list.

Requires: pip install stylecheck[nlp]
Data: python -c "import nltk; nltk.download('wordnet')"
"""

import logging
from typing import Dict, List

from .logging_utils import InitializationError
from .pos import LexicalCategory

logger = logging.getLogger(__name__)


class WordNetSynonyms:
    """Synonym source backed by nltk's WordNet reader.

    Raises:
        InitializationError: If nltk or the WordNet corpus is unavailable
    """

    def __init__(self):
        try:
            from nltk.corpus import wordnet as wn
        except ImportError as e:
            raise InitializationError(
                "nltk is required for WordNetSynonyms; install stylecheck[nlp]"
            ) from e

        try:
            wn.synsets("test")
        except LookupError as e:
            raise InitializationError(
                "WordNet data missing; run nltk.download('wordnet')"
            ) from e

        self._wn = wn
        self._wordnet_pos: Dict[LexicalCategory, str] = {
            LexicalCategory.ADVERB: wn.ADV,
            LexicalCategory.VERB: wn.VERB,
            LexicalCategory.ADJECTIVE: wn.ADJ,
            LexicalCategory.NOUN: wn.NOUN,
        }
        logger.info("Loaded WordNet synonym source")

    def synonyms(self, word: str, category: LexicalCategory) -> List[str]:
        """Return synonyms of ``word`` within one lexical category.

        Args:
            word: Word to find synonyms for
            category: Lexical category of the word in its sentence

        Returns:
            Unique lowercase synonyms, most frequent sense first; empty for
            ``LexicalCategory.OTHER`` or unknown words
        """
        pos = self._wordnet_pos.get(category)
        if pos is None:
            return []

        target = word.lower().strip()
        synsets = sorted(
            self._wn.synsets(target, pos=pos),
            key=lambda synset: self._sense_count(synset, target),
            reverse=True,
        )

        synonyms: Dict[str, None] = {}
        for synset in synsets:
            for lemma in synset.lemmas():
                synonym = lemma.name().replace("_", " ").lower()
                if synonym != target:
                    synonyms.setdefault(synonym, None)
        return list(synonyms)

    @staticmethod
    def _sense_count(synset, word: str) -> int:
        return sum(
            lemma.count() for lemma in synset.lemmas() if lemma.name().lower() == word
        )
