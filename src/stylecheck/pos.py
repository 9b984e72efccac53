# ───────────────────────── src/stylecheck/pos.py ─────────────────────────
"""
Part-of-speech helpers.

Taggers report Penn Treebank tags. Synonym lookups only care about four
broad lexical categories, so tags are collapsed with ``classify_tag``.
Taggers that report CLAWS7 tags are wrapped in ``Claws7Tagger``, which
converts each tag with ``claws7_to_penn``.

Dependencies:
    - Optional: nltk (``NltkTagger``), install with ``pip install stylecheck[nlp]``
"""

import logging
from enum import Enum
from typing import Dict, List, Tuple

from .config import Tagger
from .logging_utils import InitializationError
from .text_format import tokenize

logger = logging.getLogger(__name__)

UNKNOWN_TAG = "UNKNOWN"


class LexicalCategory(Enum):
    """Broad word classes that have synonym sets."""

    ADVERB = "adverb"
    VERB = "verb"
    ADJECTIVE = "adjective"
    NOUN = "noun"
    OTHER = "other"


_PENN_CATEGORIES: Dict[str, LexicalCategory] = {
    "RB": LexicalCategory.ADVERB,
    "RBR": LexicalCategory.ADVERB,
    "RBS": LexicalCategory.ADVERB,
    "WRB": LexicalCategory.ADVERB,
    "VB": LexicalCategory.VERB,
    "VBD": LexicalCategory.VERB,
    "VBG": LexicalCategory.VERB,
    "VBN": LexicalCategory.VERB,
    "JJ": LexicalCategory.ADJECTIVE,
    "JJR": LexicalCategory.ADJECTIVE,
    "JJS": LexicalCategory.ADJECTIVE,
    "NN": LexicalCategory.NOUN,
    "NNS": LexicalCategory.NOUN,
    "NNP": LexicalCategory.NOUN,
    "NNPS": LexicalCategory.NOUN,
}


def classify_tag(tag: str) -> LexicalCategory:
    """Map a Penn Treebank tag to its lexical category.

    Examples:
        >>> classify_tag("VBG")
        <LexicalCategory.VERB: 'verb'>
        >>> classify_tag("DT")
        <LexicalCategory.OTHER: 'other'>
    """
    return _PENN_CATEGORIES.get(tag, LexicalCategory.OTHER)


def _tags(penn: str, *claws: str) -> Dict[str, str]:
    return dict.fromkeys(claws, penn)


CLAWS7_TO_PENN: Dict[str, str] = {
    **_tags("CC", "CC", "CCB"),
    **_tags("IN", "CS", "CSA", "CSN", "CST", "CSW"),
    **_tags("DT", "DA", "DA1", "DA2", "DAR", "DAT", "DD", "DD1", "DD2"),
    **_tags("PDT", "DB", "DB2"),
    **_tags("WDT", "DDQ", "DDQGE", "DDQV"),
    **_tags("CD", "MC", "MC1", "MC2", "MCGE", "MCMC", "MD", "MF"),
    **_tags(
        "NN", "ND1", "NN", "NN1", "NNA", "NNB", "NNL1", "NNO", "NNT1", "NNU", "NNU1"
    ),
    **_tags("NNS", "NN2", "NNL2", "NNO2", "NNT2", "NNU2"),
    **_tags("NNP", "NP", "NP1", "NPD1", "NPM1"),
    **_tags("NNPS", "NP2", "NPD2", "NPM2"),
    **_tags(
        "PRP",
        "PN", "PN1", "PNX1", "PPH1", "PPHO1", "PPHO2", "PPHS1", "PPHS2",
        "PPIO1", "PPIO2", "PPIS1", "PPIS2", "PPX1", "PPX2", "PPY",
    ),
    **_tags("WP", "PNQO", "PNQS", "PNQV"),
    **_tags("PRP$", "PPGE"),
    **_tags("RB", "RA", "REX", "RG", "RGQ", "RGQV", "RL", "RP", "RPK", "RR", "RT"),
    **_tags("WRB", "RRQ", "RRQV"),
    **_tags("RBR", "RGR", "RRR"),
    **_tags("RBS", "RGT", "RRT"),
    **_tags("TO", "TO"),
    **_tags("UH", "UH"),
    **_tags("MD", "VM", "VMK"),
    **_tags("VB", "VB0", "VBI", "VD0", "VDI", "VH0", "VHI", "VVI"),
    **_tags("VBD", "VBDZ", "VDD", "VHD", "VVD"),
    **_tags("VBG", "VVG", "VVGK", "VBG", "VDG", "VHG"),
    **_tags("VBN", "VVN", "VVNK", "VHN"),
    **_tags("VBP", "VBM"),
    **_tags("VBZ", "VVZ"),
    **_tags("EX", "EX"),
    **_tags("JJ", "JJ", "JK"),
    **_tags("JJR", "JJR"),
    **_tags("JJS", "JJT"),
}


def claws7_to_penn(tag: str) -> str:
    """Convert a CLAWS7 tag to Penn Treebank, or ``UNKNOWN``.

    Examples:
        >>> claws7_to_penn("VVG")
        'VBG'
        >>> claws7_to_penn("ZZ1")
        'UNKNOWN'
    """
    return CLAWS7_TO_PENN.get(tag.strip().upper(), UNKNOWN_TAG)


class Claws7Tagger:
    """Adapter for taggers that report CLAWS7 tags.

    Wraps the inner tagger so callers always see Penn Treebank tags; tags
    without a Penn equivalent come back as ``UNKNOWN``.

    Args:
        tagger: Tagger producing (word, CLAWS7 tag) pairs
    """

    def __init__(self, tagger: Tagger):
        self.tagger = tagger

    def tag(self, sentence: str) -> List[Tuple[str, str]]:
        return [(word, claws7_to_penn(tag)) for word, tag in self.tagger.tag(sentence)]


class NltkTagger:
    """Tagger backed by nltk's averaged perceptron model.

    Raises:
        InitializationError: If nltk or its tagger data is unavailable
    """

    def __init__(self):
        try:
            import nltk
        except ImportError as e:
            raise InitializationError(
                "nltk is required for NltkTagger; install stylecheck[nlp]"
            ) from e

        self._nltk = nltk
        try:
            nltk.pos_tag(["test"])
        except LookupError as e:
            raise InitializationError(
                "nltk tagger data missing; run "
                "nltk.download('averaged_perceptron_tagger_eng')"
            ) from e
        logger.info("Loaded nltk part-of-speech tagger")

    def tag(self, sentence: str) -> List[Tuple[str, str]]:
        words = [token.text for token in tokenize(sentence)]
        if not words:
            return []
        return [(word, tag) for word, tag in self._nltk.pos_tag(words)]
