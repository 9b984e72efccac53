# ───────────────────────── src/stylecheck/ranking.py ─────────────────────────
"""
Ranking of replacement candidates.

Ranking combines three signals into one score per candidate and keeps the
best few:

    1. N-gram log-probability of the context window with the candidate in
       the error slot (higher is better).
    2. A Levenshtein penalty, ``weight * distance(original, candidate)``,
       so closer spellings win among similarly plausible candidates.
    3. A suffix tie-break between candidates sharing a base word: the one
       whose ending matches the original word's ending takes the better of
       the two scores. This favours "walking" over "walked" for "walkng".

Sorting is stable, so candidates with equal scores keep their discovery
order.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .distance import levenshtein
from .ngram import NGramScorer
from .window import ContextWindow

logger = logging.getLogger(__name__)

# Levenshtein distance weight for ranking
LEVENSHTEIN_WEIGHT = 2.0

# Max number of replacements returned
MAX_REPLACEMENTS = 3

# Fraction of a word that constitutes the "base"
BASE_PREFIX = 0.5


@dataclass
class ScoredCandidate:
    """A candidate and its mutable score. Identity is the text alone."""

    text: str
    score: float = field(default=0.0, compare=False)


def have_same_base(word1: str, word2: str, base_prefix: float = BASE_PREFIX) -> bool:
    """Return True if two words share a heuristic base word.

    The base is the first ``ceil(len(longer) * base_prefix)`` characters of
    the longer word; the shorter word must start with it.

    Examples:
        >>> have_same_base("walking", "walked")
        True
        >>> have_same_base("running", "ran")
        False
    """
    if not word1 or not word2:
        return False
    if len(word1) > len(word2):
        longer, shorter = word1, word2
    else:
        longer, shorter = word2, word1

    prefix_length = math.ceil(len(longer) * base_prefix)
    if prefix_length > len(shorter):
        return False
    return shorter.startswith(longer[:prefix_length])


def common_suffix_length(word: str, other: str) -> int:
    """Return the length of the common trailing run of two words (case-sensitive)."""
    length = 0
    for char1, char2 in zip(reversed(word), reversed(other)):
        if char1 != char2:
            break
        length += 1
    return length


def break_tie_by_suffix(
    first: ScoredCandidate, second: ScoredCandidate, original: str
) -> None:
    """Give the better of two scores to the candidate ending like ``original``.

    The candidate with the longer common suffix gets ``max`` of the two
    scores and the other gets ``min``. Equal suffix lengths change nothing.
    """
    common1 = common_suffix_length(first.text, original)
    common2 = common_suffix_length(second.text, original)
    if common1 == common2:
        return

    high = max(first.score, second.score)
    low = min(first.score, second.score)
    if common1 > common2:
        first.score, second.score = high, low
    else:
        first.score, second.score = low, high


class RankCombiner:
    """Scores, adjusts, sorts and truncates replacement candidates.

    Args:
        scorer: N-gram scorer for the context windows
        levenshtein_weight: Penalty per edit between original and candidate
        max_replacements: Number of candidates returned
        base_prefix: Fraction of the longer word forming the shared base
    """

    def __init__(
        self,
        scorer: NGramScorer,
        levenshtein_weight: float = LEVENSHTEIN_WEIGHT,
        max_replacements: int = MAX_REPLACEMENTS,
        base_prefix: float = BASE_PREFIX,
    ):
        self.scorer = scorer
        self.levenshtein_weight = levenshtein_weight
        self.max_replacements = max_replacements
        self.base_prefix = base_prefix

    def rank(
        self,
        window: ContextWindow,
        error_slot: Optional[int],
        candidates: Sequence[str],
        original_word: Optional[str] = None,
    ) -> List[str]:
        """Return the best candidates for the word in the error slot.

        Args:
            window: Context window around the flagged word
            error_slot: Index of the flagged word in the window
            candidates: Replacement candidates in discovery order
            original_word: The flagged word; defaults to the cleaned word in
                the error slot

        Returns:
            Up to ``max_replacements`` candidate texts, best first. Empty if
            there are no candidates or the error slot is not in the window.
        """
        scored = self.score(window, error_slot, candidates, original_word)
        return [candidate.text for candidate in scored[: self.max_replacements]]

    def score(
        self,
        window: ContextWindow,
        error_slot: Optional[int],
        candidates: Sequence[str],
        original_word: Optional[str] = None,
    ) -> List[ScoredCandidate]:
        """Return every candidate with its final score, sorted best first."""
        if not candidates:
            return []
        if error_slot is None or not 0 <= error_slot < len(window):
            logger.debug("Error slot not in window, skipping ranking")
            return []

        original = window.words[error_slot] if original_word is None else original_word

        scored = [
            ScoredCandidate(text, self.scorer.score_candidate(window, error_slot, text))
            for text in candidates
        ]
        for candidate in scored:
            candidate.score -= self.levenshtein_weight * levenshtein(
                original, candidate.text
            )

        self._break_ties_by_suffix(scored, window.words[error_slot])

        ranked = sorted(scored, key=lambda candidate: candidate.score, reverse=True)
        for candidate in ranked:
            logger.debug(
                f"Error: {original!r} Replacement: {candidate.text!r} "
                f"Score: {candidate.score:.4f}"
            )
        return ranked

    def _break_ties_by_suffix(
        self, scored: List[ScoredCandidate], error_word: str
    ) -> None:
        for i, first in enumerate(scored):
            for second in scored[i + 1 :]:
                if first != second and have_same_base(
                    first.text, second.text, self.base_prefix
                ):
                    break_tie_by_suffix(first, second, error_word)
