# ───────────────────────── src/stylecheck/ngram.py ─────────────────────────
"""
N-gram scoring of replacement candidates.

The scorer substitutes a candidate into the error slot of a context window
and asks the language model how plausible the result is. Windows longer than
the model order are scored as the sum of the log-probabilities of every
overlapping n-gram:

    window:  [w0, w1, cand, w3, w4]      order 3
    score =  logP(w0 w1 cand) + logP(w1 cand w3) + logP(cand w3 w4)

This is not a normalized sequence probability (inner words are counted in
several n-grams); only the relative ordering of candidates matters.

Dependencies:
    - Optional: kenlm (``KenLMOracle``), install with ``pip install stylecheck[kenlm]``
"""

import logging
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import NGramOracle
from .logging_utils import InitializationError
from .window import MAX_N_GRAM_SIZE, ContextWindow

logger = logging.getLogger(__name__)

MIN_N_GRAM_SIZE = 1


class KenLMOracle:
    """N-gram oracle backed by a KenLM binary (or ARPA) model.

    The model is loaded once at construction. Words outside the model
    vocabulary score through KenLM's ``<unk>`` entry, so queries never fail
    on unseen words.

    Args:
        model_path: Path to the ``.binary``/``.arpa`` model file

    Raises:
        InitializationError: If kenlm is not installed or the model cannot
            be loaded
    """

    def __init__(self, model_path: Union[str, Path]):
        try:
            import kenlm
        except ImportError as e:
            raise InitializationError(
                "kenlm is required for KenLMOracle; install stylecheck[kenlm]"
            ) from e

        path = Path(model_path)
        if not path.exists():
            raise InitializationError(f"N-gram model not found: {path}")

        start_time = time.perf_counter()
        try:
            self.model = kenlm.Model(str(path))
        except (OSError, RuntimeError) as e:
            raise InitializationError(f"Cannot load n-gram model {path}: {e}") from e

        logger.info(
            f"Loaded {self.model.order}-gram model from {path} "
            f"in {time.perf_counter() - start_time:.2f}s"
        )

    @property
    def order(self) -> int:
        return self.model.order

    def log_prob(self, words: Sequence[str]) -> float:
        """Return the log10 probability of ``words`` without sentence markers."""
        return self.model.score(" ".join(words), bos=False, eos=False)


class NGramScorer:
    """Scores candidates by n-gram plausibility inside a context window.

    Args:
        oracle: Any object with ``log_prob(words) -> float``
        max_ngram_size: Order of the queries issued to the oracle

    Examples:
        >>> class Uniform:
        ...     def log_prob(self, words):
        ...         return -1.0 * len(words)
        >>> scorer = NGramScorer(Uniform())
        >>> window = ContextWindow(("a", "dog", "sat"), error_slot=1)
        >>> scorer.score_candidate(window, 1, "cat")
        -3.0
    """

    def __init__(self, oracle: NGramOracle, max_ngram_size: int = MAX_N_GRAM_SIZE):
        self.oracle = oracle
        self.max_ngram_size = max_ngram_size

    def score_candidate(
        self, window: ContextWindow, error_slot: Optional[int], candidate: str
    ) -> float:
        """Return the window log-probability with ``candidate`` at the error slot.

        Args:
            window: The context window (left untouched)
            error_slot: Index to substitute; None or out of range scores the
                window as it is
            candidate: The replacement to evaluate

        Returns:
            Summed log-probability; 0.0 for an empty window
        """
        words = list(window.words)
        if error_slot is not None and 0 <= error_slot < len(words):
            words[error_slot] = candidate

        # Short windows are a single query
        if len(words) <= self.max_ngram_size:
            return self.log_ngram_probability(words, 0, len(words))

        return sum(
            self.log_ngram_probability(words, i, i + self.max_ngram_size)
            for i in range(len(words) - self.max_ngram_size + 1)
        )

    def log_ngram_probability(
        self, words: Sequence[str], start: int, end: int
    ) -> float:
        """Return the log-probability of ``words[start:end]``.

        Out-of-range bounds or a length outside ``[1, max_ngram_size]``
        return 0.0 without querying the oracle.
        """
        length = end - start
        if (
            length < MIN_N_GRAM_SIZE
            or length > self.max_ngram_size
            or start < 0
            or end > len(words)
        ):
            return 0.0
        return float(self.oracle.log_prob(list(words[start:end])))
