# ───────────────────────── src/stylecheck/config.py ─────────────────────────
"""
Configuration management and collaborator protocols.

This module centralizes every tunable used by the suggestion engine: corpus
locations, the n-gram model, ranking weights, the heuristic flag filters and
logging. Settings are plain dataclass fields so a JSON file can be loaded
straight into ``Config(**data)``.

Key Components:
    - NGramOracle, Tagger, SynonymSource, GrammarChecker: Protocols for the
      external collaborators the engine consumes
    - Config: Main configuration class with validation in ``__post_init__``

Ranking Configuration Guide:
    The ranking pipeline combines three signals:

    1. **N-gram plausibility** (``ngram_model_path``, ``max_ngram_size``):
       log-probability of the context window with the candidate substituted.
    2. **Orthographic distance** (``levenshtein_weight``):
       subtracted per edit between the flagged word and the candidate.
    3. **Suffix tie-break** (``base_prefix``):
       candidates sharing a base word are reordered by how well their ending
       matches the flagged word's ending.

Examples:
    Defaults with a custom word list:
    >>> config = Config(dictionary_path="corpora/English.words")
    >>> config.max_replacements
    3

    Favour surface similarity over context:
    >>> config = Config(levenshtein_weight=4.0, max_replacements=5)

    Keep every flag, including hyphenated compounds and proper nouns:
    >>> config = Config(
    ...     suppress_hyphenated=False,
    ...     suppress_proper_nouns=False,
    ...     suppress_british_spellings=False,
    ... )
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

if TYPE_CHECKING:
    from .grammar import GrammarMatch
    from .pos import LexicalCategory


class NGramOracle(Protocol):
    """Protocol for n-gram language models queried by the scorer."""

    @abstractmethod
    def log_prob(self, words: Sequence[str]) -> float:
        """Return the log-probability of a short word sequence.

        Args:
            words: Between one and ``max_ngram_size`` words

        Returns:
            Log-probability; unseen words resolve to the unknown-word entry
            instead of raising
        """
        pass


class Tagger(Protocol):
    """Protocol for part-of-speech taggers."""

    @abstractmethod
    def tag(self, sentence: str) -> List[Tuple[str, str]]:
        """Tag a sentence.

        Args:
            sentence: Plain sentence text

        Returns:
            Ordered (word, Penn Treebank tag) pairs
        """
        pass


class SynonymSource(Protocol):
    """Protocol for thesaurus lookups."""

    @abstractmethod
    def synonyms(self, word: str, category: "LexicalCategory") -> List[str]:
        """Return synonyms of ``word`` for a lexical category, best first."""
        pass


class GrammarChecker(Protocol):
    """Protocol for grammar/spelling rule engines."""

    @abstractmethod
    def check(self, text: str) -> List["GrammarMatch"]:
        """Return every rule match found in ``text``."""
        pass


@dataclass
class Config:
    """Configuration settings for stylecheck.

    Attributes:
        dictionary_path: Word list, one word per line. ``None`` uses the
            English frequency dictionary bundled with symspellpy.
        misspellings_path: Common misspellings list
            (``misspelling->correction, correction``). Optional.
        contractions_path: Contractions list
            (``contraction<TAB>full form/full form``). Optional.
        ngram_model_path: KenLM binary or ARPA model. Required unless an
            oracle is passed to the engine directly.
        max_ngram_size: Order of the n-gram model (default: 3).
        levenshtein_weight: Penalty per edit when ranking (default: 2.0).
        max_replacements: Number of suggestions returned (default: 3).
        num_close_words: Edit-distance neighbours considered (default: 30).
        max_length_difference: Neighbour scan only considers words whose
            length differs by less than this (default: 3).
        base_prefix: Fraction of the longer word forming its base (default: 0.5).
        suppress_hyphenated: Drop flags on words with one or two hyphens.
        suppress_proper_nouns: Drop flags on capitalized words mid-sentence.
        suppress_british_spellings: Drop flags on probable British spellings.
        ignored_grammar_rules: Grammar rule ids never reported.
        enable_synonyms: Build the nltk tagger and WordNet synonym source in
            ``SuggestionEngine.from_config`` (needs stylecheck[nlp]).
        tagset: Tag set reported by the tagger, "penn" or "claws7".
            Applies to a tagger passed to the engine; CLAWS7 output is
            converted to Penn before classification. ``NltkTagger`` reports Penn.
        max_workers: Threads used by ``check_spelling`` (default: 1).
        log_file: Path to the error log file (default: "stylecheck_error.log").
        log_level: Logger level name (default: "ERROR").
        max_log_size: Maximum log file size in bytes (default: 10MB).
        log_backup_count: Number of backup log files to keep (default: 3).

    Examples:
        >>> config = Config()
        >>> config.levenshtein_weight
        2.0

        >>> Config(max_replacements=0)
        Traceback (most recent call last):
        ...
        ValueError: max_replacements must be positive
    """

    # Corpus configuration
    dictionary_path: Optional[str] = None
    misspellings_path: Optional[str] = None
    contractions_path: Optional[str] = None

    # Language model configuration
    ngram_model_path: Optional[str] = None
    max_ngram_size: int = 3

    # Ranking configuration
    levenshtein_weight: float = 2.0
    max_replacements: int = 3
    num_close_words: int = 30
    max_length_difference: int = 3
    base_prefix: float = 0.5

    # Flag suppression heuristics
    suppress_hyphenated: bool = True
    suppress_proper_nouns: bool = True
    suppress_british_spellings: bool = True
    """Suppress flags on words that look like British spellings.

    Substring rewrites such as ``ise``→``ize`` or ``re``→``er`` are tried
    and the flag is dropped when any rewrite produces a dictionary word.
    The rewrites are blunt replacements over the whole word, so this filter
    is approximate and can hide genuine misspellings.
    """

    # Grammar configuration
    ignored_grammar_rules: List[str] = field(default_factory=list)

    # Synonym configuration
    enable_synonyms: bool = False
    tagset: str = "penn"

    # Batch configuration
    max_workers: int = 1

    # Logging configuration
    log_file: str = "stylecheck_error.log"
    log_level: str = "ERROR"
    max_log_size: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 3

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If any configuration values are invalid.
        """
        if self.max_ngram_size < 1:
            raise ValueError("max_ngram_size must be at least 1")
        if self.levenshtein_weight < 0:
            raise ValueError("levenshtein_weight cannot be negative")
        if self.max_replacements <= 0:
            raise ValueError("max_replacements must be positive")
        if self.num_close_words <= 0:
            raise ValueError("num_close_words must be positive")
        if self.max_length_difference < 1:
            raise ValueError("max_length_difference must be at least 1")
        if not 0.0 < self.base_prefix <= 1.0:
            raise ValueError("base_prefix must be in (0, 1]")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.tagset not in ("penn", "claws7"):
            raise ValueError(f"tagset must be 'penn' or 'claws7', got '{self.tagset}'")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        self.log_level = self.log_level.upper()
        if self.log_level not in valid_levels:
            raise ValueError(
                f"log_level must be one of {valid_levels}, got '{self.log_level}'"
            )
