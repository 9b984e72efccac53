# ───────────────────────── src/stylecheck/spellcheck.py ─────────────────────────
"""
The suggestion engine.

SuggestionEngine ties the pipeline together for one flagged token at a
time::

    token -> CandidateGenerator -> WindowBuilder -> NGramScorer
          -> RankCombiner -> top suggestions (capitalized at sentence start)

It also offers document-level helpers built on the same pipeline: finding
every unknown word, batch spelling suggestions with the flag-suppression
heuristics applied, context-ranked synonyms, and filtered grammar matches.

Key Components:
    - SuggestionEngine.suggest: Ranked replacements for one flagged token
    - SuggestionEngine.check_spelling: Suggestions for a whole document
    - SuggestionEngine.suggest_synonyms: Synonyms ranked in context
    - SuggestionEngine.check_grammar: Grammar matches worth reporting
    - SuggestionEngine.from_config: Build the engine from corpora on disk

Examples:
    Assemble an engine from in-memory parts:
    >>> from stylecheck.lexicon import Lexicon
    >>> from stylecheck.ngram import NGramScorer
    >>> class Flat:
    ...     def log_prob(self, words):
    ...         return -1.0
    >>> engine = SuggestionEngine(
    ...     Lexicon(["i", "have", "too", "many", "mistakes"]), NGramScorer(Flat())
    ... )
    >>> engine.suggest("I have too many mistaks.", 16)
    ['mistakes']
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Collection, Dict, Iterable, List, Optional, Sequence

from .candidates import CandidateGenerator
from .config import Config, GrammarChecker, NGramOracle, SynonymSource, Tagger
from .corpora import load_contractions, load_misspellings, load_word_list
from .grammar import filter_grammar_matches
from .heuristics import is_british_spelling, is_hyphenated, is_proper_noun
from .lexicon import Lexicon, MisspellingMap
from .logging_utils import InitializationError, log_error
from .ngram import KenLMOracle, NGramScorer
from .pos import Claws7Tagger, LexicalCategory, NltkTagger, classify_tag
from .ranking import RankCombiner
from .synonyms import WordNetSynonyms
from .text_format import (
    Token,
    capitalize_words,
    clean_word,
    current_sentence,
    is_first_word_in_sentence,
    is_numerical_string,
    is_possible_word,
    is_single_letter_word,
    tokenize,
)
from .window import WindowBuilder

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """Suggests ranked replacements for words the lexicon cannot validate.

    Args:
        lexicon: Dictionary, user words and contractions
        scorer: N-gram scorer wrapping the language model
        misspellings: Common misspellings with known corrections
        config: Ranking and heuristic settings, defaults if None
        tagger: Part-of-speech tagger, needed for ``suggest_synonyms``
        synonym_source: Thesaurus, needed for ``suggest_synonyms``
        grammar_checker: Rule engine, needed for ``check_grammar``
    """

    def __init__(
        self,
        lexicon: Lexicon,
        scorer: NGramScorer,
        misspellings: Optional[MisspellingMap] = None,
        config: Optional[Config] = None,
        tagger: Optional[Tagger] = None,
        synonym_source: Optional[SynonymSource] = None,
        grammar_checker: Optional[GrammarChecker] = None,
    ):
        self.config = config or Config()
        self.lexicon = lexicon
        self.scorer = scorer
        self.tagger = tagger
        self.synonym_source = synonym_source
        self.grammar_checker = grammar_checker

        self.generator = CandidateGenerator(
            lexicon, misspellings, self.config.num_close_words
        )
        self.window_builder = WindowBuilder(self.is_word, self.config.max_ngram_size)
        self.ranker = RankCombiner(
            scorer,
            levenshtein_weight=self.config.levenshtein_weight,
            max_replacements=self.config.max_replacements,
            base_prefix=self.config.base_prefix,
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        oracle: Optional[NGramOracle] = None,
        tagger: Optional[Tagger] = None,
        synonym_source: Optional[SynonymSource] = None,
        grammar_checker: Optional[GrammarChecker] = None,
    ) -> "SuggestionEngine":
        """Load the corpora and language model named in the configuration.

        Args:
            config: Configuration object, uses defaults if None
            oracle: N-gram oracle to use instead of loading
                ``config.ngram_model_path``
            tagger: Optional part-of-speech tagger, wrapped in ``Claws7Tagger``
                when ``config.tagset`` is "claws7". Defaults to ``NltkTagger``
                when ``config.enable_synonyms`` is set.
            synonym_source: Optional thesaurus. Defaults to ``WordNetSynonyms``
                when ``config.enable_synonyms`` is set.
            grammar_checker: Optional grammar rule engine

        Returns:
            A ready engine

        Raises:
            InitializationError: If a corpus or the model cannot be loaded, or
                synonyms are enabled without nltk and its data
        """
        if config is None:
            config = Config()

        start_time = time.perf_counter()
        try:
            words = load_word_list(config.dictionary_path)
            contractions = (
                load_contractions(config.contractions_path)
                if config.contractions_path
                else {}
            )
            misspellings = (
                load_misspellings(config.misspellings_path)
                if config.misspellings_path
                else {}
            )
            if tagger is not None and config.tagset == "claws7":
                tagger = Claws7Tagger(tagger)
            if config.enable_synonyms:
                if tagger is None:
                    tagger = NltkTagger()
                if synonym_source is None:
                    synonym_source = WordNetSynonyms()
            if oracle is None:
                if not config.ngram_model_path:
                    raise InitializationError(
                        "No n-gram model configured; set ngram_model_path"
                    )
                oracle = KenLMOracle(config.ngram_model_path)
        except InitializationError as e:
            log_error("Failed to initialize suggestion engine", e, config)
            raise

        lexicon = Lexicon(words, contractions, config.max_length_difference)
        engine = cls(
            lexicon,
            NGramScorer(oracle, config.max_ngram_size),
            misspellings=MisspellingMap(misspellings),
            config=config,
            tagger=tagger,
            synonym_source=synonym_source,
            grammar_checker=grammar_checker,
        )
        logger.info(
            f"Suggestion engine ready in {time.perf_counter() - start_time:.2f}s "
            f"({len(lexicon)} words)"
        )
        return engine

    def is_word(self, word: str) -> bool:
        """Return True for dictionary words, numbers and single-letter words."""
        return (
            self.lexicon.is_valid_word(word.lower())
            or is_numerical_string(word, punctuation=True)
            or is_single_letter_word(word)
        )

    def suggest(
        self,
        document_text: str,
        flagged_offset: int,
        known_error_offsets: Iterable[int] = (),
    ) -> List[str]:
        """Return ranked replacements for the token starting at ``flagged_offset``.

        Args:
            document_text: The full document
            flagged_offset: Start offset of the flagged token
            known_error_offsets: Start offsets of other flagged tokens, kept
                out of the context window

        Returns:
            At most ``config.max_replacements`` suggestions, best first,
            capitalized when the token starts a sentence. Empty if no token
            starts at the offset or nothing could be ranked.
        """
        tokens = tokenize(document_text)
        index = self._token_index(tokens, flagged_offset)
        if index is None:
            logger.warning(f"No word starts at offset {flagged_offset}")
            return []

        offsets = set(known_error_offsets)
        error_indices = [
            i for i, token in enumerate(tokens) if token.start in offsets and i != index
        ]
        return self._suggest_at(document_text, tokens, index, error_indices)

    def find_errors(self, text: str) -> List[Token]:
        """Return every token that looks like a word but is not a known one."""
        return [
            token
            for token in tokenize(text)
            if not self.is_word(clean_word(token.text)) and is_possible_word(token.text)
        ]

    def check_spelling(
        self, text: str, workers: Optional[int] = None
    ) -> Dict[int, List[str]]:
        """Suggest replacements for every unknown word in a document.

        Flags removed by the enabled heuristics (hyphenated compounds,
        mid-sentence capitalized words, probable British spellings) are not
        reported.

        Args:
            text: The document text
            workers: Thread count, defaults to ``config.max_workers``

        Returns:
            Error start offset mapped to its suggestions, in document order
        """
        tokens = tokenize(text)
        error_indices = [
            i
            for i, token in enumerate(tokens)
            if not self.is_word(clean_word(token.text)) and is_possible_word(token.text)
        ]
        reported = [i for i in error_indices if not self._is_suppressed(text, tokens[i])]
        known = set(error_indices)

        def query(index: int) -> List[str]:
            return self._suggest_at(text, tokens, index, known - {index})

        workers = workers or self.config.max_workers
        if workers > 1 and len(reported) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(query, reported))
        else:
            results = [query(index) for index in reported]

        replacements = {tokens[i].start: result for i, result in zip(reported, results)}
        logger.info(
            f"Spelling errors found: {len(replacements)} "
            f"({len(error_indices) - len(reported)} suppressed)"
        )
        return replacements

    def suggest_synonyms(self, text: str, offset: int) -> List[str]:
        """Return synonyms for the word at ``offset``, ranked in context.

        The sentence around the word is tagged, the word's tag picks the
        thesaurus category, and the synonyms go through the same ranking as
        spelling candidates.

        Args:
            text: The document text
            offset: Start offset of the word

        Returns:
            Up to ``config.max_replacements`` synonyms; empty for words that
            are not adverbs, verbs, adjectives or nouns

        Raises:
            InitializationError: If no tagger or synonym source is configured
        """
        if self.tagger is None or self.synonym_source is None:
            raise InitializationError(
                "suggest_synonyms requires a tagger and a synonym source"
            )

        tokens = tokenize(text)
        index = self._token_index(tokens, offset)
        if index is None:
            logger.warning(f"No word starts at offset {offset}")
            return []

        word = clean_word(tokens[index].text)
        category = self._category_in_sentence(current_sentence(text, offset), word)
        if category is LexicalCategory.OTHER:
            return []

        synonyms = self.synonym_source.synonyms(word, category)
        window = self.window_builder.build_at(tokens, index)
        suggestions = self.ranker.rank(window, window.error_slot, synonyms, word)
        if is_first_word_in_sentence(text, offset):
            suggestions = capitalize_words(suggestions)
        return suggestions

    def check_grammar(
        self, text: str, ignored_rules: Collection[str] = ()
    ) -> Dict[int, List[str]]:
        """Return grammar suggestions keyed by match offset.

        Args:
            text: The document text
            ignored_rules: Rule ids to skip, on top of
                ``config.ignored_grammar_rules``

        Raises:
            InitializationError: If no grammar checker is configured
        """
        if self.grammar_checker is None:
            raise InitializationError("check_grammar requires a grammar checker")

        ignored = set(self.config.ignored_grammar_rules) | set(ignored_rules)
        replacements = filter_grammar_matches(self.grammar_checker.check(text), ignored)
        logger.info(f"Grammar errors found: {len(replacements)}")
        return replacements

    def _suggest_at(
        self,
        text: str,
        tokens: Sequence[Token],
        index: int,
        error_indices: Collection[int],
    ) -> List[str]:
        token = tokens[index]
        word = clean_word(token.text)
        window = self.window_builder.build_at(tokens, index, error_indices)
        suggestions = self.ranker.rank(
            window, window.error_slot, self.generator.generate(word), word
        )
        if is_first_word_in_sentence(text, token.start):
            suggestions = capitalize_words(suggestions)
        return suggestions

    def _is_suppressed(self, text: str, token: Token) -> bool:
        if self.config.suppress_hyphenated and is_hyphenated(token.text):
            return True
        if self.config.suppress_proper_nouns and is_proper_noun(
            text, token.start, token.text
        ):
            return True
        if self.config.suppress_british_spellings and is_british_spelling(
            token.text, self.is_word
        ):
            return True
        return False

    def _category_in_sentence(self, sentence: str, word: str) -> LexicalCategory:
        for tagged_word, tag in self.tagger.tag(sentence):
            if clean_word(tagged_word) == word:
                return classify_tag(tag)
        return LexicalCategory.OTHER

    @staticmethod
    def _token_index(tokens: Sequence[Token], offset: int) -> Optional[int]:
        return next((i for i, token in enumerate(tokens) if token.start == offset), None)
