# ───────────────────────── tests/test_spellcheck.py ─────────────────────────
"""
Tests for the suggestion engine.
"""

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest

from stylecheck.config import Config
from stylecheck.grammar import GrammarMatch
from stylecheck.lexicon import Lexicon, MisspellingMap
from stylecheck.logging_utils import InitializationError
from stylecheck.ngram import NGramScorer
from stylecheck.pos import Claws7Tagger, LexicalCategory, NltkTagger
from stylecheck.spellcheck import SuggestionEngine
from stylecheck.synonyms import WordNetSynonyms

WORDS = [
    "i", "have", "too", "many", "mistakes", "mistake", "are", "bad",
    "the", "dog", "sat", "on", "mat", "we", "and", "things", "analyse",
    "am", "happy", "glad", "today", "days",
]


class TableOracle:
    """Oracle answering from a fixed table, remembering every query."""

    def __init__(self, table=None, default=-10.0):
        self.table = table or {}
        self.default = default
        self.queries = []

    def log_prob(self, words):
        self.queries.append(tuple(words))
        return self.table.get(tuple(words), self.default)


def make_engine(table=None, config=None, **kwargs):
    oracle = TableOracle(table)
    engine = SuggestionEngine(
        Lexicon(WORDS), NGramScorer(oracle), config=config, **kwargs
    )
    return engine, oracle


class TestSuggest:
    """Test suggestions for a single flagged token."""

    def test_mistaks(self):
        """A context-plausible, close candidate is ranked first."""
        engine, _ = make_engine({("too", "many", "mistakes"): -1.0})

        suggestions = engine.suggest("I have too many mistaks.", 16)

        assert suggestions[0] == "mistakes"
        assert len(suggestions) <= 3

    def test_idempotent(self):
        """Identical inputs give identical outputs."""
        engine, _ = make_engine({("too", "many", "mistakes"): -1.0})
        text = "I have too many mistaks."

        assert engine.suggest(text, 16) == engine.suggest(text, 16)

    def test_sentence_start_capitalized(self):
        """Suggestions for a sentence-initial word are capitalized."""
        engine, _ = make_engine({("mistakes", "are", "bad"): -1.0})

        suggestions = engine.suggest("Mistaks are bad.", 0)

        assert suggestions[0] == "Mistakes"
        assert all(suggestion[0].isupper() for suggestion in suggestions)

    def test_known_errors_kept_out_of_window(self):
        """Other flagged words never reach the language model."""
        engine, oracle = make_engine()

        engine.suggest("the dog sat on teh mat", 15, known_error_offsets=[8, 15])

        assert oracle.queries
        assert all(len(query) == 3 for query in oracle.queries)
        assert all(query[0] == "on" for query in oracle.queries)

    def test_misspelling_corrections_are_candidates(self):
        """Known corrections are ranked with the neighbours."""
        oracle = TableOracle()
        engine = SuggestionEngine(
            Lexicon(["the", "cat"]),
            NGramScorer(oracle),
            misspellings=MisspellingMap({"thw": ["the"]}),
        )

        assert engine.suggest("thw cat", 0)[0] == "The"

    def test_no_token_at_offset(self, caplog):
        """An offset inside whitespace yields nothing and a warning."""
        engine, oracle = make_engine()

        with caplog.at_level(logging.WARNING, logger="stylecheck"):
            assert engine.suggest("I have", 1) == []

        assert "No word starts at offset 1" in caplog.text
        assert oracle.queries == []


class TestWordChecks:
    """Test word validation and error discovery."""

    def test_is_word(self):
        """Dictionary words, numbers and single-letter words are valid."""
        engine, _ = make_engine()

        assert engine.is_word("The")
        assert engine.is_word("3,000.50")
        assert engine.is_word("v")
        assert not engine.is_word("b")
        assert not engine.is_word("mistaks")

    def test_find_errors(self):
        """Unknown words are found with their offsets."""
        engine, _ = make_engine()

        errors = engine.find_errors("The dgo sat on 3 mats, a x.")

        assert [(token.text, token.start) for token in errors] == [
            ("dgo", 4),
            ("mats", 17),
        ]


class TestCheckSpelling:
    """Test whole-document checks and the suppression heuristics."""

    TEXT = "The dgo sat. We analyze Londn and well-knwn things."

    TABLE = {("the", "dog", "sat"): -1.0, ("dog", "sat", "we"): -1.0}

    def test_heuristics_suppress_flags(self):
        """British spellings, proper nouns and compounds are not reported."""
        engine, _ = make_engine(self.TABLE)

        replacements = engine.check_spelling(self.TEXT)

        assert list(replacements) == [4]
        assert replacements[4][0] == "dog"

    def test_heuristics_disabled(self):
        """Every unknown word is reported when the filters are off."""
        config = Config(
            suppress_hyphenated=False,
            suppress_proper_nouns=False,
            suppress_british_spellings=False,
        )
        engine, _ = make_engine(self.TABLE, config=config)

        assert list(engine.check_spelling(self.TEXT)) == [4, 16, 24, 34]

    def test_compound_does_not_hide_other_flags(self):
        """Hyphens are counted per word, never across the document."""
        engine, _ = make_engine(self.TABLE)

        replacements = engine.check_spelling("The dgo sat-down and well-knwn.")

        assert list(replacements) == [4]

    def test_parallel_matches_sequential(self):
        """Thread workers produce the same suggestions as a single thread."""
        config = Config(
            suppress_hyphenated=False,
            suppress_proper_nouns=False,
            suppress_british_spellings=False,
        )
        engine, _ = make_engine(self.TABLE, config=config)

        assert engine.check_spelling(self.TEXT, workers=4) == engine.check_spelling(
            self.TEXT, workers=1
        )

    def test_clean_text(self):
        """A text without unknown words has no replacements."""
        engine, _ = make_engine()
        assert engine.check_spelling("The dog sat on the mat.") == {}


class TestSynonyms:
    """Test context-ranked synonyms."""

    def make_synonym_engine(self):
        tagger = MagicMock()
        tagger.tag.side_effect = lambda sentence: [
            (word, "JJ" if word.lower() == "happy" else "DT")
            for word in sentence.split()
        ]
        source = MagicMock()
        source.synonyms.return_value = ["glad"]
        engine, _ = make_engine(tagger=tagger, synonym_source=source)
        return engine, source

    def test_adjective_synonyms(self):
        """The tag picks the thesaurus category."""
        engine, source = self.make_synonym_engine()

        assert engine.suggest_synonyms("I am happy today.", 5) == ["glad"]
        source.synonyms.assert_called_once_with("happy", LexicalCategory.ADJECTIVE)

    def test_sentence_start_capitalized(self):
        """Synonyms for a sentence-initial word are capitalized."""
        engine, _ = self.make_synonym_engine()
        assert engine.suggest_synonyms("Happy days.", 0) == ["Glad"]

    def test_other_category(self):
        """Words outside the four categories get no synonyms."""
        engine, source = self.make_synonym_engine()

        assert engine.suggest_synonyms("I am happy today.", 0) == []
        source.synonyms.assert_not_called()

    def test_requires_collaborators(self):
        """Without a tagger the operation cannot run."""
        engine, _ = make_engine()
        with pytest.raises(InitializationError):
            engine.suggest_synonyms("I am happy.", 5)


class TestCheckGrammar:
    """Test grammar match filtering through the engine."""

    def test_filters_matches(self):
        """Spelling, ignored and noisy matches are dropped."""
        checker = MagicMock()
        checker.check.return_value = [
            GrammarMatch(0, 1, "UPPERCASE_SENTENCE_START", "Capitalize", suggestions=["I"]),
            GrammarMatch(2, 4, "MORFOLOGIK_RULE_EN_US", "Spelling", is_spelling_rule=True),
            GrammarMatch(7, 3, "EN_A_VS_AN", "Wrong article", suggestions=["an"]),
            GrammarMatch(11, 2, "DOUBLE_PUNCTUATION", "Two consecutive dots"),
        ]
        engine, _ = make_engine(
            config=Config(ignored_grammar_rules=["EN_A_VS_AN"]), grammar_checker=checker
        )

        assert engine.check_grammar("i have a apple..") == {0: ["I"]}
        ignored = ["UPPERCASE_SENTENCE_START"]
        assert engine.check_grammar("i have a apple..", ignored_rules=ignored) == {}

    def test_requires_checker(self):
        """Without a grammar checker the operation cannot run."""
        engine, _ = make_engine()
        with pytest.raises(InitializationError):
            engine.check_grammar("text")


class TestFromConfig:
    """Test building the engine from corpora on disk."""

    def test_loads_corpora(self, tmp_path):
        """Word, misspelling and contraction corpora are all wired in."""
        words = tmp_path / "words.txt"
        words.write_text("the\ncat\ncannot\n", encoding="utf-8")
        misspellings = tmp_path / "misspellings.txt"
        misspellings.write_text("thw->the\n", encoding="utf-8")
        contractions = tmp_path / "contractions.txt"
        contractions.write_text("can't\tcannot/can not\n", encoding="utf-8")

        config = Config(
            dictionary_path=str(words),
            misspellings_path=str(misspellings),
            contractions_path=str(contractions),
            levenshtein_weight=3.0,
        )
        engine = SuggestionEngine.from_config(config, oracle=TableOracle())

        assert engine.lexicon.is_valid_word("cat")
        assert engine.generator.generate("thw")[0] == "the"
        assert engine.lexicon.full_forms("can't") == ["cannot", "can not"]
        assert engine.ranker.levenshtein_weight == 3.0

    @patch("stylecheck.spellcheck.log_error")
    def test_missing_model(self, mock_log_error, tmp_path):
        """No oracle and no model path fails fast and is logged."""
        words = tmp_path / "words.txt"
        words.write_text("the\n", encoding="utf-8")

        with pytest.raises(InitializationError, match="ngram_model_path"):
            SuggestionEngine.from_config(Config(dictionary_path=str(words)))
        mock_log_error.assert_called_once()

    @patch("stylecheck.spellcheck.log_error")
    def test_missing_corpus(self, mock_log_error, tmp_path):
        """A missing corpus file fails fast."""
        config = Config(dictionary_path=str(tmp_path / "absent.txt"))

        with pytest.raises(InitializationError, match="not found"):
            SuggestionEngine.from_config(config, oracle=TableOracle())
        mock_log_error.assert_called_once()

    def test_enable_synonyms(self, tmp_path):
        """Switching synonyms on builds the nltk tagger and WordNet source."""
        words = tmp_path / "words.txt"
        words.write_text("i\nam\nhappy\nglad\ntoday\n", encoding="utf-8")

        nltk = MagicMock()
        nltk.pos_tag.side_effect = lambda tokens: [
            (token, "JJ" if token == "happy" else "NN") for token in tokens
        ]
        happy, glad = MagicMock(), MagicMock()
        happy.name.return_value, happy.count.return_value = "happy", 4
        glad.name.return_value, glad.count.return_value = "glad", 1
        synset = MagicMock()
        synset.lemmas.return_value = [happy, glad]
        wn = MagicMock()
        wn.ADV, wn.VERB, wn.ADJ, wn.NOUN = "r", "v", "a", "n"
        wn.synsets.return_value = [synset]
        corpus = MagicMock()
        corpus.wordnet = wn

        config = Config(dictionary_path=str(words), enable_synonyms=True)
        with patch.dict(sys.modules, {"nltk": nltk, "nltk.corpus": corpus}):
            engine = SuggestionEngine.from_config(config, oracle=TableOracle())

        assert isinstance(engine.tagger, NltkTagger)
        assert isinstance(engine.synonym_source, WordNetSynonyms)
        assert engine.suggest_synonyms("I am happy today.", 5) == ["glad"]
        wn.synsets.assert_called_with("happy", pos="a")

    @patch("stylecheck.spellcheck.log_error")
    def test_enable_synonyms_without_nltk(self, mock_log_error, tmp_path):
        """Synonyms cannot be switched on without nltk installed."""
        words = tmp_path / "words.txt"
        words.write_text("the\n", encoding="utf-8")
        config = Config(dictionary_path=str(words), enable_synonyms=True)

        with patch.dict(sys.modules, {"nltk": None}):
            with pytest.raises(InitializationError, match="stylecheck\\[nlp\\]"):
                SuggestionEngine.from_config(config, oracle=TableOracle())
        mock_log_error.assert_called_once()

    def test_claws7_tagger_wrapped(self, tmp_path):
        """A CLAWS7 tagger is converted to Penn before classification."""
        words = tmp_path / "words.txt"
        words.write_text("i\nam\nhappiest\ngladdest\ntoday\n", encoding="utf-8")
        tagger = MagicMock()
        tagger.tag.side_effect = lambda sentence: [
            (word, "JJT" if word == "happiest" else "NN1") for word in sentence.split()
        ]
        source = MagicMock()
        source.synonyms.return_value = ["gladdest"]

        engine = SuggestionEngine.from_config(
            Config(dictionary_path=str(words), tagset="claws7"),
            oracle=TableOracle(),
            tagger=tagger,
            synonym_source=source,
        )

        assert isinstance(engine.tagger, Claws7Tagger)
        assert engine.suggest_synonyms("I am happiest today.", 5) == ["gladdest"]
        source.synonyms.assert_called_once_with("happiest", LexicalCategory.ADJECTIVE)
