# ───────────────────────── tests/test_lexicon.py ─────────────────────────
"""
Tests for the lexicon, the misspellings map and candidate generation.
"""

from stylecheck.candidates import CandidateGenerator, merge_unique
from stylecheck.lexicon import Lexicon, MisspellingMap


class TestLexicon:
    """Test dictionary membership and nearest-word search."""

    def test_membership_is_lowercase(self):
        """Words are stored lowercase and matched exactly."""
        lexicon = Lexicon(["The", "cat"])
        assert lexicon.is_valid_word("the")
        assert lexicon.is_dictionary_word("cat")
        assert not lexicon.is_valid_word("dog")
        assert "cat" in lexicon
        assert len(lexicon) == 2

    def test_user_words(self):
        """User words are valid but kept apart from the dictionary."""
        lexicon = Lexicon(["cat"])
        lexicon.add_user_word("Tolkien")
        lexicon.add_all(["zorp", "cat"])

        assert lexicon.is_user_word("tolkien")
        assert lexicon.is_user_word("zorp")
        assert not lexicon.is_user_word("cat")
        assert not lexicon.is_dictionary_word("tolkien")
        assert lexicon.words() == ["cat", "tolkien", "zorp"]

    def test_valid_word_short_circuits(self):
        """A valid word is its own only neighbour."""
        lexicon = Lexicon(["the", "then", "them"])
        assert lexicon.nearest_words("the", 5) == ["the"]

    def test_teh_neighbours(self):
        """Closest words come first; equal distances keep load order."""
        lexicon = Lexicon(["the", "ten", "tea", "no", "one"])
        assert lexicon.nearest_words("teh", 3) == ["ten", "tea", "the"]

    def test_length_window(self):
        """Words whose length differs by three or more are never scanned."""
        lexicon = Lexicon(["a", "ab", "abcdefgh"])
        assert lexicon.nearest_words("abcd", 10) == ["ab"]

    def test_noone_split(self):
        """Joined words are split when both halves are valid."""
        lexicon = Lexicon(["no", "one", "none"])
        assert lexicon.multi_word_splits("noone") == ["no one"]
        assert lexicon.nearest_words("noone", 1) == ["no one", "none"]

    def test_split_points_exclude_last_letter(self):
        """The final single letter is never split off."""
        lexicon = Lexicon(["cat", "a"])
        assert lexicon.multi_word_splits("cata") == []

    def test_contractions_come_first(self):
        """Full forms of a contraction lead, then splits, then neighbours."""
        lexicon = Lexicon(
            ["can", "not", "cannot", "cant"],
            contractions={"can't": ["cannot", "can not"]},
        )
        assert lexicon.is_contraction("CAN'T ")
        assert lexicon.full_forms("can't") == ["cannot", "can not"]
        assert lexicon.full_forms("cat") == []

        nearest = lexicon.nearest_words("can't", 2)
        assert nearest[:2] == ["cannot", "can not"]
        assert nearest[2:] == ["cant", "can"]


class TestMisspellingMap:
    """Test the common-misspellings map."""

    def test_lookup_is_case_insensitive(self):
        """Keys are lowercased on insert and lookup."""
        misspellings = MisspellingMap({"Accension": ["accession", "ascension"]})
        assert "accension" in misspellings
        assert misspellings.corrections("ACCENSION") == ["accession", "ascension"]
        assert len(misspellings) == 1

    def test_missing_word(self):
        """Unknown words have no corrections."""
        assert MisspellingMap().corrections("anything") == []

    def test_corrections_are_copies(self):
        """Callers cannot mutate the stored corrections."""
        misspellings = MisspellingMap({"teh": ["the"]})
        misspellings.corrections("teh").append("ten")
        assert misspellings.corrections("teh") == ["the"]


class TestCandidateGenerator:
    """Test candidate discovery."""

    def test_misspellings_first_then_neighbours(self):
        """Known corrections lead and duplicates keep their first position."""
        lexicon = Lexicon(["the", "ten", "tea"])
        generator = CandidateGenerator(lexicon, MisspellingMap({"teh": ["the"]}))
        assert generator.generate("teh") == ["the", "ten", "tea"]

    def test_without_misspellings(self):
        """Neighbours alone when the misspellings map has no entry."""
        generator = CandidateGenerator(Lexicon(["the", "ten"]), num_close_words=1)
        assert generator.generate("teh") == ["ten"]

    def test_merge_unique(self):
        """First occurrence wins across sources."""
        assert merge_unique(["a", "b"], ["b", "c", "a"]) == ["a", "b", "c"]
