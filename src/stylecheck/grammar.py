# ───────────────────────── src/stylecheck/grammar.py ─────────────────────────
"""
Grammar checking through an external rule engine.

The engine itself is a black box behind the ``GrammarChecker`` protocol.
This module normalizes its matches into ``GrammarMatch`` records and drops
the ones a writer should not see: spelling rules (handled by the suggestion
engine), rules the user chose to ignore, and rule families whose short
messages are known to be noisy.

Requires: pip install stylecheck[grammar] (Java runtime for LanguageTool)
"""

import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, Iterable, List, Optional

from .logging_utils import InitializationError

logger = logging.getLogger(__name__)

SPELLING_ISSUE_TYPE = "misspelling"
SPELLING_CATEGORIES = frozenset({"TYPOS"})

# Short messages of rules whose suggestions are not worth showing
SUPPRESSED_MESSAGES = frozenset(
    {
        "null",
        "Redundant phrase",
        "Three successive sentences begin with the same word.",
        "Use smart quotes",
        "Commonly confused word",
        "Two consecutive dots",
        "Grammatical problem",
    }
)


@dataclass
class GrammarMatch:
    """A single rule match reported by a grammar checker."""

    offset: int
    length: int
    rule_id: str
    short_message: Optional[str] = None
    message: str = ""
    suggestions: List[str] = field(default_factory=list)
    is_spelling_rule: bool = False


def filter_grammar_matches(
    matches: Iterable[GrammarMatch], ignored_rules: Collection[str] = ()
) -> Dict[int, List[str]]:
    """Keep reportable grammar matches, keyed by their start offset.

    A match is dropped when it comes from a spelling rule, its rule id is
    ignored, it has no short message, or its short message is suppressed.
    A later match at the same offset replaces an earlier one.

    Args:
        matches: Matches from a grammar checker
        ignored_rules: Rule ids never reported

    Returns:
        Offset mapped to the match's suggested replacements
    """
    ignored = set(ignored_rules)
    replacements: Dict[int, List[str]] = {}
    for match in matches:
        if (
            match.is_spelling_rule
            or match.rule_id in ignored
            or match.short_message is None
            or match.short_message in SUPPRESSED_MESSAGES
        ):
            continue
        replacements[match.offset] = list(match.suggestions)
    return replacements


class LanguageToolChecker:
    """Grammar checker backed by a local LanguageTool server.

    Args:
        language: LanguageTool language code (default: "en-US")

    Raises:
        InitializationError: If language-tool-python is not installed or
            the server cannot start
    """

    def __init__(self, language: str = "en-US"):
        try:
            import language_tool_python
        except ImportError as e:
            raise InitializationError(
                "language-tool-python is required for LanguageToolChecker; "
                "install stylecheck[grammar]"
            ) from e

        self.language = language
        try:
            self._tool = language_tool_python.LanguageTool(language)
        except Exception as e:
            raise InitializationError(f"LanguageTool initialization failed: {e}") from e
        logger.info(f"Started LanguageTool for {language}")

    def check(self, text: str) -> List[GrammarMatch]:
        """Check text and convert every LanguageTool match."""
        return [self._convert(match) for match in self._tool.check(text)]

    def close(self) -> None:
        """Stop the LanguageTool server."""
        self._tool.close()

    @staticmethod
    def _convert(match) -> GrammarMatch:
        rule_id = getattr(match, "ruleId", None) or getattr(match, "rule_id", "")
        length = getattr(match, "errorLength", None)
        if length is None:
            length = getattr(match, "error_length", 0)
        issue_type = getattr(match, "ruleIssueType", None) or getattr(
            match, "rule_issue_type", ""
        )
        category = getattr(match, "category", "")

        return GrammarMatch(
            offset=match.offset,
            length=length,
            rule_id=rule_id,
            short_message=getattr(match, "shortMessage", None)
            or getattr(match, "short_message", ""),
            message=getattr(match, "message", ""),
            suggestions=list(getattr(match, "replacements", None) or []),
            is_spelling_rule=issue_type == SPELLING_ISSUE_TYPE
            or category in SPELLING_CATEGORIES,
        )
