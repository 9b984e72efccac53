# ───────────────────────── src/stylecheck/__init__.py ─────────────────────────
"""
stylecheck: context-ranked replacement suggestions for flagged words.

Candidates come from a dictionary, a common-misspellings list and a
contractions list; an n-gram language model ranks them in the context of the
surrounding words, with an edit-distance penalty and a suffix tie-break.
"""

__version__ = "1.0.0"
__author__ = "stylecheck Team"

from .config import Config
from .lexicon import Lexicon, MisspellingMap
from .logging_utils import InitializationError

# Public API exports
from .spellcheck import SuggestionEngine

__all__ = [
    "SuggestionEngine",
    "Lexicon",
    "MisspellingMap",
    "InitializationError",
    "Config",
    "__version__",
]
