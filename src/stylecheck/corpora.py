# ───────────────────────── src/stylecheck/corpora.py ─────────────────────────
"""
Readers for the static corpora the lexicon is built from.

Three line-oriented formats are supported:

    Word list (one word per line, an optional frequency column is ignored)::

        abandon
        abandoned 1234

    Common misspellings (Wikipedia machine-readable list)::

        abandonned->abandoned
        accension->accession, ascension

    Contractions (tab between the contraction and its slash-separated forms)::

        ain't	am not/are not/is not

Every line is passed through ftfy first, so curly apostrophes and mojibake
in scraped corpora do not produce unmatchable keys. A missing or unreadable
file raises InitializationError; a malformed line is skipped with a warning.

When no word list is configured, the English frequency dictionary shipped
inside the symspellpy distribution is used.
"""

import logging
import re
import time
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Union

import ftfy
import symspellpy

from .logging_utils import InitializationError
from .text_format import is_possible_word

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_DICTIONARY = "frequency_dictionary_en_82_765.txt"
MISSPELLING_DELIM = re.compile(r"->|, ")
CONTRACTION_DELIM = "\t"
FORM_DELIM = "/"


def default_dictionary_path() -> Path:
    """Return the path of the word list bundled with symspellpy."""
    return Path(str(resources.files(symspellpy) / DEFAULT_DICTIONARY))


def read_corpus_lines(path: PathLike) -> List[str]:
    """Read a UTF-8 corpus file into normalized, stripped lines.

    Args:
        path: Corpus file path

    Returns:
        One entry per line (blank lines included, so line numbers match)

    Raises:
        InitializationError: If the file is missing or cannot be decoded
    """
    corpus_path = Path(path)
    try:
        with open(corpus_path, "r", encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError as e:
        raise InitializationError(f"Corpus file not found: {corpus_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InitializationError(f"Cannot read corpus file {corpus_path}: {e}") from e

    return [ftfy.fix_text(line).strip() for line in raw.splitlines()]


def has_more_than_one_capital(word: str) -> bool:
    """Return True for acronym-like entries such as 'NASA' or 'McDonald'."""
    return sum(1 for char in word if char.isupper()) >= 2


def load_word_list(path: Optional[PathLike] = None) -> List[str]:
    """Load a dictionary word list.

    Args:
        path: Word list file. None loads the symspellpy frequency dictionary.

    Returns:
        Unique lowercase words in file order

    Raises:
        InitializationError: If the file cannot be read
    """
    if path is None:
        path = default_dictionary_path()

    start_time = time.perf_counter()
    words: Dict[str, None] = {}
    skipped = 0

    for line_number, line in enumerate(read_corpus_lines(path), start=1):
        if not line:
            continue
        word = line.split()[0]
        if not is_possible_word(word):
            logger.warning(f"Skipping malformed word list line {line_number}: {line!r}")
            skipped += 1
            continue
        if has_more_than_one_capital(word):
            continue
        words.setdefault(word.lower(), None)

    logger.info(
        f"Loaded {len(words)} dictionary words from {path} "
        f"in {time.perf_counter() - start_time:.2f}s ({skipped} lines skipped)"
    )
    return list(words)


def load_misspellings(path: PathLike) -> Dict[str, List[str]]:
    """Load the common-misspellings corpus.

    Args:
        path: Misspellings file

    Returns:
        Lowercase misspelling mapped to its corrections in file order

    Raises:
        InitializationError: If the file cannot be read
    """
    misspellings: Dict[str, List[str]] = {}

    for line_number, line in enumerate(read_corpus_lines(path), start=1):
        if not line:
            continue
        fields = [part.strip() for part in MISSPELLING_DELIM.split(line)]
        if len(fields) < 2 or not all(fields):
            logger.warning(f"Skipping malformed misspelling line {line_number}: {line!r}")
            continue
        misspellings.setdefault(fields[0].lower(), []).extend(fields[1:])

    logger.info(f"Loaded {len(misspellings)} misspellings from {path}")
    return misspellings


def load_contractions(path: PathLike) -> Dict[str, List[str]]:
    """Load the contractions corpus.

    Args:
        path: Contractions file

    Returns:
        Lowercase contraction mapped to its lowercase full forms

    Raises:
        InitializationError: If the file cannot be read
    """
    contractions: Dict[str, List[str]] = {}

    for line_number, line in enumerate(read_corpus_lines(path), start=1):
        if not line:
            continue
        parts = line.split(CONTRACTION_DELIM)
        forms = []
        if len(parts) == 2:
            forms = [form.strip().lower() for form in parts[1].split(FORM_DELIM)]
        if not parts[0].strip() or not forms or not all(forms):
            logger.warning(f"Skipping malformed contraction line {line_number}: {line!r}")
            continue
        contractions[parts[0].strip().lower()] = forms

    logger.info(f"Loaded {len(contractions)} contractions from {path}")
    return contractions
