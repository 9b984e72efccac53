# ───────────────────────── src/stylecheck/distance.py ─────────────────────────
"""
String distance between words.
"""


def levenshtein(word1: str, word2: str) -> int:
    """Return the Levenshtein distance between two words.

    The comparison is case-insensitive. Insertion, deletion and substitution
    all cost 1. Only two rows of the dynamic-programming matrix are kept.

    Args:
        word1: The first word
        word2: The second word

    Returns:
        Non-negative edit distance

    Examples:
        >>> levenshtein("satement", "statement")
        1
        >>> levenshtein("Teh", "the")
        2
    """
    first = word1.lower()
    second = word2.lower()

    # Dropping/inserting all characters along the first row
    previous = list(range(len(second) + 1))

    for i, first_char in enumerate(first, start=1):
        current = [i] + [0] * len(second)
        for j, second_char in enumerate(second, start=1):
            if first_char == second_char:
                current[j] = previous[j - 1]
            else:
                deletion = previous[j] + 1
                insertion = current[j - 1] + 1
                substitution = previous[j - 1] + 1
                current[j] = min(deletion, insertion, substitution)
        previous = current

    return previous[len(second)]
