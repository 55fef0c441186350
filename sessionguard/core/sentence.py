"""
SESSIONGUARD - Sentence Formatting
Assemble une liste de messages en une phrase lisible.
"""

from typing import Iterable


def to_sentence(
    words: Iterable[str],
    words_connector: str = ", ",
    two_words_connector: str = " and ",
    last_word_connector: str = ", and ",
) -> str:
    """
    Joint des éléments en phrase naturelle.

    Example:
        to_sentence(["a"])            # "a"
        to_sentence(["a", "b"])       # "a and b"
        to_sentence(["a", "b", "c"])  # "a, b, and c"
    """
    items = [str(word) for word in words]

    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]}{two_words_connector}{items[1]}"

    return f"{words_connector.join(items[:-1])}{last_word_connector}{items[-1]}"
