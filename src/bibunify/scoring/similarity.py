"""Normalized string similarity for title comparison.

Every algorithm maps a pair of strings to a similarity in [0, 1], where
1.0 means identical. Functions are pure and defined for all inputs,
including empty strings.
"""

from collections import Counter
from collections.abc import Callable
from enum import Enum

from rapidfuzz.distance import DamerauLevenshtein, Jaro, JaroWinkler, Levenshtein

__all__ = [
    "Algorithm",
    "score",
    "sorensen_dice",
]


class Algorithm(str, Enum):
    """String similarity algorithm used for fuzzy title matching."""

    LEVENSHTEIN = "levenshtein"
    DAMERAU_LEVENSHTEIN = "damerau-levenshtein"
    JARO = "jaro"
    JARO_WINKLER = "jaro-winkler"
    SORENSEN_DICE = "sorensen-dice"

    @classmethod
    def from_name(cls, name: "str | Algorithm") -> "Algorithm":
        """Resolve an algorithm from its name.

        Accepts the enum value ('jaro-winkler'), the member name
        ('JARO_WINKLER') and underscore spellings ('jaro_winkler').

        Raises
        ------
        ValueError
            If the name is not a known algorithm.
        """
        if isinstance(name, Algorithm):
            return name
        key = name.strip().lower().replace("_", "-")
        for algorithm in cls:
            if algorithm.value == key:
                return algorithm
        choices = ", ".join(a.value for a in cls)
        raise ValueError(f"Unknown algorithm {name!r}; expected one of: {choices}")


def _bigrams(text: str) -> Counter[str]:
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def sorensen_dice(a: str, b: str) -> float:
    """Calculate Sørensen–Dice similarity over character bigrams.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    float
        Similarity (0.0-1.0).

    Notes
    -----
    Dice = 2 |B(a) ∩ B(b)| / (|B(a)| + |B(b)|), where B is the multiset of
    bigrams after removing whitespace.

    **Edge case**: equal strings (including two empty strings) return 1.0.
    If either string has fewer than two non-whitespace characters the pair
    has no bigrams to share and returns 0.0.
    """
    a = "".join(a.split())
    b = "".join(b.split())

    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    bigrams_a = _bigrams(a)
    bigrams_b = _bigrams(b)
    intersection = sum((bigrams_a & bigrams_b).values())

    return (2.0 * intersection) / (len(a) + len(b) - 2)


_SCORERS: dict[Algorithm, Callable[[str, str], float]] = {
    Algorithm.LEVENSHTEIN: Levenshtein.normalized_similarity,
    Algorithm.DAMERAU_LEVENSHTEIN: DamerauLevenshtein.normalized_similarity,
    Algorithm.JARO: Jaro.normalized_similarity,
    Algorithm.JARO_WINKLER: JaroWinkler.normalized_similarity,
    Algorithm.SORENSEN_DICE: sorensen_dice,
}


def score(a: str, b: str, algorithm: Algorithm | str = Algorithm.LEVENSHTEIN) -> float:
    """Score the similarity of two strings with the chosen algorithm.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.
    algorithm : Algorithm | str, optional
        Algorithm or its name, by default Levenshtein.

    Returns
    -------
    float
        Similarity clamped to [0, 1]. Equal strings always score 1.0.

    Examples
    --------
        >>> score("kitten", "sitting", Algorithm.LEVENSHTEIN)
        0.5714285714285714
    """
    if a == b:
        return 1.0

    similarity = _SCORERS[Algorithm.from_name(algorithm)](a, b)
    return min(1.0, max(0.0, float(similarity)))
