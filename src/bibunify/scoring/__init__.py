"""Title similarity scoring."""

from bibunify.scoring.similarity import Algorithm, score, sorensen_dice

__all__ = [
    "Algorithm",
    "score",
    "sorensen_dice",
]
