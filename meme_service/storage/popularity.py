"""
Popularity ranking for meme listings.
"""

from typing import Sequence

from ..models.schemas import MemeRecord


def rank(memes: Sequence[MemeRecord]) -> list[MemeRecord]:
    """
    Order memes by descending likes + comment_count.

    ``sorted`` is stable with ``reverse=True`` as well, so memes with
    the same score keep the order they had in ``memes``. The input is
    not modified.
    """
    return sorted(memes, key=lambda meme: meme.popularity, reverse=True)
