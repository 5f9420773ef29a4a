"""
Storage module for the in-memory meme store.
"""

from .memes import meme_store, MemeStore
from .popularity import rank

__all__ = ["meme_store", "MemeStore", "rank"]
