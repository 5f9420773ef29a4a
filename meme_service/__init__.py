"""
Meme Board API

An in-memory meme board: upload memes, like them, and list them
ordered by popularity.
"""

__version__ = "1.0.0"
