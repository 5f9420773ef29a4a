"""
Startup data for the meme store.
"""

from ..models.schemas import MemeRecord


def demo_memes() -> list[MemeRecord]:
    """The classic memes the board starts with."""
    return [
        MemeRecord(
            id=1,
            caption="Troll Face",
            tags="classic",
            image=(
                "https://upload.wikimedia.org/wikipedia/en/thumb/9/9a/"
                "Trollface_non-free.png/220px-Trollface_non-free.png"
            ),
            likes=12,
            comment_count=3
        ),
        MemeRecord(
            id=2,
            caption="meme2",
            tags="classic, hilarious",
            image="some picture",
            likes=8,
            comment_count=1
        ),
        MemeRecord(
            id=3,
            caption="meme3",
            tags="funny",
            image="a picture",
            likes=5,
            comment_count=0
        ),
        MemeRecord(
            id=4,
            caption="meme4",
            tags="absolutely bonkers",
            image="another picture",
            likes=2,
            comment_count=4
        ),
    ]


def initial_memes(include_demo: bool = True) -> list[MemeRecord]:
    """Records passed to ``MemeStore.seed`` at startup."""
    return demo_memes() if include_demo else []
