"""
Tests for the in-memory meme store.

Covers id assignment, snapshot isolation, the like counter and the
guarantees that must hold under concurrent access.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from meme_service.core.errors import MemeNotFoundError
from meme_service.models.schemas import MemeDraft, MemeRecord
from meme_service.storage.memes import MemeStore


def _draft(caption="hi", image="http://x/y.png", **kwargs):
    return MemeDraft(caption=caption, tags="", image=image, **kwargs)


class TestSeed:

    def test_next_id_follows_largest_seeded_id(self):
        store = MemeStore()
        store.seed([
            MemeRecord(id=7, caption="a", image="u"),
            MemeRecord(id=3, caption="b", image="u"),
        ])
        assert store.append(_draft()).id == 8

    def test_empty_seed_starts_at_one(self):
        store = MemeStore()
        store.seed([])
        assert store.append(_draft()).id == 1

    def test_seed_twice_is_an_error(self, store):
        with pytest.raises(RuntimeError):
            store.seed([])

    def test_duplicate_seed_ids_are_rejected(self):
        store = MemeStore()
        with pytest.raises(RuntimeError):
            store.seed([
                MemeRecord(id=1, caption="a", image="u"),
                MemeRecord(id=1, caption="b", image="u"),
            ])

    def test_seed_assigns_created_at(self, store):
        assert all(meme.created_at for meme in store.list())

    def test_seed_keeps_counters(self, store):
        meme = store.get(1)
        assert meme.likes == 12
        assert meme.comment_count == 3


class TestAppend:

    def test_append_zeroes_counters(self, store):
        meme = store.append(_draft(caption="hi", image="u"))
        assert meme.id == 3
        assert meme.likes == 0
        assert meme.comment_count == 0
        assert meme.caption == "hi"
        assert meme.image == "u"
        assert meme.evm_address is None

    def test_ids_strictly_increase(self, store):
        ids = [store.append(_draft()).id for _ in range(25)]
        assert ids == sorted(set(ids))
        assert ids[0] == 3

    def test_append_returns_copy(self, store):
        meme = store.append(_draft())
        meme.likes = 99
        assert store.get(meme.id).likes == 0

    def test_wallet_address_is_kept(self, store):
        meme = store.append(_draft(evm_address="0xabc"))
        assert store.get(meme.id).evm_address == "0xabc"


class TestList:

    def test_list_is_a_snapshot(self, store):
        snapshot = store.list()
        snapshot[0].likes = 1000
        snapshot.clear()
        assert len(store.list()) == 2
        assert store.get(1).likes == 12

    def test_list_keeps_insertion_order(self, store):
        store.append(_draft(caption="third"))
        assert [meme.id for meme in store.list()] == [1, 2, 3]

    def test_len(self, store):
        assert len(store) == 2


class TestIncrementLikes:

    def test_increment(self, store):
        meme = store.increment_likes(2)
        assert meme.likes == 9
        assert store.get(2).likes == 9

    def test_unknown_id_raises_and_leaves_store_untouched(self, store):
        before = [meme.model_dump() for meme in store.list()]
        with pytest.raises(MemeNotFoundError) as exc_info:
            store.increment_likes(404)
        assert exc_info.value.message == "Meme not found"
        assert [meme.model_dump() for meme in store.list()] == before

    def test_get_unknown_id(self, store):
        with pytest.raises(MemeNotFoundError):
            store.get(12345)


class TestConcurrency:

    def test_concurrent_likes_are_not_lost(self, store):
        meme = store.append(_draft())
        n = 500

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda _: store.increment_likes(meme.id), range(n)))

        assert store.get(meme.id).likes == n

    def test_concurrent_appends_get_unique_ids(self, store):
        with ThreadPoolExecutor(max_workers=16) as pool:
            memes = list(pool.map(lambda i: store.append(_draft(caption=str(i))), range(300)))

        ids = [meme.id for meme in memes]
        assert len(set(ids)) == 300
        assert set(ids) == set(range(3, 303))
        assert len(store) == 302
