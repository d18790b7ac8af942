"""
Unit tests for the in-memory collection store.
"""

import pytest

from in_memory_web_api.core.store import Collection, CollectionStore


SHARED_SEED = {"heroes": [{"id": 1, "name": "Windstorm"}]}


class TestCollectionStore:
    """Tests for CollectionStore."""

    def test_lookup_known_collection(self, store: CollectionStore):
        """Test looking up a seeded collection."""
        heroes = store.lookup("heroes")

        assert isinstance(heroes, Collection)
        assert heroes.name == "heroes"
        assert len(heroes) == 2

    def test_lookup_unknown_collection(self, store: CollectionStore):
        """Test that unknown names give None instead of raising."""
        assert store.lookup("nope") is None
        assert store.lookup(None) is None

    def test_collection_names(self, store: CollectionStore):
        assert store.collection_names() == ["heroes", "villains"]
        assert "heroes" in store
        assert len(store) == 2

    def test_seed_must_be_callable(self):
        """Test that a plain mapping is rejected."""
        with pytest.raises(TypeError):
            CollectionStore(SHARED_SEED)

    def test_reset_discards_mutations(self, store: CollectionStore):
        """Test that reset restores the seed snapshot."""
        heroes = store.lookup("heroes")
        heroes.append({"id": 9, "name": "New"})
        heroes.replace_at(0, {"id": 1, "name": "Changed"})
        store.lookup("villains").append({"id": 1})

        store.reset()

        assert store.snapshot() == {
            "heroes": [
                {"id": 1, "name": "Windstorm"},
                {"id": 2, "name": "Bombasto"},
            ],
            "villains": [],
        }

    def test_reset_with_shared_seed_object(self):
        """Test that mutations never reach data the factory shares."""
        store = CollectionStore(lambda: SHARED_SEED)

        store.lookup("heroes").records[0]["name"] = "Mutated"
        store.lookup("heroes").append({"id": 2})
        store.reset()

        assert SHARED_SEED == {"heroes": [{"id": 1, "name": "Windstorm"}]}
        assert store.snapshot() == SHARED_SEED

    def test_snapshot_is_a_copy(self, store: CollectionStore):
        snapshot = store.snapshot()
        snapshot["heroes"].clear()

        assert len(store.lookup("heroes")) == 2


class TestRecordLookup:
    """Tests for index_of() and find_by_id()."""

    def test_index_of(self, store: CollectionStore):
        heroes = store.lookup("heroes")

        assert store.index_of(heroes, 1) == 0
        assert store.index_of(heroes, 2) == 1
        assert store.index_of(heroes, 3) == -1

    def test_strict_type_match(self, store: CollectionStore):
        """Test that "1" does not match the integer id 1."""
        heroes = store.lookup("heroes")

        assert store.index_of(heroes, "1") == -1
        assert store.find_by_id(heroes, "1") is None

    def test_bool_does_not_match_int(self):
        """Test that True and 1 are different ids."""
        collection = Collection("flags", [{"id": 1}, {"id": True}])

        assert CollectionStore.index_of(collection, True) == 1
        assert CollectionStore.index_of(collection, 1) == 0
        assert CollectionStore.find_by_id(Collection("x", [{"id": 1}]), True) is None

    def test_first_match_wins(self):
        """Test that duplicate ids resolve to the first record."""
        collection = Collection("dupes", [{"id": 1, "n": "a"}, {"id": 1, "n": "b"}])

        assert CollectionStore.index_of(collection, 1) == 0
        assert CollectionStore.find_by_id(collection, 1)["n"] == "a"

    def test_find_by_id(self, store: CollectionStore):
        heroes = store.lookup("heroes")

        assert store.find_by_id(heroes, 2) == {"id": 2, "name": "Bombasto"}
        assert store.find_by_id(heroes, 99) is None

    def test_malformed_records_tolerated(self):
        """Test that records without ids, or non-dicts, are skipped."""
        collection = Collection("mixed", [{"name": "no id"}, "junk", {"id": "x"}])

        assert CollectionStore.find_by_id(collection, "x") == {"id": "x"}
        assert CollectionStore.index_of(collection, "x") == 2
        assert CollectionStore.find_by_id(collection, None) is None


class TestCollection:
    """Tests for Collection mutation seams."""

    def test_append_replace_remove(self):
        collection = Collection("heroes")

        collection.append({"id": 1})
        collection.append({"id": 2})
        collection.replace_at(0, {"id": 1, "name": "one"})
        removed = collection.remove_at(1)

        assert removed == {"id": 2}
        assert collection.records == [{"id": 1, "name": "one"}]

    def test_str_is_name(self):
        assert str(Collection("heroes")) == "heroes"
