"""Tests for the ordered multimap."""

from mojogl_resolver.multimap import MultiMap


class TestMultiMap:
    def test_keys_and_values_keep_insertion_order(self):
        multimap: MultiMap[str, int] = MultiMap()
        multimap.add("b", 2)
        multimap.add("a", 1)
        multimap.add("b", 3)

        assert multimap.keys() == ["b", "a"]
        assert multimap.get("b") == [2, 3]
        assert list(multimap.items()) == [("b", [2, 3]), ("a", [1])]

    def test_duplicates_are_rejected(self):
        multimap: MultiMap[str, int] = MultiMap()
        assert multimap.add("a", 1)
        assert not multimap.add("a", 1)
        assert multimap.get("a") == [1]

    def test_identity_function(self):
        multimap: MultiMap[str, tuple[str, int]] = MultiMap(identity=lambda v: v[0])
        multimap.add("group", ("A", 1))
        multimap.add("group", ("A", 2))
        multimap.add("group", ("B", 1))

        assert multimap.get("group") == [("A", 1), ("B", 1)]

    def test_missing_key(self):
        multimap: MultiMap[str, int] = MultiMap()
        assert multimap.get("missing") == []
        assert "missing" not in multimap
        assert len(multimap) == 0
