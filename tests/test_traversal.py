import pytest
import underbar as ub
from underbar.core import MappingView, SequenceView, bind_iterator, resolve_collection
from underbar.models import CollectionShape


class TestEach:
    """Test the single traversal primitive"""

    def test_each_visits_sequence_in_order(self):
        """Test that each passes value, index and collection for sequences"""
        data = ["a", "b", "c"]
        seen = []
        ub.each(data, lambda value, index, collection: seen.append((value, index, collection)))

        expected = [("a", 0, data), ("b", 1, data), ("c", 2, data)]
        assert seen == expected, f"Expected {expected}, got {seen}"

    def test_each_visits_mapping_in_key_order(self, sample_mapping):
        """Test that each passes value and key for mappings"""
        seen = []
        ub.each(sample_mapping, lambda value, key: seen.append((key, value)))

        expected = [("a", 1), ("b", 2), ("c", 3)]
        assert seen == expected, f"Expected {expected}, got {seen}"

    def test_each_skips_keys_removed_during_traversal(self):
        """Test that keys deleted before their turn are not visited"""
        data = {"a": 1, "b": 2, "c": 3}
        seen = []

        def visit(value, key, collection):
            seen.append(key)
            if key == "a":
                del collection["b"]

        ub.each(data, visit)
        assert seen == ["a", "c"], f"Expected ['a', 'c'], got {seen}"

    def test_each_returns_nothing(self):
        """Test that each does not collect iterator results"""
        result = ub.each([1, 2, 3], lambda x: x * 2)
        assert result is None, f"Expected None, got {result}"

    def test_each_accepts_one_argument_callbacks(self):
        """Test that callbacks only receive the arguments they accept"""
        seen = []
        ub.each([1, 2], seen.append)
        assert seen == [1, 2], f"Expected [1, 2], got {seen}"

    def test_each_on_none_and_empty(self):
        """Test that empty inputs never call the iterator"""
        calls = []
        ub.each(None, calls.append)
        ub.each([], calls.append)
        ub.each({}, calls.append)
        assert calls == [], f"Expected no calls, got {calls}"

    def test_each_snapshots_generators(self):
        """Test that one-shot iterables are traversed like sequences"""
        seen = []
        ub.each((x * x for x in range(4)), lambda value, index: seen.append((index, value)))
        assert seen == [(0, 0), (1, 1), (2, 4), (3, 9)], f"Unexpected traversal: {seen}"

    def test_each_rejects_non_collections(self):
        """Test that scalars are not treated as collections"""
        with pytest.raises(TypeError):
            ub.each(42, lambda x: x)


class TestIndexOf:
    """Test index lookup built on each"""

    def test_finds_first_position(self):
        assert ub.index_of([1, 2, 3, 2], 2) == 1

    def test_missing_value(self):
        assert ub.index_of([1, 2, 3], 4) == -1
        assert ub.index_of([], 1) == -1

    def test_strict_equality(self):
        """Test that no coercion happens between 1, 1.0 and True"""
        assert ub.index_of([True, 1.0, 1], 1) == 2, "Only the int 1 should match"
        assert ub.index_of(["1"], 1) == -1, "Strings should not match numbers"

    def test_identity_match_for_objects(self):
        marker = object()
        assert ub.index_of([object(), marker], marker) == 1


class TestCollectionViews:
    """Test shape resolution"""

    def test_shapes(self, sample_mapping):
        assert isinstance(resolve_collection([1]), SequenceView)
        assert isinstance(resolve_collection(sample_mapping), MappingView)
        assert resolve_collection((1, 2)).shape == CollectionShape.SEQUENCE
        assert resolve_collection(sample_mapping).shape == CollectionShape.MAPPING

    def test_view_is_resolved_once(self):
        view = resolve_collection([1, 2])
        assert resolve_collection(view) is view

    def test_size(self, sample_mapping):
        assert ub.size([1, 2, 3]) == 3
        assert ub.size(sample_mapping) == 3
        assert ub.size(None) == 0

    def test_bind_iterator_with_var_args(self):
        """Test that *args callbacks receive every argument"""
        received = []
        bound = bind_iterator(lambda *args: received.append(args))
        bound(1, 2, 3)
        assert received == [(1, 2, 3)], f"Unexpected arguments: {received}"


class TestStrictEquals:

    def test_no_coercion(self):
        assert ub.strict_equals(1, 1)
        assert not ub.strict_equals(1, 1.0)
        assert not ub.strict_equals(1, True)
        assert ub.strict_equals("a", "a")

    def test_no_value_marker(self):
        assert not ub.NO_VALUE, "NO_VALUE should be falsy"
        assert ub.NO_VALUE is not None
        assert repr(ub.NO_VALUE) == "NO_VALUE"
