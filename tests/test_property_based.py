"""Property-based tests for merge and flatten invariants."""

from hypothesis import given
from hypothesis import strategies as st

from enx.tree import flatten, flatten_paths, merge, unflatten

_keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", min_size=1, max_size=6)
_scalars = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=10))

_trees = st.recursive(
    st.dictionaries(_keys, _scalars, min_size=1, max_size=4),
    lambda children: st.dictionaries(_keys, st.one_of(_scalars, children), min_size=1, max_size=4),
    max_leaves=20,
)
_string_trees = st.recursive(
    st.dictionaries(_keys, st.text(max_size=10), min_size=1, max_size=4),
    lambda children: st.dictionaries(_keys, st.one_of(st.text(max_size=10), children), min_size=1, max_size=4),
    max_leaves=20,
)


class TestPropertyBased:
    """Property-based tests for invariants."""

    @given(_trees, _trees)
    def test_disjoint_merge_is_union(self, left, right):
        """Property: trees under different top-level keys merge to their union."""
        # Arrange
        base = {"base": left}
        override = {"override": right}

        # Act
        result = merge(base, override)

        # Assert
        assert result == {"base": left, "override": right}

    @given(_trees, _trees)
    def test_override_leaf_wins(self, base, override):
        """Property: every override leaf is present unchanged in the result."""
        # Act
        result = flatten_paths(merge(base, override))

        # Assert
        for path, value in flatten_paths(override).items():
            assert result[path] == value

    @given(_trees)
    def test_merge_with_empty_is_identity(self, tree):
        """Property: merging with {} on either side returns an equal tree."""
        assert merge(tree, {}) == tree
        assert merge({}, tree) == tree

    @given(_string_trees)
    def test_flatten_unflatten_round_trip(self, tree):
        """Property: string-leaf trees survive flatten then unflatten."""
        assert unflatten(flatten(tree)) == tree
