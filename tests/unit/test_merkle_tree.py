"""
Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py

Tests:
1. Leaf hashing - H(utf8(preimage)) with no special cases
2. Padding - copy/zero up to the next power of two, input untouched
3. Combining - concat, commutative concat and sum (with carry)
4. Tree building - empty, single leaf, odd duplication, determinism
5. Inspection - levels, depth, leaf iteration
"""
import hashlib

import pytest
from eth_utils import keccak

from core.merkle.merkle_tree import (
    ZERO_PREIMAGE,
    build_merkle_tree,
    build_padded_tree,
    combine_digests,
    combine_level,
    compute_merkle_root,
    compute_tree_depth,
    hash_leaf,
    is_power_of_two,
    iter_leaves,
    next_power_of_two,
    pad_leaves,
    tree_depth,
    tree_levels,
)
from core.schemas.errors import MalformedDigestException, SchemaValidationException
from core.schemas.tree import CombineMethod, HashAlgorithm, PadStrategy, TreeConfig
from fixtures.tree_fixtures import ABCD, make_tree_config


def sha(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def concat_parent(left: str, right: str) -> str:
    return sha(bytes.fromhex(left) + bytes.fromhex(right))


class TestHashLeaf:
    """Tests for leaf hashing."""

    def test_empty_preimage(self):
        """The empty string is a valid leaf."""
        assert hash_leaf("", "sha256") == sha(b"")

    def test_text_preimage(self):
        assert hash_leaf("abc", "sha256") == sha(b"abc")

    def test_numeric_preimage_hashed_as_text(self):
        assert hash_leaf("42", "sha256") == sha(b"42")

    def test_keccak_leaf(self):
        assert hash_leaf("a", "keccak") == keccak(b"a").hex()


class TestPowerOfTwo:
    """Tests for power-of-two helpers."""

    @pytest.mark.parametrize(
        "n,expected",
        [(0, 1), (1, 1), (2, 2), (3, 4), (4, 4), (5, 8), (9, 16), (16, 16)],
    )
    def test_next_power_of_two(self, n, expected):
        assert next_power_of_two(n) == expected

    def test_is_power_of_two(self):
        assert is_power_of_two(1)
        assert is_power_of_two(8)
        assert not is_power_of_two(0)
        assert not is_power_of_two(6)


class TestPadLeaves:
    """Tests for power-of-two padding."""

    def test_empty_stays_empty(self):
        assert pad_leaves([], "copy") == []
        assert pad_leaves([], "zero") == []

    def test_single_leaf_unchanged(self):
        assert pad_leaves(["only"], "zero") == ["only"]

    def test_power_of_two_unchanged(self):
        assert pad_leaves(ABCD, "zero") == ABCD

    def test_copy_repeats_last_leaf(self):
        assert pad_leaves(["a", "b", "c"], PadStrategy.COPY) == ["a", "b", "c", "c"]

    def test_zero_appends_zero_preimage(self):
        assert pad_leaves(["a", "b", "c"], PadStrategy.ZERO) == ["a", "b", "c", ZERO_PREIMAGE]
        assert ZERO_PREIMAGE == "0"

    def test_five_leaves_pad_to_eight(self):
        padded = pad_leaves(["1", "2", "3", "4", "5"], "copy")

        assert len(padded) == 8
        assert padded[:5] == ["1", "2", "3", "4", "5"]
        assert padded[5:] == ["5", "5", "5"]

    def test_default_strategy_is_copy(self):
        assert pad_leaves(["x", "y", "z"]) == ["x", "y", "z", "z"]

    def test_input_not_modified(self):
        leaves = ["a", "b", "c"]
        pad_leaves(leaves, "copy")

        assert leaves == ["a", "b", "c"]

    def test_unknown_strategy_raises(self):
        with pytest.raises(SchemaValidationException):
            pad_leaves(["a", "b", "c"], "mirror")


class TestCombineDigests:
    """Tests for node combination."""

    def setup_method(self):
        self.a = hash_leaf("a", "sha256")
        self.b = hash_leaf("b", "sha256")

    def test_concat_hashes_decoded_bytes(self):
        """Parent is H(unhex(a) + unhex(b)), not H of the hex text."""
        result = combine_digests(self.a, self.b, "sha256", "concat")

        assert result == concat_parent(self.a, self.b)
        assert result != sha((self.a + self.b).encode())

    def test_concat_order_matters(self):
        ab = combine_digests(self.a, self.b, "sha256", "concat")
        ba = combine_digests(self.b, self.a, "sha256", "concat")

        assert ab != ba

    def test_commutative_order_independent(self):
        ab = combine_digests(self.a, self.b, "sha256", "concat", commutative=True)
        ba = combine_digests(self.b, self.a, "sha256", "concat", commutative=True)

        assert ab == ba
        assert ab == concat_parent(min(self.a, self.b), max(self.a, self.b))

    def test_commutative_equal_children(self):
        """Equal children combine the same way with or without sorting."""
        plain = combine_digests(self.a, self.a, "sha256", "concat")
        sorted_ = combine_digests(self.a, self.a, "sha256", "concat", commutative=True)

        assert plain == sorted_

    def test_commutative_sort_ignores_hex_case(self):
        """An upper-case digest sorts like its lower-case form."""
        lower = combine_digests("a1" * 16, "b2" * 16, "sha256", "concat", commutative=True)
        upper_right = combine_digests(
            "a1" * 16, ("b2" * 16).upper(), "sha256", "concat", commutative=True
        )
        upper_left = combine_digests(
            ("b2" * 16).upper(), "a1" * 16, "sha256", "concat", commutative=True
        )

        assert upper_right == lower
        assert upper_left == lower

    def test_concat_accepts_mixed_case(self):
        mixed = self.a[:10].upper() + self.a[10:]

        assert combine_digests(mixed, self.b.upper(), "sha256", "concat") == concat_parent(
            self.a, self.b
        )

    def test_sum_order_independent(self):
        ab = combine_digests(self.a, self.b, "sha256", CombineMethod.SUM)
        ba = combine_digests(self.b, self.a, "sha256", CombineMethod.SUM)

        assert ab == ba

    def test_sum_ignores_commutative_flag(self):
        plain = combine_digests(self.a, self.b, "sha256", "sum")
        flagged = combine_digests(self.a, self.b, "sha256", "sum", commutative=True)

        assert plain == flagged

    def test_sum_carry_grows_width(self):
        """0xff + 0x01 = 0x100 is hashed as the two bytes 01 00."""
        assert combine_digests("ff", "01", "sha256", "sum") == sha(b"\x01\x00")

    def test_sum_has_no_fixed_width(self):
        """Leading zero bytes of the inputs do not survive the sum."""
        assert combine_digests("0001", "0002", "sha256", "sum") == sha(b"\x03")

    def test_sum_rejects_prefixed_digest(self):
        with pytest.raises(MalformedDigestException):
            combine_digests("0x12", "34", "sha256", "sum")

    def test_sum_rejects_underscore_digest(self):
        with pytest.raises(MalformedDigestException):
            combine_digests("12_34", "5678", "sha256", "sum")

    def test_concat_rejects_non_hex(self):
        with pytest.raises(MalformedDigestException):
            combine_digests("not-hex", self.b, "sha256", "concat")

    def test_unknown_combine_method_raises(self):
        with pytest.raises(SchemaValidationException):
            combine_digests(self.a, self.b, "sha256", "xor")

    def test_combine_level_duplicates_odd_tail(self):
        c = hash_leaf("c", "sha256")
        level = combine_level([self.a, self.b, c], "sha256")

        assert level == [concat_parent(self.a, self.b), concat_parent(c, c)]


class TestBuildMerkleTree:
    """Tests for tree construction."""

    def test_empty_leaves_no_tree(self):
        assert build_merkle_tree([], "sha256") is None

    @pytest.mark.parametrize("algorithm", list(HashAlgorithm))
    def test_single_leaf_is_root(self, algorithm):
        root = build_merkle_tree(["solo"], algorithm)

        assert root.is_leaf
        assert root.digest == hash_leaf("solo", algorithm)
        assert root.preimage == "solo"

    def test_four_leaves_manual_root(self):
        h = [hash_leaf(x, "sha256") for x in ABCD]
        expected = concat_parent(concat_parent(h[0], h[1]), concat_parent(h[2], h[3]))

        root = build_merkle_tree(ABCD, "sha256")

        assert root.digest == expected
        assert root.left.left.preimage == "a"
        assert root.right.right.preimage == "d"

    def test_odd_level_duplicates_same_node(self):
        """Without padding, the trailing node is paired with itself."""
        root = build_merkle_tree(["a", "b", "c"], "sha256")
        c_pair = root.right

        assert c_pair.left is c_pair.right
        assert c_pair.is_duplicated_pair
        assert c_pair.digest == concat_parent(c_pair.left.digest, c_pair.left.digest)

    def test_odd_level_above_leaves(self):
        """Duplication also happens on internal levels (3 nodes -> 2)."""
        root = build_merkle_tree(["1", "2", "3", "4", "5", "6"], "sha256")

        assert root.right.left is root.right.right

    def test_root_deterministic(self):
        roots = [build_merkle_tree(ABCD, "keccak").digest for _ in range(5)]

        assert all(r == roots[0] for r in roots)

    def test_leaf_order_matters(self):
        forward = build_merkle_tree(ABCD, "sha256").digest
        backward = build_merkle_tree(list(reversed(ABCD)), "sha256").digest

        assert forward != backward

    def test_commutative_tree_ignores_sibling_order(self):
        one = build_merkle_tree(["a", "b", "c", "d"], "sha256", commutative=True)
        two = build_merkle_tree(["b", "a", "d", "c"], "sha256", commutative=True)

        assert one.digest == two.digest

    def test_algorithms_give_different_roots(self):
        roots = {build_merkle_tree(ABCD, alg).digest for alg in ("keccak", "sha256", "blake2b", "ripemd160")}

        assert len(roots) == 4


class TestPaddedTree:
    """Tests for build_padded_tree and compute_merkle_root."""

    def test_padded_tree_matches_manual_padding(self):
        config = make_tree_config(pad_strategy=PadStrategy.ZERO)
        expected = build_merkle_tree(["a", "b", "c", "0"], "sha256")

        assert build_padded_tree(["a", "b", "c"], config).digest == expected.digest

    def test_copy_padding_equals_odd_duplication_for_three(self):
        """For three leaves, copy padding and self-pairing agree."""
        config = make_tree_config()

        padded = build_padded_tree(["a", "b", "c"], config)
        unpadded = build_merkle_tree(["a", "b", "c"], "sha256")

        assert padded.digest == unpadded.digest

    def test_copy_and_zero_differ(self):
        copy_root = build_padded_tree(["a", "b", "c"], make_tree_config(pad_strategy="copy"))
        zero_root = build_padded_tree(["a", "b", "c"], make_tree_config(pad_strategy="zero"))

        assert copy_root.digest != zero_root.digest

    def test_default_config_is_keccak(self):
        root = build_padded_tree(["a"])

        assert root.digest == keccak(b"a").hex()

    def test_compute_merkle_root_matches_tree(self):
        leaves = ["1", "2", "3", "4", "5"]
        for config in (
            make_tree_config(),
            make_tree_config(combine_method="sum"),
            make_tree_config(pad_strategy="zero", commutative=True),
            TreeConfig(),
        ):
            assert compute_merkle_root(leaves, config) == build_padded_tree(leaves, config).digest

    def test_compute_merkle_root_empty(self):
        assert compute_merkle_root([], make_tree_config()) is None

    def test_padded_tree_empty(self):
        assert build_padded_tree([], make_tree_config()) is None


class TestTreeInspection:
    """Tests for levels, depth and leaf iteration."""

    def test_levels_leaf_first(self):
        root = build_merkle_tree(ABCD, "sha256")
        levels = tree_levels(root)

        assert [len(level) for level in levels] == [4, 2, 1]
        assert levels[0] == [hash_leaf(x, "sha256") for x in ABCD]
        assert levels[-1] == [root.digest]

    def test_levels_skip_duplicated_child(self):
        root = build_merkle_tree(["a", "b", "c"], "sha256")

        assert [len(level) for level in tree_levels(root)] == [3, 2, 1]

    def test_levels_empty(self):
        assert tree_levels(None) == []

    def test_tree_depth(self):
        assert tree_depth(None) == 0
        assert tree_depth(build_merkle_tree(["x"], "sha256")) == 0
        assert tree_depth(build_merkle_tree(ABCD, "sha256")) == 2
        assert tree_depth(build_padded_tree(["1", "2", "3", "4", "5"], make_tree_config())) == 3

    @pytest.mark.parametrize(
        "n,expected",
        [(0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4)],
    )
    def test_compute_tree_depth(self, n, expected):
        assert compute_tree_depth(n) == expected

    def test_iter_leaves_left_to_right(self):
        root = build_merkle_tree(["a", "b", "c"], "sha256")

        assert [leaf.preimage for leaf in iter_leaves(root)] == ["a", "b", "c"]

    def test_iter_leaves_empty(self):
        assert list(iter_leaves(None)) == []
