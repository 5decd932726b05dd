"""
Tree Rendering Unit Tests
Tests for core/merkle/render.py

Tests:
- digest truncation for display
- nested dict export (names, attributes, duplicated children)
- text rendering layout
"""
from core.merkle.merkle_tree import build_merkle_tree, build_padded_tree
from core.merkle.render import render_tree_text, tree_to_dict, truncate_digest
from fixtures.tree_fixtures import ABCD, make_tree_config


class TestTruncateDigest:
    """Tests for truncate_digest()."""

    def test_long_digest_shortened(self):
        assert truncate_digest("0123456789abcdef0123456789") == "01234567...456789"

    def test_short_digest_unchanged(self):
        assert truncate_digest("abcd") == "abcd"

    def test_truncated_length(self):
        digest = "ab" * 32
        assert len(truncate_digest(digest)) == 8 + 3 + 6


class TestTreeToDict:
    """Tests for tree_to_dict()."""

    def test_empty_tree(self):
        assert tree_to_dict(None) is None

    def test_single_leaf_is_named_leaf(self):
        root = build_merkle_tree(["solo"], "sha256")
        data = tree_to_dict(root)

        assert data["name"] == "Leaf"
        assert data["attributes"]["preimage"] == "solo"
        assert "children" not in data

    def test_node_names(self):
        data = tree_to_dict(build_padded_tree(ABCD, make_tree_config()))

        assert data["name"] == "Root"
        assert [c["name"] for c in data["children"]] == ["Node", "Node"]
        leaves = [leaf for node in data["children"] for leaf in node["children"]]
        assert [leaf["name"] for leaf in leaves] == ["Leaf"] * 4
        assert [leaf["attributes"]["preimage"] for leaf in leaves] == ABCD

    def test_full_digest_always_present(self):
        root = build_padded_tree(ABCD, make_tree_config())
        data = tree_to_dict(root)

        assert data["digest"] == root.digest
        assert data["attributes"]["hash"] == truncate_digest(root.digest)

    def test_no_truncation(self):
        root = build_padded_tree(ABCD, make_tree_config())
        data = tree_to_dict(root, truncate=False)

        assert data["attributes"]["hash"] == root.digest

    def test_hidden_attributes(self):
        root = build_padded_tree(ABCD, make_tree_config())
        data = tree_to_dict(root, show_preimage=False, show_hash=False)
        leaf = data["children"][0]["children"][0]

        assert data["attributes"] == {}
        assert leaf["attributes"] == {}

    def test_internal_nodes_have_no_preimage(self):
        data = tree_to_dict(build_padded_tree(ABCD, make_tree_config()))

        assert "preimage" not in data["attributes"]

    def test_duplicated_child_shown_once(self):
        root = build_merkle_tree(["a", "b", "c"], "sha256")
        data = tree_to_dict(root)

        assert len(data["children"][1]["children"]) == 1
        assert data["children"][1]["children"][0]["attributes"]["preimage"] == "c"


class TestRenderTreeText:
    """Tests for render_tree_text()."""

    def test_empty_tree(self):
        assert render_tree_text(None) == "(empty tree)"

    def test_layout_without_hashes(self):
        root = build_padded_tree(ABCD, make_tree_config())
        text = render_tree_text(root, show_hash=False)

        assert text.splitlines() == [
            "Root",
            "├── Node",
            '│   ├── Leaf "a"',
            '│   └── Leaf "b"',
            "└── Node",
            '    ├── Leaf "c"',
            '    └── Leaf "d"',
        ]

    def test_root_line_has_truncated_digest(self):
        root = build_padded_tree(ABCD, make_tree_config())
        first = render_tree_text(root).splitlines()[0]

        assert first == f"Root {truncate_digest(root.digest)}"

    def test_full_digests(self):
        root = build_padded_tree(ABCD, make_tree_config())

        assert root.digest in render_tree_text(root, truncate=False)

    def test_single_leaf(self):
        root = build_merkle_tree(["x"], "sha256")

        assert render_tree_text(root, show_hash=False) == 'Leaf "x"'
