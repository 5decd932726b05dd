"""
Tree Rendering Helpers
Plain-data and text views of a built tree for display collaborators.

This module provides:
- truncate_digest: short display form of a digest
- tree_to_dict: nested {name, digest, attributes, children} structure
- render_tree_text: indented text tree for terminals

A logically duplicated right child (odd level) is shown once, under
its left position.
"""
from __future__ import annotations

from typing import Any

from core.merkle.merkle_tree import MerkleNode


def truncate_digest(digest: str, head: int = 8, tail: int = 6) -> str:
    """
    Shorten a digest for display.

    Example:
        >>> truncate_digest("0123456789abcdef0123456789")
        '01234567...456789'
    """
    if len(digest) <= head + tail + 3:
        return digest
    return f"{digest[:head]}...{digest[-tail:]}"


def _node_name(node: MerkleNode, is_root: bool) -> str:
    if node.is_leaf:
        return "Leaf"
    return "Root" if is_root else "Node"


def _attributes(
    node: MerkleNode,
    show_preimage: bool,
    show_hash: bool,
    truncate: bool,
) -> dict[str, str]:
    attributes: dict[str, str] = {}
    if node.is_leaf and show_preimage:
        attributes["preimage"] = node.preimage or ""
    if show_hash:
        attributes["hash"] = truncate_digest(node.digest) if truncate else node.digest
    return attributes


def tree_to_dict(
    root: MerkleNode | None,
    show_preimage: bool = True,
    show_hash: bool = True,
    truncate: bool = True,
) -> dict[str, Any] | None:
    """
    Convert a tree into nested plain data for a renderer.

    Every entry carries the full digest; the display attributes honor
    the show/truncate flags. A single-leaf tree is named "Leaf".

    Returns:
        Nested dict, or None for an empty tree
    """
    if root is None:
        return None

    def convert(node: MerkleNode, is_root: bool) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": _node_name(node, is_root),
            "digest": node.digest,
            "attributes": _attributes(node, show_preimage, show_hash, truncate),
        }
        if not node.is_leaf:
            entry["children"] = [convert(child, False) for child in node.children()]
        return entry

    return convert(root, True)


def render_tree_text(
    root: MerkleNode | None,
    show_preimage: bool = True,
    show_hash: bool = True,
    truncate: bool = True,
) -> str:
    """
    Render a tree as indented text, root first.

    Example output:
        Root 1b4f0e98...6f2a1c
        ├── Node 62af5c3c...8f3a0e
        │   ├── Leaf "a" ca978112...48bb
        ...
    """
    if root is None:
        return "(empty tree)"

    lines: list[str] = []

    def label(node: MerkleNode, is_root: bool) -> str:
        parts = [_node_name(node, is_root)]
        if node.is_leaf and show_preimage:
            parts.append(f'"{node.preimage}"')
        if show_hash:
            parts.append(truncate_digest(node.digest) if truncate else node.digest)
        return " ".join(parts)

    def walk(node: MerkleNode, prefix: str, is_last: bool, is_root: bool) -> None:
        if is_root:
            lines.append(label(node, True))
            child_prefix = ""
        else:
            connector = "└── " if is_last else "├── "
            lines.append(prefix + connector + label(node, False))
            child_prefix = prefix + ("    " if is_last else "│   ")

        children = node.children()
        for i, child in enumerate(children):
            walk(child, child_prefix, i == len(children) - 1, False)

    walk(root, "", True, True)
    return "\n".join(lines)


__all__ = [
    "truncate_digest",
    "tree_to_dict",
    "render_tree_text",
]
