"""
CLI Build Command

Pad the leaves, build the tree and print it.

Usage:
    hashtree build a b c [--algorithm sha256] [--pad zero] [--json]
    hashtree build -f leaves.txt --no-preimage --full-digests
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.merkle import (
    build_padded_tree,
    pad_leaves,
    render_tree_text,
    tree_depth,
    tree_to_dict,
)
from core.schemas.tree import TreeConfig
from hashtree_cli.commands import EXIT_SUCCESS, read_leaves, resolve_tree_config


logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    root: str | None = None
    leaf_count: int = 0
    padded_count: int = 0
    depth: int = 0
    config: dict[str, Any] = field(default_factory=dict)
    tree: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["tree"] is None:
            del d["tree"]
        return d


def build_summary(
    leaves: list[str],
    config: TreeConfig,
    show_preimage: bool = True,
    show_hash: bool = True,
    truncate: bool = True,
    include_tree: bool = True,
) -> tuple[BuildSummary, str]:
    """Build the tree and return (summary, text rendering)."""
    root = build_padded_tree(leaves, config)
    summary = BuildSummary(
        root=root.digest if root is not None else None,
        leaf_count=len(leaves),
        padded_count=len(pad_leaves(leaves, config.pad_strategy)),
        depth=tree_depth(root),
        config=config.model_dump(mode="json"),
    )
    if include_tree:
        summary.tree = tree_to_dict(root, show_preimage, show_hash, truncate)
    text = render_tree_text(root, show_preimage, show_hash, truncate)
    return summary, text


def print_summary_human(summary: BuildSummary, text: str) -> None:
    if summary.root is None:
        print("No leaves: nothing to build")
        return
    print(text)
    print()
    print(f"root: {summary.root}")
    print(f"leaves: {summary.leaf_count} (padded to {summary.padded_count})")
    print(f"depth: {summary.depth}")
    cfg = summary.config
    print(
        f"config: {cfg['algorithm']}, pad={cfg['pad_strategy']}, "
        f"combine={cfg['combine_method']}, commutative={str(cfg['commutative']).lower()}"
    )


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    leaves = read_leaves(args)
    config = resolve_tree_config(args)
    logger.info(f"Building {config.algorithm.value} tree over {len(leaves)} leaves")

    summary, text = build_summary(
        leaves,
        config,
        show_preimage=not args.no_preimage,
        show_hash=not args.no_hash,
        truncate=not args.full_digests,
        include_tree=args.json,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary, text)
    return EXIT_SUCCESS
