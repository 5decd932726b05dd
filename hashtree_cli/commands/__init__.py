"""
CLI command modules and shared argument handling.
"""

from __future__ import annotations

import argparse
import sys
from argparse import Namespace
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.schemas.tree import CombineMethod, HashAlgorithm, PadStrategy, TreeConfig


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def add_tree_arguments(parser: argparse.ArgumentParser) -> None:
    """Options that override the configured TreeConfig for one call."""
    parser.add_argument(
        "--algorithm", "-a",
        choices=[a.value for a in HashAlgorithm],
        default=None,
        help="Hash algorithm (default: from config, keccak)",
    )
    parser.add_argument(
        "--pad",
        dest="pad_strategy",
        choices=[p.value for p in PadStrategy],
        default=None,
        help="Padding strategy to the next power of two (default: from config, copy)",
    )
    parser.add_argument(
        "--combine",
        dest="combine_method",
        choices=[c.value for c in CombineMethod],
        default=None,
        help="How sibling digests are merged (default: from config, concat)",
    )
    parser.add_argument(
        "--commutative",
        dest="commutative",
        action="store_true",
        default=None,
        help="Sort sibling digests before concatenation",
    )
    parser.add_argument(
        "--no-commutative",
        dest="commutative",
        action="store_false",
        help="Keep sibling order (default)",
    )


def add_leaf_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "leaves",
        nargs="*",
        help="Leaf preimages in order (any string, including empty)",
    )
    parser.add_argument(
        "--leaves-file", "-f",
        type=Path,
        default=None,
        help="Read leaf preimages from a file, one per line ('-' for stdin)",
    )


def resolve_tree_config(args: Namespace) -> TreeConfig:
    """Configured TreeConfig with any command-line overrides applied."""
    config: RuntimeConfig = getattr(args, "cli_config", None) or RuntimeConfig()
    overrides = {
        key: getattr(args, key)
        for key in ("algorithm", "pad_strategy", "combine_method", "commutative")
        if getattr(args, key, None) is not None
    }
    if not overrides:
        return config.tree
    return config.tree.model_copy(update={k: _coerce(k, v) for k, v in overrides.items()})


def _coerce(key: str, value):
    if key == "algorithm":
        return HashAlgorithm(value)
    if key == "pad_strategy":
        return PadStrategy(value)
    if key == "combine_method":
        return CombineMethod(value)
    return value


def read_leaves(args: Namespace) -> list[str]:
    """Positional leaves followed by leaves from --leaves-file, if given."""
    leaves = list(args.leaves or [])
    source = getattr(args, "leaves_file", None)
    if source is None:
        return leaves
    if str(source) == "-":
        text = sys.stdin.read()
    else:
        text = source.read_text(encoding="utf-8")
    # A trailing newline does not add an extra empty leaf
    leaves.extend(text.splitlines())
    return leaves
