"""
Hashtree CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli build a b c [--algorithm sha256] [--json]
    python -m hashtree_cli prove a b c d --index 2 [--out proof.json]
    python -m hashtree_cli verify proof.json --root <hex> [--algorithm sha256]
    python -m hashtree_cli algorithms
    python -m hashtree_cli config --init

Environment Variables:
    HASHTREE_ALGORITHM          Hash algorithm (keccak, sha256, blake2b, ripemd160)
    HASHTREE_PAD_STRATEGY       Padding strategy (copy, zero)
    HASHTREE_COMBINE_METHOD     Combine method (concat, sum)
    HASHTREE_COMMUTATIVE        Sort sibling digests before concat (default: false)
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.crypto import supported_algorithms
from hashtree_cli import __version__
from hashtree_cli.commands import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    add_leaf_arguments,
    add_tree_arguments,
    build,
    prove,
    verify,
)
from hashtree_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Hashtree CLI - Build Merkle trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./hashtree.json or ~/.config/hashtree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a Merkle tree and print it",
        description="Pad the leaves to a power of two, build the tree and display it.",
    )
    add_leaf_arguments(build_parser)
    add_tree_arguments(build_parser)
    build_parser.add_argument("--json", action="store_true", help="JSON output")
    build_parser.add_argument(
        "--no-preimage", action="store_true", help="Hide leaf preimages in the rendering"
    )
    build_parser.add_argument(
        "--no-hash", action="store_true", help="Hide node digests in the rendering"
    )
    build_parser.add_argument(
        "--full-digests", action="store_true", help="Do not truncate digests"
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one leaf",
        description="Generate the sibling path for the leaf at --index.",
    )
    add_leaf_arguments(prove_parser)
    add_tree_arguments(prove_parser)
    prove_parser.add_argument(
        "--index", "-i", type=int, required=True, help="Zero-based leaf index"
    )
    prove_parser.add_argument("--out", "-o", type=str, help="Write the proof JSON to this file")
    prove_parser.add_argument("--json", action="store_true", help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
        description="Recompute the root from a proof file and compare it to --root.",
    )
    verify_parser.add_argument("proof_path", type=str, help="Proof JSON file ('-' for stdin)")
    verify_parser.add_argument("--root", "-r", type=str, required=True, help="Expected root digest (hex)")
    add_tree_arguments(verify_parser)
    verify_parser.add_argument("--json", action="store_true", help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- algorithms command ---
    algorithms_parser = subparsers.add_parser(
        "algorithms",
        help="List supported hash algorithms",
    )
    algorithms_parser.add_argument("--json", action="store_true", help="JSON output")
    algorithms_parser.set_defaults(func=algorithms_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="hashtree.json",
        help="Path for config file (default: hashtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (HASHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: hashtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def algorithms_cmd(args: argparse.Namespace) -> int:
    """Handle algorithms command."""
    names = supported_algorithms()
    if args.json:
        print(json.dumps({"algorithms": names}))
    else:
        for name in names:
            print(name)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
