"""
Hashtree CLI

Command-line interface for building hash trees and inclusion proofs.

Usage:
    python -m hashtree_cli build a b c --algorithm sha256
    python -m hashtree_cli prove a b c --index 2 --out proof.json
    python -m hashtree_cli verify proof.json --root <hex>
    python -m hashtree_cli algorithms
"""

__version__ = "0.1.0"
