"""API route handlers."""

from api.routes import algorithms, health, proof, tree, verify

__all__ = ["algorithms", "health", "proof", "tree", "verify"]
