"""
Core cryptographic utilities.

Provides the digest provider used for leaves and internal nodes.
"""
from .hashing import (
    DIGEST_FUNCTIONS,
    supported_algorithms,
    resolve_algorithm,
    digest,
    hash_text,
    is_hex_digest,
    check_digest,
    decode_digest,
    digest_to_int,
    int_to_bytes,
)

__all__ = [
    "DIGEST_FUNCTIONS",
    "supported_algorithms",
    "resolve_algorithm",
    "digest",
    "hash_text",
    "is_hex_digest",
    "check_digest",
    "decode_digest",
    "digest_to_int",
    "int_to_bytes",
]
