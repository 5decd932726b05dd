"""
Hashing Utilities
Digest provider and hex helpers for the hash tree engine.

This module provides:
- A closed algorithm -> digest function table (keccak, sha256, blake2b, ripemd160)
- Text hashing for leaf preimages (UTF-8, never parsed as numbers)
- Strict hex decoding for digests that may come from outside the engine

Security/Determinism Notes:
- Every call builds a fresh hash object; no state is shared between calls
- Digests are always lower-case hexadecimal
- Raw bytes are hashed exactly as given, nothing is stripped or normalized
"""
from __future__ import annotations

import hashlib
import re
from typing import Callable

from Crypto.Hash import RIPEMD160
from eth_utils import keccak

from core.schemas.errors import MalformedDigestException, UnsupportedAlgorithmException
from core.schemas.tree import HashAlgorithm


_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _keccak256(data: bytes) -> str:
    # Ethereum-style Keccak-256 (pre-NIST padding), not hashlib.sha3_256
    return keccak(data).hex()


def _sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _blake2b(data: bytes) -> str:
    return hashlib.blake2b(data).hexdigest()


def _ripemd160(data: bytes) -> str:
    return RIPEMD160.new(data).hexdigest()


DIGEST_FUNCTIONS: dict[HashAlgorithm, Callable[[bytes], str]] = {
    HashAlgorithm.KECCAK: _keccak256,
    HashAlgorithm.SHA256: _sha256,
    HashAlgorithm.BLAKE2B: _blake2b,
    HashAlgorithm.RIPEMD160: _ripemd160,
}


def supported_algorithms() -> list[str]:
    """Identifiers accepted by digest(), in declaration order."""
    return [alg.value for alg in DIGEST_FUNCTIONS]


def resolve_algorithm(algorithm: HashAlgorithm | str) -> HashAlgorithm:
    """
    Turn an algorithm identifier into a HashAlgorithm member.

    Raises:
        UnsupportedAlgorithmException: If the identifier is not in the closed set
    """
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    try:
        return HashAlgorithm(algorithm)
    except ValueError:
        raise UnsupportedAlgorithmException(
            str(algorithm), supported=supported_algorithms()
        ) from None


def digest(algorithm: HashAlgorithm | str, data: bytes) -> str:
    """
    Hash raw bytes with the named algorithm.

    Args:
        algorithm: One of keccak, sha256, blake2b, ripemd160
        data: Bytes to hash (may be empty)

    Returns:
        Lower-case hex digest

    Raises:
        UnsupportedAlgorithmException: If the algorithm is unknown

    Example:
        >>> digest("sha256", b"")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    return DIGEST_FUNCTIONS[resolve_algorithm(algorithm)](bytes(data))


def hash_text(text: str, algorithm: HashAlgorithm | str) -> str:
    """Hash the UTF-8 bytes of a string."""
    return digest(algorithm, text.encode("utf-8"))


def is_hex_digest(value: str) -> bool:
    """True if value is a non-empty, even-length hex string."""
    return (
        isinstance(value, str)
        and len(value) % 2 == 0
        and _HEX_RE.fullmatch(value) is not None
    )


def check_digest(value: str) -> str:
    """
    Validate a digest string and return it unchanged.

    Raises:
        MalformedDigestException: If the value is empty, has odd length
            or contains non-hex characters
    """
    if not isinstance(value, str):
        raise MalformedDigestException(repr(value), "digest must be a string")
    if not value:
        raise MalformedDigestException(value, "digest is empty")
    if _HEX_RE.fullmatch(value) is None:
        raise MalformedDigestException(value, "contains non-hex characters")
    if len(value) % 2 != 0:
        raise MalformedDigestException(value, "odd number of hex digits")
    return value


def decode_digest(value: str) -> bytes:
    """Decode a validated hex digest to raw bytes."""
    return bytes.fromhex(check_digest(value))


def digest_to_int(value: str) -> int:
    """Interpret a validated hex digest as an unsigned big integer."""
    return int(check_digest(value), 16)


def int_to_bytes(value: int) -> bytes:
    """
    Hex-encode a non-negative integer and decode it to bytes.

    The hex form has no fixed width; a single leading zero is added only
    when the natural encoding has an odd number of digits.

    Example:
        >>> int_to_bytes(0x1ff).hex()
        '01ff'
    """
    if value < 0:
        raise ValueError(f"Expected a non-negative integer, got {value}")
    hex_str = format(value, "x")
    if len(hex_str) % 2:
        hex_str = "0" + hex_str
    return bytes.fromhex(hex_str)


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
