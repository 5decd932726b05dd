"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    MalformedDigestException,
    MerkleVerificationException,
    SchemaValidationException,
    UnsupportedAlgorithmException,
)

# Tree configuration
from .tree import (
    CombineMethod,
    HashAlgorithm,
    PadStrategy,
    TreeConfig,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "MalformedDigestException",
    "MerkleVerificationException",
    "SchemaValidationException",
    "UnsupportedAlgorithmException",
    # Tree configuration
    "CombineMethod",
    "HashAlgorithm",
    "PadStrategy",
    "TreeConfig",
]
