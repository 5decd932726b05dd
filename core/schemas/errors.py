"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the hash tree engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Hashing Errors
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    MALFORMED_DIGEST = "MALFORMED_DIGEST"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the API and CLI to report failures without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.UNSUPPORTED_ALGORITHM],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    Every operation is deterministic, so nothing here is retryable:
    repeating a call with the same inputs fails the same way.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(HashTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class SchemaValidationException(HashTreeException):
    """Exception raised when input data does not match the expected shape."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )


class UnsupportedAlgorithmException(HashTreeException):
    """Exception raised when an algorithm identifier is not in the closed set."""

    def __init__(
        self,
        algorithm: str,
        supported: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if supported:
            details["supported"] = supported
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details=details,
        )
        self.algorithm = algorithm


class MalformedDigestException(HashTreeException):
    """Exception raised when a digest string is not valid hexadecimal."""

    def __init__(
        self,
        digest: str,
        reason: str,
    ) -> None:
        # At most 80 characters of the input are echoed back
        shown = digest if len(digest) <= 80 else digest[:80] + "..."
        super().__init__(
            message=f"Malformed digest {shown!r}: {reason}",
            code=ErrorCodes.MALFORMED_DIGEST,
            details={"digest": shown, "reason": reason},
        )
        self.digest = digest


class MerkleVerificationException(HashTreeException):
    """Exception raised when Merkle proof verification fails."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class ConfigurationException(HashTreeException):
    """Exception raised when a configuration source cannot be loaded."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
        )
