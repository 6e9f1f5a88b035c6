"""
Error types raised by the seller report core.

Every error is fatal to a single `analyze` call: nothing is retried and no
partial report is returned.
"""

from typing import Any, Optional


class SalesAnalysisError(Exception):
    """Base class for all seller report errors."""

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class InvalidInputError(SalesAnalysisError):
    """Raised when the dataset is missing, malformed, or has an empty collection."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message=message, code="INVALID_INPUT", details=details)


class MissingPolicyError(SalesAnalysisError):
    """Raised when a revenue or bonus policy is absent or not callable."""

    def __init__(self, policy_name: str):
        super().__init__(
            message=f"Policy '{policy_name}' is missing or not callable",
            code="MISSING_POLICY",
            details={"policy": policy_name},
        )


class DanglingReferenceError(SalesAnalysisError):
    """Raised when a purchase record points at an unknown seller or SKU."""

    def __init__(self, kind: str, key: Any):
        super().__init__(
            message=f"Unknown {kind} referenced: {key!r}",
            code="DANGLING_REFERENCE",
            details={"kind": kind, "key": key},
        )
