"""
Result types for explicit success/failure tracking.

Network helpers return a Result instead of raising so that callers
rendering partial data can decide what to show without try/except noise.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorSeverity(Enum):
    """Severity levels for processing errors."""

    WARNING = "warning"  # Continue processing, log issue
    ERROR = "error"  # Skip this item, continue others
    CRITICAL = "critical"  # Stop processing entirely


@dataclass
class ProcessingError:
    """
    Represents a single processing error with context.

    Attributes:
        source: Component that generated the error (e.g., "fetch", "verify")
        message: Human-readable error description
        severity: How severe the error is (affects control flow)
        context: Additional context like url, wallet, attempt count
        exception: Original exception if available
    """

    source: str
    message: str
    severity: ErrorSeverity
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source": self.source,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
        }


@dataclass
class Result(Generic[T]):
    """
    Result type that carries success/failure information.

    Attributes:
        success: Whether the operation succeeded
        data: The result data if successful
        errors: List of errors encountered (can have errors even on success for warnings)
        status: HTTP status of the response, 0 when the server was never reached
    """

    success: bool
    data: Optional[T] = None
    errors: List[ProcessingError] = field(default_factory=list)
    status: Optional[int] = None

    @classmethod
    def ok(cls, data: T, status: Optional[int] = None) -> "Result[T]":
        """Create a successful result with data."""
        return cls(success=True, data=data, status=status)

    @classmethod
    def fail(
        cls, error: ProcessingError, status: Optional[int] = None
    ) -> "Result[T]":
        """Create a failed result with an error."""
        return cls(success=False, errors=[error], status=status)

    @classmethod
    def fail_with_message(
        cls,
        source: str,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None,
        status: Optional[int] = None,
    ) -> "Result[T]":
        """Create a failed result with a message (convenience method)."""
        error = ProcessingError(
            source=source,
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        return cls(success=False, errors=[error], status=status)

    @property
    def error(self) -> Optional[str]:
        """Message of the first ERROR/CRITICAL entry, if any."""
        for e in self.errors:
            if e.severity != ErrorSeverity.WARNING:
                return e.message
        return None

    def unwrap(self) -> T:
        """Return data, raising RuntimeError if the result failed."""
        if not self.success:
            raise RuntimeError(self.error or "Result has no data")
        return self.data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "success": self.success,
            "data": self.data,
            "status": self.status,
            "errors": [e.to_dict() for e in self.errors],
        }
