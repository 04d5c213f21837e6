"""Error Hierarchy: typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; upstream errors (4xx/5xx) come from the generator
    - to_response() produces the REST envelope consumed by api/error_handlers.py
    - Pagination misses are NOT errors: PagedCollection returns None instead

Design Decisions:
    - Single hierarchy with RegistryError base: FastAPI global handler catches all (ADR: uniform error shape)
    - AmbiguousStateError distinct from UserNotFoundError: duplicate usernames mean corrupted state,
      not a lookup miss
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    username: str | None = None
    requested_count: int | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "username": self.context.username,
                    "requested_count": self.context.requested_count,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(RegistryError):
    """Required identifier missing, or two correlated inputs disagree."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UserNotFoundError(RegistryError):
    """No stored user has the requested username."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.username = username
        super().__init__(
            f"Username '{username}' does not exist.",
            "USERNAME_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.username = username


class UserAlreadyExistsError(RegistryError):
    """Create attempted with a username that is already registered."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.username = username
        super().__init__(
            f"Username '{username}' is already present in the registry.",
            "EXISTING_USERNAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.username = username


# ─── Internal Consistency ───────────────────────────────────────

class AmbiguousStateError(RegistryError):
    """More than one stored user shares a username."""
    def __init__(self, username: str, matches: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.username = username
        ctx.debug_info = {"matches": matches}
        super().__init__(
            f"Username '{username}' seems to be non-unique ({matches} records).",
            "DUPLICATED_USERNAME", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.username = username
        self.matches = matches


# ─── Upstream Errors (random user generator) ────────────────────

class UpstreamUnavailableError(RegistryError):
    """Generator signalled overload (429/5xx) or could not be reached."""
    def __init__(
        self,
        message: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Random user generator unavailable: {message}",
            "TOO_MANY_REQUESTS", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 429,
        )


class UpstreamMalformedError(RegistryError):
    """Generator response could not be parsed into the expected shape."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"The random user generator is not working: {message}",
            "GENERATOR_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
