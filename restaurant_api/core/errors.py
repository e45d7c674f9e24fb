"""Error Hierarchy — typed, categorized exceptions for every restaurant API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors are 400/404; storage errors are 500
    - to_response() produces the `{success: false, message, error?}` envelope
    - Raw detail (StorageError.detail) only appears when include_detail=True

Design Decisions:
    - Single hierarchy with RestaurantApiError base: one FastAPI handler catches all
    - Error kind is the class, constructed where the failure happens — never
      inferred from message text
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class RestaurantApiError(Exception):
    """Base exception for all restaurant API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    @property
    def detail(self) -> str | None:
        """Internal detail shown outside production. None for client errors."""
        return None

    def to_response(self, include_detail: bool = False) -> dict:
        """Convert to the failure envelope."""
        body: dict = {"success": False, "message": self.message}
        if include_detail and self.detail:
            body["error"] = self.detail
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(RestaurantApiError):
    """Bad query parameters, bad path id, or missing body."""
    def __init__(self, message: str, code: str = "INVALID_INPUT"):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )


class InvalidKeyError(InvalidInputError):
    """Restaurant id is not a well-formed key."""
    def __init__(self, restaurant_id: str):
        super().__init__("Invalid restaurant ID format", "INVALID_KEY")
        self.restaurant_id = restaurant_id


class RestaurantValidationError(RestaurantApiError):
    """One or more record fields violate their rules."""
    def __init__(self, violations: list[str]):
        super().__init__(
            f"Validation error: {', '.join(violations)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.violations = violations


class DuplicateError(RestaurantApiError):
    """Record conflicts with an existing one on a unique key."""
    def __init__(self):
        super().__init__(
            "Restaurant with this information already exists",
            "DUPLICATE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 400,
        )


class NotFoundError(RestaurantApiError):
    """Requested restaurant does not exist."""
    def __init__(self, restaurant_id: str):
        super().__init__(
            f"Restaurant with ID {restaurant_id} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
        )
        self.restaurant_id = restaurant_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(RestaurantApiError):
    """Unexpected failure from the persistence layer."""
    def __init__(self, operation: str, detail: str | None = None):
        super().__init__(
            f"Internal server error while {operation}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
        self._detail = detail

    @property
    def detail(self) -> str | None:
        return self._detail
