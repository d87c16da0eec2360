"""
Centralized error handling for the dice roller.
"""

import logging
from typing import Any, Callable, TypeVar, Optional
from enum import Enum

T = TypeVar("T")


class RollConfigError(ValueError):
    """Raised when a roll configuration is structurally invalid."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorHandler:
    """Reports handled errors through the logging system by severity."""

    def __init__(self) -> None:
        """Initialize the ErrorHandler with its logger."""
        self.logger = logging.getLogger("diceroller.errors")

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        """Handle an error based on its severity."""
        # Prefix context keys to avoid conflicts with logging system reserved keys
        safe_context = {f"ctx_{key}": value for key, value in (context or {}).items()}

        if severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {message}", extra=safe_context, exc_info=exception)
        elif severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {message}", extra=safe_context)

    def safe_execute(
        self,
        operation: Callable[[], T],
        default: T,
        error_message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[dict] = None,
    ) -> T:
        """
        Execute an operation, returning a fallback value if it raises.

        Args:
            operation (Callable[[], T]): The operation to run.
            default (T): Value returned when the operation fails.
            error_message (str): Message prefix recorded for the failure.
            severity (ErrorSeverity): Severity recorded for the failure.
            context (dict | None): Additional context for logging.

        Returns:
            T: The operation result, or the default on failure.

        """
        try:
            return operation()
        except Exception as e:
            self.handle(
                f"{error_message}: {e!s}",
                severity,
                context,
                e,
            )
            return default


# Global error handler instance
ERROR_HANDLER = ErrorHandler()


# ==============================================================================
# VALIDATION HELPERS
# ==============================================================================


def require_int_at_least(
    value: Any,
    param_name: str,
    minimum: int,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Validates that a value is an integer no smaller than the given minimum.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        minimum: Smallest accepted value (inclusive)
        context: Additional context for the raised error

    Returns:
        int: The validated value

    Raises:
        RollConfigError: If validation fails
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise RollConfigError(
            f"{param_name} must be an integer >= {minimum}, got: {value}",
            {**(context or {}), "param_name": param_name, "value": value},
        )
    return value


def ensure_int_in_range(
    value: Any,
    param_name: str,
    min_val: int,
    max_val: Optional[int] = None,
    default: Optional[int] = None,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Ensures a value is an integer within the specified range, correcting if needed.
    Logs a warning for out-of-range values but continues execution.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive), None for no maximum
        default: Default value if correction is needed, uses min_val if None
        context: Additional context for logging

    Returns:
        int: The corrected integer value
    """
    if default is None:
        default = min_val

    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or value < min_val
        or (max_val is not None and value > max_val)
    ):
        range_desc = (
            f">= {min_val}" if max_val is None else f"between {min_val} and {max_val}"
        )
        ERROR_HANDLER.handle(
            f"{param_name} must be integer {range_desc}, got: {value}, correcting",
            ErrorSeverity.MEDIUM,
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
            },
        )
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        converted = int(value)
        if converted < min_val:
            return min_val
        if max_val is not None and converted > max_val:
            return max_val
        return converted
    return value
