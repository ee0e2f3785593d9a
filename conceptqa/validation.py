"""
Validation Module
=================

Input validation utilities and decorators for the concept QA engine.

Knowledge objects (rules, relations) and configuration use these helpers
so that malformed input is rejected at construction time with a precise
``ValueError`` rather than surfacing later as a silent scoring anomaly.
"""

from typing import Any, Callable, Optional, TypeVar
from functools import wraps
import inspect


def validate_non_empty_string(value: Any, param_name: str) -> None:
    """
    Validate that a value is a string with at least one non-space character.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)

    Raises:
        ValueError: If value is not a non-empty string
    """
    if not isinstance(value, str):
        raise ValueError(f"{param_name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{param_name} must be a non-empty string")


def validate_positive_int(value: Any, param_name: str) -> None:
    """
    Validate that a value is a positive integer.

    Raises:
        ValueError: If value is not a positive integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{param_name} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{param_name} must be positive, got {value}")


def validate_non_negative_int(value: Any, param_name: str) -> None:
    """
    Validate that a value is a non-negative integer.

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{param_name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{param_name} must be non-negative, got {value}")


def validate_range(value: Any, param_name: str, min_val: Optional[float] = None,
                   max_val: Optional[float] = None, inclusive: bool = True) -> None:
    """
    Validate that a numeric value is within a specified range.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)
        min_val: Minimum allowed value (None for no minimum)
        max_val: Maximum allowed value (None for no maximum)
        inclusive: Whether endpoints are inclusive (default True)

    Raises:
        ValueError: If value is outside the specified range
    """
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValueError(f"{param_name} must be numeric, got {type(value).__name__}")

    if min_val is not None:
        if inclusive and value < min_val:
            raise ValueError(f"{param_name} must be >= {min_val}, got {value}")
        elif not inclusive and value <= min_val:
            raise ValueError(f"{param_name} must be > {min_val}, got {value}")

    if max_val is not None:
        if inclusive and value > max_val:
            raise ValueError(f"{param_name} must be <= {max_val}, got {value}")
        elif not inclusive and value >= max_val:
            raise ValueError(f"{param_name} must be < {max_val}, got {value}")


def validate_unit_interval(value: Any, param_name: str) -> None:
    """Validate that a value lies in the closed interval [0, 1]."""
    validate_range(value, param_name, 0.0, 1.0)


def clamp_unit(value: float) -> float:
    """Clamp a number to [0, 1]."""
    return max(0.0, min(1.0, value))


# Type variable for decorator return type
F = TypeVar('F', bound=Callable[..., Any])


def validate_params(**validators: Callable[[Any], None]) -> Callable[[F], F]:
    """
    Decorator to validate function parameters.

    Args:
        **validators: Mapping of parameter names to validation functions.
                     Each validator should take one argument and raise
                     ValueError if validation fails.

    Returns:
        Decorated function with parameter validation

    Example:
        >>> @validate_params(
        ...     rate=lambda r: validate_unit_interval(r, 'rate'),
        ... )
        ... def set_rate(rate: float):
        ...     return rate
    """
    def decorator(func: F) -> F:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound_args = sig.bind_partial(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name, validator in validators.items():
                if param_name in bound_args.arguments:
                    value = bound_args.arguments[param_name]
                    # Skip None values for optional parameters
                    if value is not None:
                        validator(value)

            return func(*args, **kwargs)
        return wrapper  # type: ignore
    return decorator
