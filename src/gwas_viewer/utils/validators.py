"""Input validation utilities."""

import math


class ValidationError(ValueError):
    """Raised when input validation fails."""

    pass


def validate_threshold(value: float | int | str | None, default: float = 7.3) -> float:
    """Validate a -log10(p) significance threshold.

    Args:
        value: Threshold value, or None for the default
        default: Value used when none is given

    Returns:
        Threshold as a float

    Raises:
        ValidationError: If the value is not a finite, non-negative number
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default

    if isinstance(value, bool):
        raise ValidationError(f"Invalid significance threshold: {value!r}")

    try:
        threshold = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid significance threshold: {value!r}") from e

    if not math.isfinite(threshold) or threshold < 0:
        raise ValidationError(
            f"Significance threshold must be a non-negative number, got {value!r}"
        )

    return threshold


def validate_bounds(
    low: float | None,
    high: float | None,
    name: str = "range",
) -> tuple[float | None, float | None]:
    """Validate an inclusive numeric range where either end may be open.

    Raises:
        ValidationError: If a bound is NaN or low exceeds high
    """
    for bound in (low, high):
        if bound is not None and math.isnan(bound):
            raise ValidationError(f"{name} bounds must be numbers, got NaN")

    if low is not None and high is not None and low > high:
        raise ValidationError(f"{name} lower bound {low} is greater than upper bound {high}")

    return low, high
