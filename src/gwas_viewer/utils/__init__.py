"""Shared utilities."""

from .validators import ValidationError, validate_bounds, validate_threshold

__all__ = ["ValidationError", "validate_bounds", "validate_threshold"]
