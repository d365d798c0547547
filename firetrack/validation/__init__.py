"""Validation package."""

from firetrack.validation.validator import (
    FireParameterValidator,
    ParameterValidationError,
)

__all__ = ["FireParameterValidator", "ParameterValidationError"]
