"""Core utilities shared across rotacost modules."""

from .errors import InvalidConfigError, InvalidPeriodError, RotacostValueError

__all__ = ["RotacostValueError", "InvalidPeriodError", "InvalidConfigError"]
