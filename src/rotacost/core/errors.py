"""Exceptions raised for invalid report inputs.

Data-quality problems inside a roster never raise; these cover what the user asked for.
"""


class RotacostValueError(ValueError):
    """Raised when rotacost detects invalid user-provided configuration or arguments."""


class InvalidPeriodError(RotacostValueError):
    """A ``YYYY-MM`` period or ``YYYY-MM-DD`` date option that cannot be used."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(reason)
        self.value = value


class InvalidConfigError(RotacostValueError):
    """A report configuration block that fails validation."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


__all__ = ["RotacostValueError", "InvalidPeriodError", "InvalidConfigError"]
