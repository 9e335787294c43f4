"""
Validation Results

Validation never raises: every check returns a ValidationResult which is
either valid or invalid with a user-visible message.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check"""

    is_valid: bool
    message: str = ""

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls(True)

    @classmethod
    def invalid(cls, message: str) -> 'ValidationResult':
        return cls(False, message)

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        return "valid" if self.is_valid else f"invalid: {self.message}"
