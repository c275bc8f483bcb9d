"""Error types for quickgen."""

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class QuickgenError(Exception):
    """Machine-processable error raised by quickgen operations"""

    message: str = ""
    code: str = "GEN-000"
    position: int | None = None  # Buffer offset the error refers to (if any)
    detail: Any = None

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.message} (at offset {self.position})"
        return self.message

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "position": self.position,
            "detail": self.detail,
        }


@dataclass(eq=False)
class UnbalancedExpression(QuickgenError):
    """No matching opener for a closing bracket"""
    code: str = "BAL-001"


@dataclass(eq=False)
class ConfigError(QuickgenError):
    """Project configuration is missing values or malformed"""
    code: str = "CFG-001"


@dataclass(eq=False)
class ArgumentError(QuickgenError):
    """A generate request cannot be turned into a command line"""
    code: str = "ARG-001"


@dataclass(eq=False)
class InputError(QuickgenError):
    """A buffer source cannot be read or decoded"""
    code: str = "INP-001"
