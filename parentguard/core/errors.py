"""Exceptions raised by parentguard rules and build contexts."""

from __future__ import annotations


class ExpressionEvaluationError(RuntimeError):
    """Raised when a build context cannot evaluate a property expression."""


class RuleError(RuntimeError):
    """Raised when a build rule fails; carries the underlying cause if any."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class RuleConfigError(RuleError):
    """Raised when a rule configuration file is missing or invalid."""
