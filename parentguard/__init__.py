"""parentguard package root exposing the parent version rule."""

from .core import (  # isort: skip
    BuildContext,
    ParentVersionConfig,
    ParentVersionRule,
    PropertyBuildContext,
    RuleError,
)

__all__ = [
    "BuildContext",
    "ParentVersionConfig",
    "ParentVersionRule",
    "PropertyBuildContext",
    "RuleError",
]
