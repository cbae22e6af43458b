"""parentguard core package - rule, build contexts and configuration."""

from .config import config_from_mapping, load_rule_config, resolve_log_level
from .context import BuildContext, PropertyBuildContext, load_properties
from .errors import ExpressionEvaluationError, RuleConfigError, RuleError
from .rule import (
    BuildRule,
    ParentVersionConfig,
    ParentVersionRule,
    matches_ignore_list,
)
from .runner import ModuleResult, check_modules, summarise

__all__ = [
    "BuildContext",
    "BuildRule",
    "ExpressionEvaluationError",
    "ModuleResult",
    "ParentVersionConfig",
    "ParentVersionRule",
    "PropertyBuildContext",
    "RuleConfigError",
    "RuleError",
    "check_modules",
    "config_from_mapping",
    "load_properties",
    "load_rule_config",
    "matches_ignore_list",
    "resolve_log_level",
    "summarise",
]
