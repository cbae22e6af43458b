"""Load and validate parentguard rule configuration."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml  # type: ignore[import-not-found]
from jsonschema import Draft202012Validator  # type: ignore[import-not-found]
from jsonschema.exceptions import ValidationError  # type: ignore[import-not-found]

from .errors import RuleConfigError
from .rule import ParentVersionConfig

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SCHEMA = PACKAGE_ROOT / "schemas" / "rule-config.schema.json"
LOG_LEVEL_ENV = "PARENTGUARD_LOG"


def load_schema(schema_path: Path | None = None) -> dict[str, Any]:
    path = schema_path or DEFAULT_SCHEMA
    if not path.exists():
        raise RuleConfigError(f"Rule configuration schema missing at {path}.")
    return json.loads(path.read_text(encoding="utf-8"))


def _iter_error_messages(
    validator: Draft202012Validator, payload: Any
) -> Iterable[str]:
    for error in validator.iter_errors(payload):
        path = ".".join(str(idx) for idx in error.path) or "config"
        if isinstance(error, ValidationError):
            yield f"{path}: {error.message}"
        else:
            yield f"{path}: {error}"


def config_from_mapping(
    data: Mapping[str, Any] | None, schema_path: Path | None = None
) -> ParentVersionConfig:
    """Validate a raw mapping and build a ParentVersionConfig from it."""
    payload = dict(data or {})
    validator = Draft202012Validator(load_schema(schema_path))
    errors = list(_iter_error_messages(validator, payload))
    if errors:
        raise RuleConfigError("\n".join(errors))
    return ParentVersionConfig(
        ignore=tuple(payload.get("ignore", ())),
        ignore_missing_parent=payload.get("ignoreMissingParent", True),
    )


def load_rule_config(
    path: Path, schema_path: Path | None = None
) -> ParentVersionConfig:
    """Read a YAML rule configuration file."""
    if not path.exists():
        raise RuleConfigError(f"Rule configuration file missing at {path}.")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuleConfigError(
            f"Unable to read rule configuration {path}: {exc}", exc
        ) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuleConfigError(f"{path} is not valid YAML: {exc}", exc) from exc
    if data is not None and not isinstance(data, dict):
        raise RuleConfigError(f"{path} must contain a mapping at the top level.")
    return config_from_mapping(data, schema_path)


def resolve_log_level(environ: Mapping[str, str] | None = None) -> int:
    env = os.environ if environ is None else environ
    name = env.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, name, logging.WARNING)
    return level if isinstance(level, int) else logging.WARNING
