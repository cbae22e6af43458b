"""Build context abstractions used by parentguard rules."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-not-found]

from .errors import ExpressionEvaluationError

EXPRESSION_PATTERN = re.compile(r"^\$\{([A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*)\}$")
DEFAULT_LOGGER_NAME = "parentguard.build"


class BuildContext(ABC):
    """Read-only view of the build a rule is executed against."""

    @abstractmethod
    def evaluate(self, expression: str) -> Any | None:
        """Resolve a ``${dotted.name}`` expression, returning None when undefined."""

    @abstractmethod
    def get_log(self) -> logging.Logger:
        """Return the logger rules should emit diagnostics to."""

    @property
    def log(self) -> logging.Logger:
        return self.get_log()


class PropertyBuildContext(BuildContext):
    """Build context backed by an in-memory mapping of build properties.

    Names are looked up as flat dotted keys first (``{"project.version": ...}``)
    and then by walking nested mappings (``{"project": {"version": ...}}``).
    """

    def __init__(
        self,
        properties: Mapping[str, Any],
        log: logging.Logger | None = None,
    ) -> None:
        self.properties = properties
        self._log = log or logging.getLogger(DEFAULT_LOGGER_NAME)

    def get_log(self) -> logging.Logger:
        return self._log

    def evaluate(self, expression: str) -> Any | None:
        match = EXPRESSION_PATTERN.match(expression or "")
        if match is None:
            raise ExpressionEvaluationError(
                f"Unsupported property expression: {expression!r}"
            )
        return self.lookup(match.group(1))

    def lookup(self, name: str) -> Any | None:
        if name in self.properties:
            return self.properties[name]
        node: Any = self.properties
        for segment in name.split("."):
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node


def load_properties(path: Path) -> dict[str, Any]:
    """Read a YAML (or JSON) document describing one module's build properties."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExpressionEvaluationError(
            f"Unable to read build properties from {path}: {exc}"
        ) from exc
    try:
        # BaseLoader keeps every scalar a string; 1.10 must not become 1.1.
        data = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise ExpressionEvaluationError(
            f"Build properties in {path} are not valid YAML: {exc}"
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ExpressionEvaluationError(
            f"Build properties in {path} must be a mapping at the top level."
        )
    return data
