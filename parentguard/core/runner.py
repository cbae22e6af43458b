"""Run a rule across the modules of a multi-module build."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .context import BuildContext
from .errors import RuleError
from .rule import BuildRule


@dataclass(frozen=True)
class ModuleResult:
    """Outcome of running a rule against one module."""

    module: str
    passed: bool
    message: str | None = None

    def to_summary(self) -> str:
        return f"{self.module}: {'ok' if self.passed else self.message}"


def check_modules(
    rule: BuildRule, modules: Mapping[str, BuildContext]
) -> list[ModuleResult]:
    """Execute ``rule`` once per module, in order, collecting rule failures."""
    results: list[ModuleResult] = []
    for module, context in modules.items():
        try:
            rule.execute(context)
        except RuleError as exc:
            results.append(ModuleResult(module=module, passed=False, message=exc.message))
            continue
        results.append(ModuleResult(module=module, passed=True))
    return results


def summarise(results: list[ModuleResult]) -> tuple[int, int]:
    passed = sum(1 for result in results if result.passed)
    return passed, len(results) - passed
