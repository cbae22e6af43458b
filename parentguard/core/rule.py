"""Parent version consistency rule for multi-module builds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .context import BuildContext
from .errors import ExpressionEvaluationError, RuleError

UNKNOWN_ARTIFACT = "unknown-artifact"
UNKNOWN_PROJECT_VERSION = "unknown-project-version"
UNKNOWN_PARENT_VERSION = "unknown-project-parent-version"
UNKNOWN_PARENT_POM_VERSION = "unknown-parent-version-from-pom"


class BuildRule(ABC):
    """Rule invoked once per artifact by the hosting build."""

    @abstractmethod
    def execute(self, context: BuildContext) -> None:
        """Validate the artifact; raise RuleError on failure."""

    @abstractmethod
    def is_cacheable(self) -> bool: ...

    @abstractmethod
    def is_result_valid(self, rule: "BuildRule") -> bool: ...

    @abstractmethod
    def get_cache_id(self) -> str | None: ...


@dataclass(frozen=True)
class ParentVersionConfig:
    """Configuration for ParentVersionRule.

    ``ignore`` entries are either ``artifactId`` or ``groupId:artifactId``.
    """

    ignore: tuple[str, ...] = ()
    ignore_missing_parent: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.ignore, str):
            raise TypeError("ignore must be a sequence of strings, not a single string")
        if not isinstance(self.ignore_missing_parent, bool):
            raise TypeError(
                "ignore_missing_parent must be a bool, got "
                f"{type(self.ignore_missing_parent).__name__}"
            )
        entries = tuple(self.ignore)
        if not all(isinstance(entry, str) for entry in entries):
            raise TypeError("ignore entries must be strings")
        object.__setattr__(self, "ignore", entries)


def matches_ignore_list(
    entries: Iterable[str], group: str, artifact: str
) -> str | None:
    """Return the first ignore entry matching the artifact, if any."""
    combined = f"{group}:{artifact}"
    for entry in entries:
        if ":" in entry:
            if entry == combined:
                return entry
        elif entry == artifact:
            return entry
    return None


class ParentVersionRule(BuildRule):
    """Verify an artifact's version matches its parent's.

    The effective parent version must equal the artifact's own version and the
    parent version recorded in the artifact's build descriptor. Top-level
    aggregators usually have a parent with an unrelated version; list those in
    ``ignore``.
    """

    def __init__(self, config: ParentVersionConfig | None = None) -> None:
        self.config = config or ParentVersionConfig()

    @property
    def ignore(self) -> list[str]:
        return list(self.config.ignore)

    @ignore.setter
    def ignore(self, entries: Sequence[str]) -> None:
        self.config = replace(self.config, ignore=entries)

    @property
    def ignore_missing_parent(self) -> bool:
        return self.config.ignore_missing_parent

    @ignore_missing_parent.setter
    def ignore_missing_parent(self, value: bool) -> None:
        self.config = replace(self.config, ignore_missing_parent=value)

    def get_ignore(self) -> list[str]:
        return self.ignore

    def set_ignore(self, entries: Sequence[str]) -> None:
        self.ignore = entries

    def is_ignore_missing_parent(self) -> bool:
        return self.ignore_missing_parent

    def set_ignore_missing_parent(self, value: bool) -> None:
        self.ignore_missing_parent = value

    def execute(self, context: BuildContext) -> None:
        config = self.config
        log = context.get_log()

        try:
            if self._check_ignore(context, config):
                log.debug("ignoring this artifact; it matches the ignore list")
                return
        except ExpressionEvaluationError as exc:
            raise RuleError("error while checking the ignore list", exc) from exc

        try:
            project_version = self._get_property(
                context, "project.version", UNKNOWN_PROJECT_VERSION
            )
        except ExpressionEvaluationError as exc:
            raise RuleError("unable to determine the project version", exc) from exc

        # Effective parent version in use for this build.
        try:
            parent_version = self._get_property(
                context, "project.parent.version", UNKNOWN_PARENT_VERSION
            )
        except ExpressionEvaluationError as exc:
            raise RuleError("unable to determine the parent version", exc) from exc
        if config.ignore_missing_parent and parent_version == UNKNOWN_PARENT_VERSION:
            log.debug("ignoring this artifact due to no/missing parent")
            return

        try:
            parent_pom_version = self._get_property(
                context, "project.parentArtifact.version", UNKNOWN_PARENT_POM_VERSION
            )
        except ExpressionEvaluationError as exc:
            raise RuleError(
                "unable to determine the version of the parent specified in the pom",
                exc,
            ) from exc

        if project_version != parent_version:
            raise RuleError(
                "parent and project version mismatch: "
                f"project={project_version}; parent={parent_version}"
            )

        if parent_pom_version != parent_version:
            raise RuleError(
                "actual parent version does not match the one listed in the pom: "
                f"actual parent version={parent_version}; "
                f"version from pom={parent_pom_version}"
            )

    def is_cacheable(self) -> bool:
        return False

    def is_result_valid(self, rule: BuildRule) -> bool:
        return False

    def get_cache_id(self) -> str | None:
        return None

    def _check_ignore(self, context: BuildContext, config: ParentVersionConfig) -> bool:
        log = context.get_log()
        artifact = self._get_property(
            context, "project.artifact.artifactId", UNKNOWN_ARTIFACT
        )
        group = self._get_property(context, "project.artifact.groupId", UNKNOWN_ARTIFACT)
        combined = f"{group}:{artifact}"
        log.debug("checking ignore of <group>:<artifact>=%s", combined)
        for entry in config.ignore:
            log.debug("checking ignore of %s against %s", combined, entry)
            if matches_ignore_list((entry,), group, artifact) is not None:
                return True
        return False

    @staticmethod
    def _get_property(context: BuildContext, name: str, default: str) -> str:
        value = context.evaluate("${" + name + "}")
        if value is None:
            context.get_log().debug(
                "property '%s' not found; using default value '%s'", name, default
            )
            return default
        result = str(value)
        context.get_log().debug("property '%s='%s'", name, result)
        return result
