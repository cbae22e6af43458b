#!/usr/bin/env python3
"""CLI for the parentguard parent version rule."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from parentguard.core import (
    ExpressionEvaluationError,
    ParentVersionConfig,
    ParentVersionRule,
    PropertyBuildContext,
    RuleConfigError,
    check_modules,
    load_properties,
    load_rule_config,
    resolve_log_level,
    summarise,
)
from parentguard.core.config import DEFAULT_SCHEMA

logger = logging.getLogger("parentguard.cli")


def _build_config(args: argparse.Namespace) -> ParentVersionConfig:
    config = (
        load_rule_config(Path(args.config)) if args.config else ParentVersionConfig()
    )
    ignore = list(config.ignore) + list(args.ignore or [])
    ignore_missing_parent = config.ignore_missing_parent and not args.no_ignore_missing_parent
    return ParentVersionConfig(
        ignore=tuple(ignore), ignore_missing_parent=ignore_missing_parent
    )


def _module_names(paths: list[Path]) -> list[str]:
    """Name modules by file stem, falling back to the path when stems collide."""
    stems = Counter(path.stem for path in paths)
    return [path.stem if stems[path.stem] == 1 else str(path) for path in paths]


def _load_modules(raw_paths: list[str]) -> dict[str, PropertyBuildContext]:
    paths = [Path(raw) for raw in raw_paths]
    modules: dict[str, PropertyBuildContext] = {}
    for name, path in zip(_module_names(paths), paths):
        logger.debug("loading build properties for %s from %s", name, path)
        modules[name] = PropertyBuildContext(load_properties(path))
    return modules


def _fail(message: str) -> SystemExit:
    print(message, file=sys.stderr)
    return SystemExit(2)


def check(args: argparse.Namespace) -> int:
    """Run the parent version rule against each properties file."""
    try:
        config = _build_config(args)
        modules = _load_modules(args.properties)
    except RuleConfigError as exc:
        raise _fail(f"[parentguard] Invalid rule configuration:\n{exc}") from exc
    except ExpressionEvaluationError as exc:
        raise _fail(f"[parentguard] {exc}") from exc

    results = check_modules(ParentVersionRule(config), modules)
    for result in results:
        print(f"[parentguard] {result.to_summary()}")
    passed, failed = summarise(results)
    print(f"[parentguard] {passed} passed, {failed} failed")
    return 1 if failed else 0


def print_schema() -> int:
    print(DEFAULT_SCHEMA.read_text(encoding="utf-8").rstrip())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Check module versions against their parent"
    )
    check_parser.add_argument(
        "properties",
        nargs="+",
        help="YAML/JSON build properties file, one per module",
    )
    check_parser.add_argument("--config", help="Path to YAML rule configuration")
    check_parser.add_argument(
        "--ignore",
        action="append",
        dest="ignore",
        help="artifactId or groupId:artifactId to skip (repeatable)",
    )
    check_parser.add_argument(
        "--no-ignore-missing-parent",
        action="store_true",
        help="Fail modules that declare no parent",
    )
    check_parser.add_argument(
        "--verbose", action="store_true", help="Emit debug logging"
    )

    subparsers.add_parser("schema", help="Print the rule configuration schema")

    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else resolve_log_level()
    logging.basicConfig(level=level)

    if args.command == "check":
        return check(args)
    if args.command == "schema":
        return print_schema()

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
