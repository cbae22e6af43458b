"""Tests for ignore-list matching in isolation."""

from __future__ import annotations

import pytest

from parentguard.core import matches_ignore_list


@pytest.mark.parametrize(
    ("entries", "group", "artifact", "expected"),
    [
        (["core"], "org.example", "core", "core"),
        (["org.example:core"], "org.example", "core", "org.example:core"),
        (["org.other:core"], "org.example", "core", None),
        (["org.example"], "org.example", "core", None),
        (["Core"], "org.example", "core", None),
        ([":core"], "org.example", "core", None),
        (["core", "org.example:core"], "org.example", "core", "core"),
        ([], "org.example", "core", None),
    ],
)
def test_matches_ignore_list(
    entries: list[str], group: str, artifact: str, expected: str | None
) -> None:
    assert matches_ignore_list(entries, group, artifact) == expected


def test_unknown_defaults_can_be_ignored() -> None:
    assert (
        matches_ignore_list(["unknown-artifact:unknown-artifact"], "unknown-artifact", "unknown-artifact")
        == "unknown-artifact:unknown-artifact"
    )


def test_group_only_qualifier_with_empty_artifact() -> None:
    assert matches_ignore_list(["org.example:"], "org.example", "") == "org.example:"
