"""Unit tests for cross-field argument constraints."""

from __future__ import annotations

import re

import pytest

from gitwrap.commands.arguments import Arguments
from gitwrap.commands.constraints import (
    AllowedValues,
    Conflicts,
    ForbidValues,
    Requires,
    RequiresExactlyOneOf,
    RequiresOneOf,
    is_supplied,
)
from gitwrap.commands.declarations import FlagOption, Literal, Operand, ValueOption
from gitwrap.errors import ArgumentValidationError


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, False), (False, False), ("", False), ([], False), ({}, False), (True, True), ("x", True), (0, True)],
)
def test_is_supplied(value: object, expected: bool) -> None:
    assert is_supplied(value) is expected


def test_conflicts_names_the_supplied_keys() -> None:
    args = Arguments.define(
        FlagOption("annotate"),
        FlagOption("sign"),
        FlagOption("local_user"),
        constraints=(Conflicts(("annotate", "sign", "local_user")),),
    )

    with pytest.raises(ArgumentValidationError, match="cannot specify annotate and local_user"):
        args.build(annotate=True, local_user=True)
    assert args.build(annotate=True, sign=False).argv == ("--annotate",)


def test_conflicts_ignores_empty_values() -> None:
    args = Arguments.define(
        ValueOption("message"),
        ValueOption("file"),
        constraints=(Conflicts(("message", "file")),),
    )

    assert args.build(message="", file="notes.txt").argv == ("--file", "notes.txt")


def test_conflicts_covers_operands() -> None:
    args = Arguments.define(
        Literal("add"),
        FlagOption("all"),
        Operand("paths", repeatable=True, separator="--"),
        constraints=(Conflicts(("all", "paths")),),
    )

    with pytest.raises(ArgumentValidationError, match="cannot specify all and paths"):
        args.build("a.txt", all=True)
    assert args.build(all=True).argv == ("add", "--all")


def test_requires() -> None:
    args = Arguments.define(
        FlagOption("dry_run"),
        FlagOption("ignore_missing"),
        constraints=(Requires("ignore_missing", ("dry_run",)),),
    )

    with pytest.raises(ArgumentValidationError, match="ignore_missing requires dry_run"):
        args.build(ignore_missing=True)
    assert args.build(ignore_missing=True, dry_run=True).argv == ("--dry-run", "--ignore-missing")
    assert args.build(dry_run=True).argv == ("--dry-run",)


def test_requires_one_of() -> None:
    args = Arguments.define(
        FlagOption("all"),
        Operand("paths", repeatable=True),
        constraints=(RequiresOneOf(("all", "paths")),),
    )

    with pytest.raises(ArgumentValidationError, match="at least one of all, paths must be provided"):
        args.build()
    assert args.build("x").argv == ("x",)


def test_requires_exactly_one_of() -> None:
    args = Arguments.define(
        ValueOption("message"),
        ValueOption("file"),
        constraints=(RequiresExactlyOneOf(("message", "file")),),
    )

    with pytest.raises(ArgumentValidationError, match="exactly one of message, file must be provided"):
        args.build()
    with pytest.raises(ArgumentValidationError, match="cannot specify message and file"):
        args.build(message="m", file="f")
    assert args.build(file="f").argv == ("--file", "f")


def test_forbid_values() -> None:
    args = Arguments.define(
        ValueOption("cleanup"),
        constraints=(ForbidValues("cleanup", ("scissors",)),),
    )

    with pytest.raises(ArgumentValidationError, match=re.escape("value 'scissors' is not allowed for cleanup")):
        args.build(cleanup="scissors")
    assert args.build(cleanup="strip").argv == ("--cleanup", "strip")


def test_allowed_values() -> None:
    args = Arguments.define(
        ValueOption("cleanup", inline=True),
        constraints=(AllowedValues("cleanup", ("verbatim", "whitespace", "strip")),),
    )

    with pytest.raises(ArgumentValidationError, match="expected one of: verbatim, whitespace, strip"):
        args.build(cleanup="bogus")
    assert args.build(cleanup="strip").argv == ("--cleanup=strip",)
    assert args.build().argv == ()
