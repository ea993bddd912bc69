"""Unit tests for git stash list parsing."""

from __future__ import annotations

import pytest

from gitwrap.errors import UnexpectedResultError
from gitwrap.parsers import stash as stash_parser

FS = "\x1f"
OID = "d" * 40


def _line(selector: str, message: str) -> str:
    return FS.join(
        [
            OID,
            "ddddddd",
            selector,
            message,
            "Jane",
            "jane@example.com",
            "2024-01-01T00:00:00+00:00",
            "Sam",
            "sam@example.com",
            "2024-01-02T00:00:00+00:00",
        ]
    ) + "\n"


def test_parse_list() -> None:
    output = _line("stash@{0}", "WIP on main: abc1234 fix") + _line("stash@{1}", "On feature/x: saved work")

    first, second = stash_parser.parse_list(output)

    assert first.index == 0
    assert first.name == "stash@{0}"
    assert first.branch == "main"
    assert first.message == "WIP on main: abc1234 fix"
    assert first.author_email == "jane@example.com"
    assert first.committer_name == "Sam"
    assert second.index == 1
    assert second.branch == "feature/x"


def test_index_falls_back_to_position_and_branch_may_be_missing() -> None:
    output = _line("", "custom message") + _line("", "another")

    stashes = stash_parser.parse_list(output)

    assert [stash.index for stash in stashes] == [0, 1]
    assert stashes[0].branch is None


def test_message_with_delimiter_count_mismatch_raises() -> None:
    with pytest.raises(UnexpectedResultError, match="Expected 10 fields"):
        stash_parser.parse_list(f"{OID}{FS}short\n")


def test_empty_output() -> None:
    assert stash_parser.parse_list("") == []


def test_parsing_is_repeatable() -> None:
    output = _line("stash@{0}", "WIP on main: abc1234 fix") + _line("stash@{1}", "On feature/x: saved work")

    assert stash_parser.parse_list(output) == stash_parser.parse_list(output)
