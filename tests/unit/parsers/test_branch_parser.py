"""Unit tests for git branch output parsing."""

from __future__ import annotations

import pytest

from gitwrap.errors import UnexpectedResultError
from gitwrap.parsers import branch as branch_parser

MAIN_OID = "1" * 40
FEATURE_OID = "2" * 40
FS = "\x1f"


def _line(*fields: str) -> str:
    return FS.join(fields) + "\n"


def test_parse_local_remote_and_symbolic_branches() -> None:
    output = (
        _line("refs/heads/main", MAIN_OID, "*", "/repo", "", "refs/remotes/origin/main")
        + _line("refs/heads/feature/x", FEATURE_OID, " ", "/repo-wt", "", "")
        + _line("refs/remotes/origin/HEAD", MAIN_OID, " ", "", "refs/remotes/origin/main", "")
        + _line("refs/remotes/origin/main", MAIN_OID, " ", "", "", "")
    )

    main, feature, origin_head, origin_main = branch_parser.parse_list(output)

    assert main.refname == "main"
    assert main.current
    assert not main.worktree
    assert main.upstream is not None
    assert main.upstream.refname == "remotes/origin/main"
    assert main.upstream.target_oid is None
    assert main.upstream.upstream is None

    assert feature.refname == "feature/x"
    assert feature.worktree
    assert not feature.remote
    assert feature.short_name == "feature/x"

    assert origin_head.symbolic
    assert origin_head.symref == "refs/remotes/origin/main"

    assert origin_main.refname == "remotes/origin/main"
    assert origin_main.remote_name == "origin"
    assert origin_main.short_name == "main"
    assert origin_main.upstream is None


def test_detached_rebase_and_bisect_entries_are_dropped() -> None:
    output = (
        _line("(HEAD detached at abc1234)", MAIN_OID, "*", "/repo", "", "")
        + _line("(no branch, rebasing main)", MAIN_OID, " ", "", "", "")
        + _line("(no branch, bisect started on main)", MAIN_OID, " ", "", "", "")
        + _line("(no branch)", MAIN_OID, " ", "", "", "")
        + _line("(not a branch)", MAIN_OID, " ", "", "", "")
        + _line("refs/heads/main", MAIN_OID, " ", "", "", "")
    )

    branches = branch_parser.parse_list(output)

    assert [branch.refname for branch in branches] == ["main"]
    assert not branches[0].current


def test_wrong_field_count_raises() -> None:
    output = f"refs/heads/main{FS}{MAIN_OID}{FS}*\n"

    with pytest.raises(UnexpectedResultError) as excinfo:
        branch_parser.parse_list(output)

    assert excinfo.value.expected == 6
    assert excinfo.value.actual == 3
    assert excinfo.value.index == 0


def test_normalize_refname() -> None:
    assert branch_parser.normalize_refname("refs/heads/a/b") == "a/b"
    assert branch_parser.normalize_refname("refs/remotes/origin/a") == "remotes/origin/a"
    assert branch_parser.normalize_refname("main") == "main"


def test_parse_deleted_branches_and_errors() -> None:
    stdout = "Deleted branch topic (was 1a2b3c4).\nDeleted remote-tracking branch origin/old (was 5d6e7f8).\n"
    stderr = (
        "error: branch 'missing' not found\n"
        "error: the branch 'wip' is not fully merged.\n"
        "error: branch 'gone' not found.\n"
    )

    assert branch_parser.parse_deleted_branches(stdout) == ["topic", "origin/old"]
    assert branch_parser.parse_error_messages(stderr) == {
        "missing": "error: branch 'missing' not found",
        "gone": "error: branch 'gone' not found.",
    }


def test_local_branch_under_remotes_directory_stays_local() -> None:
    output = _line("refs/heads/remotes/team/topic", MAIN_OID, " ", "", "", "refs/heads/main")

    (branch,) = branch_parser.parse_list(output)

    assert branch.refname == "remotes/team/topic"
    assert not branch.remote
    assert branch.remote_name is None
    assert branch.short_name == "remotes/team/topic"
    assert branch.upstream is not None
    assert not branch.upstream.remote


def test_remote_name_reads_the_full_ref() -> None:
    assert branch_parser.remote_name("refs/remotes/origin/feature/x") == "origin"
    assert branch_parser.remote_name("refs/heads/remotes/origin/x") is None
    assert branch_parser.remote_name("remotes/origin/x") is None


def test_parsing_is_repeatable() -> None:
    output = (
        _line("refs/heads/main", MAIN_OID, "*", "/repo", "", "refs/remotes/origin/main")
        + _line("refs/remotes/origin/main", MAIN_OID, " ", "", "", "")
    )

    assert branch_parser.parse_list(output) == branch_parser.parse_list(output)
