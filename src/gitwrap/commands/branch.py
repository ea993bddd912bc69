"""``git branch`` operations."""

from __future__ import annotations

from typing import Any

from gitwrap.batch import run_batch
from gitwrap.commands.arguments import Arguments
from gitwrap.commands.base import Command
from gitwrap.commands.declarations import FlagOption, FlagOrValueOption, Literal, Operand, ValueOption
from gitwrap.parsers import branch as branch_parser
from gitwrap.types import BatchResult, BranchInfo


class ListBranches(Command):
    """``git branch --list`` with a machine-readable format."""

    arguments = Arguments.define(
        Literal("branch"),
        Literal("--list"),
        Literal(branch_parser.LIST_FORMAT.format_arg),
        FlagOption(("all", "a")),
        FlagOption(("remotes", "r")),
        ValueOption("sort", inline=True, repeatable=True),
        FlagOrValueOption("contains", inline=True),
        FlagOrValueOption("no_contains", inline=True),
        FlagOrValueOption("merged", inline=True),
        FlagOrValueOption("no_merged", inline=True),
        FlagOrValueOption("points_at", inline=True),
        FlagOption(("ignore_case", "i")),
        Operand("patterns", repeatable=True),
    )

    def run(self, *patterns: str, **options: Any) -> list[BranchInfo]:
        return branch_parser.parse_list(self.call(*patterns, **options).stdout)


def deletion_name(branch: BranchInfo) -> str:
    """Name git prints when deleting ``branch`` (``origin/x`` for remotes)."""
    if branch.remote:
        return f"{branch.remote_name}/{branch.short_name}"
    return branch.refname


class DeleteBranches(Command):
    """``git branch --delete`` over several branches.

    Exit status 1 means some of the branches could not be deleted.
    """

    arguments = Arguments.define(
        Literal("branch"),
        Literal("--delete"),
        FlagOption(("force", "f")),
        FlagOption(("remotes", "r")),
        Operand("branch_names", repeatable=True, required=True),
    )
    allowed_exit_status = range(0, 2)

    def run(self, *branch_names: str, force: bool = False, remotes: bool = False) -> BatchResult[BranchInfo]:
        self.arguments.build(*branch_names, force=force, remotes=remotes)
        listed = ListBranches(self.context).run(remotes=remotes)
        snapshot = {deletion_name(branch): branch for branch in listed}
        return run_batch(
            self,
            branch_names,
            snapshot,
            branch_parser.DELETE_PROTOCOL,
            force=force,
            remotes=remotes,
        )
