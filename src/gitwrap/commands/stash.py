"""``git stash`` operations."""

from __future__ import annotations

from gitwrap.commands.arguments import Arguments
from gitwrap.commands.base import Command
from gitwrap.commands.declarations import Literal
from gitwrap.parsers import stash as stash_parser
from gitwrap.types import StashInfo


class ListStashes(Command):
    """``git stash list``, newest first."""

    arguments = Arguments.define(
        Literal("stash"),
        Literal("list"),
        Literal(stash_parser.LIST_FORMAT.format_arg),
    )

    def run(self) -> list[StashInfo]:
        return stash_parser.parse_list(self.call().stdout)
