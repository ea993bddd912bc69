"""``git fsck``."""

from __future__ import annotations

from typing import Any

from gitwrap.commands.arguments import Arguments
from gitwrap.commands.base import Command
from gitwrap.commands.declarations import FlagOption, Literal, Operand
from gitwrap.parsers import fsck as fsck_parser
from gitwrap.types import FsckResult


class Fsck(Command):
    """Verify the object database.

    fsck exits non-zero to report findings rather than failure, so statuses
    0 through 7 are accepted.
    """

    arguments = Arguments.define(
        Literal("fsck"),
        Literal("--no-progress"),
        FlagOption("tags"),
        FlagOption("root"),
        FlagOption("unreachable"),
        FlagOption("cache"),
        FlagOption("no_reflogs"),
        FlagOption("full", negatable=True),
        FlagOption("strict"),
        FlagOption("lost_found"),
        FlagOption("dangling", negatable=True),
        FlagOption("connectivity_only"),
        FlagOption("name_objects", negatable=True),
        FlagOption("references", negatable=True),
        Operand("object", repeatable=True),
    )
    allowed_exit_status = range(0, 8)

    def run(self, *objects: str, **options: Any) -> FsckResult:
        """Run fsck and group what it reports.

        Warnings are written to stderr, so both streams are parsed.
        """
        result = self.call(*objects, **options)
        return fsck_parser.parse(f"{result.stdout}\n{result.stderr}")
