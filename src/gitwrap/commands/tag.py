"""``git tag`` operations."""

from __future__ import annotations

from typing import Any

from gitwrap.batch import run_batch
from gitwrap.commands.arguments import Arguments
from gitwrap.commands.base import Command
from gitwrap.commands.constraints import Conflicts
from gitwrap.commands.declarations import (
    FlagOption,
    FlagOrValueOption,
    KeyValueOption,
    Literal,
    Operand,
    ValueOption,
)
from gitwrap.errors import GitError
from gitwrap.parsers import tag as tag_parser
from gitwrap.types import BatchResult, TagInfo


class ListTags(Command):
    """``git tag --list`` with a machine-readable format."""

    arguments = Arguments.define(
        Literal("tag"),
        Literal("--list"),
        Literal(tag_parser.LIST_FORMAT.format_arg),
        ValueOption("sort", inline=True, repeatable=True),
        FlagOrValueOption("contains", inline=True),
        FlagOrValueOption("no_contains", inline=True),
        FlagOrValueOption("merged", inline=True),
        FlagOrValueOption("no_merged", inline=True),
        FlagOrValueOption("points_at", inline=True),
        FlagOption(("ignore_case", "i")),
        Operand("patterns", repeatable=True),
    )

    def run(self, *patterns: str, **options: Any) -> list[TagInfo]:
        return tag_parser.parse_list(self.call(*patterns, **options).stdout)


class CreateTag(Command):
    """``git tag`` creating one lightweight or annotated tag."""

    arguments = Arguments.define(
        Literal("tag"),
        FlagOption(("annotate", "a")),
        FlagOption(("sign", "s"), negatable=True),
        ValueOption(("local_user", "u"), inline=True),
        FlagOption(("force", "f")),
        FlagOption("create_reflog"),
        ValueOption(("message", "m"), inline=True),
        ValueOption(("file", "F"), inline=True),
        KeyValueOption("trailer", key_separator=": "),
        ValueOption("cleanup", inline=True),
        Operand("tag_name", required=True),
        Operand("commit"),
        constraints=(
            Conflicts(("annotate", "sign", "local_user")),
            Conflicts(("message", "file")),
        ),
    )

    def run(self, tag_name: str, *args: Any, **options: Any) -> TagInfo:
        """Create the tag and return it as listed by git."""
        self.call(tag_name, *args, **options)
        for info in ListTags(self.context).run(tag_name):
            if info.name == tag_name:
                return info
        raise GitError(f"tag {tag_name!r} was created but is not listed")


class DeleteTags(Command):
    """``git tag --delete`` over several tags.

    Exit status 1 means some of the tags could not be deleted.
    """

    arguments = Arguments.define(
        Literal("tag"),
        Literal("--delete"),
        Operand("tag_names", repeatable=True, required=True),
    )
    allowed_exit_status = range(0, 2)

    def run(self, *tag_names: str) -> BatchResult[TagInfo]:
        self.arguments.build(*tag_names)
        snapshot = {info.name: info for info in ListTags(self.context).run()}
        return run_batch(self, tag_names, snapshot, tag_parser.DELETE_PROTOCOL)
