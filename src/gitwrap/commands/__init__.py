"""Argument schemas, the command execution contract and git operations."""

from gitwrap.commands.arguments import Arguments, Bound
from gitwrap.commands.base import Command
from gitwrap.commands.branch import DeleteBranches, ListBranches
from gitwrap.commands.constraints import (
    AllowedValues,
    Conflicts,
    ForbidValues,
    Requires,
    RequiresExactlyOneOf,
    RequiresOneOf,
)
from gitwrap.commands.declarations import (
    CustomOption,
    ExecutionOption,
    FlagOption,
    FlagOrValueOption,
    KeyValueOption,
    Literal,
    Operand,
    ValueOption,
)
from gitwrap.commands.fsck import Fsck
from gitwrap.commands.stash import ListStashes
from gitwrap.commands.tag import CreateTag, DeleteTags, ListTags

__all__ = [
    "AllowedValues",
    "Arguments",
    "Bound",
    "Command",
    "Conflicts",
    "CreateTag",
    "CustomOption",
    "DeleteBranches",
    "DeleteTags",
    "ExecutionOption",
    "FlagOption",
    "FlagOrValueOption",
    "ForbidValues",
    "Fsck",
    "KeyValueOption",
    "ListBranches",
    "ListStashes",
    "ListTags",
    "Literal",
    "Operand",
    "Requires",
    "RequiresExactlyOneOf",
    "RequiresOneOf",
    "ValueOption",
]
