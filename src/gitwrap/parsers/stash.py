"""Parsing of ``git stash list`` output."""

from __future__ import annotations

import re

from gitwrap.parsers.delimited import UNIT_SEPARATOR, RecordFormat
from gitwrap.types import StashInfo

LIST_FORMAT = RecordFormat(
    command="git stash list",
    fields=("%H", "%h", "%gd", "%gs", "%an", "%ae", "%aI", "%cn", "%ce", "%cI"),
    field_delimiter=UNIT_SEPARATOR,
)

_STASH_INDEX = re.compile(r"stash@\{(\d+)\}")
_BRANCH = re.compile(r"^(?:WIP on|On)\s+([^:]+):")


def stash_index(selector: str) -> int | None:
    match = _STASH_INDEX.search(selector)
    return int(match.group(1)) if match else None


def stash_branch(message: str) -> str | None:
    match = _BRANCH.match(message)
    return match.group(1) if match else None


def parse_list(stdout: str) -> list[StashInfo]:
    """Parse one stash per line.

    The index comes from the ``stash@{n}`` selector and falls back to the
    line position when the selector has none.

    Raises:
        UnexpectedResultError: If a line does not have ten fields
    """
    stashes = []
    for position, fields in enumerate(LIST_FORMAT.parse(stdout)):
        oid, short_oid, selector, message, a_name, a_email, a_date, c_name, c_email, c_date = fields
        index = stash_index(selector)
        stashes.append(
            StashInfo(
                index=position if index is None else index,
                name=selector,
                oid=oid,
                short_oid=short_oid,
                branch=stash_branch(message),
                message=message,
                author_name=a_name,
                author_email=a_email,
                author_date=a_date,
                committer_name=c_name,
                committer_email=c_email,
                committer_date=c_date,
            )
        )
    return stashes
