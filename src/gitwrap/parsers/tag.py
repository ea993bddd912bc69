"""Parsing of ``git tag`` output."""

from __future__ import annotations

import re

from gitwrap.batch import BatchProtocol
from gitwrap.parsers.delimited import RECORD_SEPARATOR, UNIT_SEPARATOR, RecordFormat
from gitwrap.types import TagInfo

LIST_FORMAT = RecordFormat(
    command="git tag --list",
    fields=(
        "%(refname:short)",
        "%(objectname)",
        "%(*objectname)",
        "%(objecttype)",
        "%(taggername)",
        "%(taggeremail)",
        "%(taggerdate:iso8601-strict)",
        "%(contents)",
    ),
    field_delimiter=UNIT_SEPARATOR,
    record_delimiter=RECORD_SEPARATOR,
)

DELETE_PROTOCOL = BatchProtocol(
    success_pattern=re.compile(r"^Deleted tag '([^']+)'", re.MULTILINE),
    error_pattern=re.compile(r"^error: tag '([^']+)'(.*)$"),
    default_message="tag '{name}' could not be deleted",
)


def _optional(value: str) -> str | None:
    return value or None


def _message(objecttype: str, contents: str) -> str | None:
    if contents.endswith("\r\n"):
        contents = contents[:-2]
    elif contents.endswith("\n"):
        contents = contents[:-1]
    if objecttype != "tag" or not contents:
        return None
    return contents


def build_tag_info(fields: list[str]) -> TagInfo:
    """Build a TagInfo from the eight ``LIST_FORMAT`` fields.

    Annotated tags (``objecttype == "tag"``) have their own oid and point at
    the dereferenced object. Lightweight tags have no oid and point at
    ``objectname`` directly.
    """
    name, objectname, dereferenced, objecttype, tagger_name, tagger_email, tagger_date, contents = fields
    if objecttype == "tag":
        oid, target_oid = objectname, dereferenced
    else:
        oid, target_oid = None, objectname
    return TagInfo(
        name=name,
        oid=oid,
        target_oid=target_oid,
        objecttype=objecttype,
        tagger_name=_optional(tagger_name),
        tagger_email=_optional(tagger_email),
        tagger_date=_optional(tagger_date),
        message=_message(objecttype, contents),
    )


def parse_list(stdout: str) -> list[TagInfo]:
    """Parse ``git tag --list`` output produced with ``LIST_FORMAT``.

    Raises:
        UnexpectedResultError: If a record does not have eight fields
    """
    return [build_tag_info(fields) for fields in LIST_FORMAT.parse(stdout)]


def parse_deleted_tags(stdout: str) -> list[str]:
    return DELETE_PROTOCOL.succeeded_names(stdout)


def parse_error_messages(stderr: str) -> dict[str, str]:
    return DELETE_PROTOCOL.error_messages(stderr)
