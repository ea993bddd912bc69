"""Parsing of ``git fsck`` output."""

from __future__ import annotations

import re

from gitwrap.types import FsckObject, FsckResult

OBJECT_PATTERN = re.compile(r"\A(dangling|missing|unreachable) (\w+) ([0-9a-f]{40})(?: \((.+)\))?\Z")
WARNING_PATTERN = re.compile(r"\Awarning in (\w+) ([0-9a-f]{40}): (.+)\Z")
ROOT_PATTERN = re.compile(r"\Aroot ([0-9a-f]{40})\Z")
TAGGED_PATTERN = re.compile(r"\Atagged (\w+) ([0-9a-f]{40}) \((.+)\) in ([0-9a-f]{40})\Z")


def parse_line(line: str) -> tuple[str, FsckObject] | None:
    """Return the category and object for one fsck line, or None."""
    match = OBJECT_PATTERN.match(line)
    if match:
        return match.group(1), FsckObject(type=match.group(2), oid=match.group(3), name=match.group(4))
    match = WARNING_PATTERN.match(line)
    if match:
        return "warnings", FsckObject(type=match.group(1), oid=match.group(2), message=match.group(3))
    match = ROOT_PATTERN.match(line)
    if match:
        return "root", FsckObject(type="commit", oid=match.group(1))
    match = TAGGED_PATTERN.match(line)
    if match:
        return "tagged", FsckObject(type=match.group(1), oid=match.group(2), name=match.group(3))
    return None


def parse(output: str) -> FsckResult:
    """Group the objects reported by fsck; unrecognized lines are ignored."""
    found: dict[str, list[FsckObject]] = {
        "dangling": [],
        "missing": [],
        "unreachable": [],
        "warnings": [],
        "root": [],
        "tagged": [],
    }
    for line in output.splitlines():
        parsed = parse_line(line.strip())
        if parsed is not None:
            category, obj = parsed
            found[category].append(obj)
    return FsckResult(**{category: tuple(objects) for category, objects in found.items()})
