"""Typed records parsed from git output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

InfoT = TypeVar("InfoT")


@dataclass(frozen=True)
class TagInfo:
    """One tag from ``git tag --list``.

    Lightweight tags have no tag object: ``oid`` and all tagger fields are
    ``None`` and ``target_oid`` is the referenced commit.
    """

    name: str
    oid: str | None
    target_oid: str
    objecttype: str
    tagger_name: str | None
    tagger_email: str | None
    tagger_date: str | None
    message: str | None

    @property
    def annotated(self) -> bool:
        return self.oid is not None

    @property
    def lightweight(self) -> bool:
        return self.oid is None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BranchInfo:
    """One branch from ``git branch --list``.

    ``upstream`` is a reference carrying only the upstream refname; it never
    has an oid or an upstream of its own.

    ``remote_name`` comes from the full ref (``refs/remotes/<remote>/...``),
    so a local branch named ``remotes/x/y`` stays local.
    """

    refname: str
    target_oid: str | None
    current: bool
    worktree: bool
    symref: str | None
    upstream: BranchInfo | None
    remote_name: str | None = None

    @property
    def symbolic(self) -> bool:
        return self.symref is not None

    @property
    def remote(self) -> bool:
        return self.remote_name is not None

    @property
    def short_name(self) -> str:
        prefix = f"remotes/{self.remote_name}/"
        if self.remote_name is not None and self.refname.startswith(prefix):
            return self.refname[len(prefix) :]
        return self.refname

    def __str__(self) -> str:
        return self.refname


@dataclass(frozen=True)
class StashInfo:
    """One entry from ``git stash list``."""

    index: int
    name: str
    oid: str
    short_oid: str
    branch: str | None
    message: str
    author_name: str
    author_email: str
    author_date: str
    committer_name: str
    committer_email: str
    committer_date: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FsckObject:
    """An object reported by ``git fsck``."""

    type: str
    oid: str
    name: str | None = None
    message: str | None = None

    def __str__(self) -> str:
        return self.oid


@dataclass(frozen=True)
class FsckResult:
    """Objects reported by ``git fsck``, grouped by finding."""

    dangling: tuple[FsckObject, ...] = ()
    missing: tuple[FsckObject, ...] = ()
    unreachable: tuple[FsckObject, ...] = ()
    warnings: tuple[FsckObject, ...] = ()
    root: tuple[FsckObject, ...] = ()
    tagged: tuple[FsckObject, ...] = ()

    @property
    def any_issues(self) -> bool:
        return bool(self.dangling or self.missing or self.unreachable or self.warnings)

    @property
    def all_objects(self) -> tuple[FsckObject, ...]:
        return self.dangling + self.missing + self.unreachable + self.warnings

    @property
    def count(self) -> int:
        return len(self.all_objects)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            category: [
                {"type": obj.type, "oid": obj.oid, "name": obj.name, "message": obj.message}
                for obj in getattr(self, category)
            ]
            for category in ("dangling", "missing", "unreachable", "warnings", "root", "tagged")
        }


@dataclass(frozen=True)
class BatchFailure:
    """A requested target that the batch operation did not process."""

    name: str
    error_message: str


@dataclass(frozen=True)
class BatchResult(Generic[InfoT]):
    """Outcome of a best-effort operation over several named targets."""

    succeeded: tuple[InfoT, ...]
    failed: tuple[BatchFailure, ...]
    succeeded_names: tuple[str, ...]

    @property
    def success(self) -> bool:
        return not self.failed

    @property
    def failed_names(self) -> tuple[str, ...]:
        return tuple(failure.name for failure in self.failed)
