"""Parsing of ``git branch`` output."""

from __future__ import annotations

import re

from gitwrap.batch import BatchProtocol
from gitwrap.parsers.delimited import UNIT_SEPARATOR, RecordFormat
from gitwrap.types import BranchInfo

LIST_FORMAT = RecordFormat(
    command="git branch --list",
    fields=("%(refname)", "%(objectname)", "%(HEAD)", "%(worktreepath)", "%(symref)", "%(upstream)"),
    field_delimiter=UNIT_SEPARATOR,
)

DELETE_PROTOCOL = BatchProtocol(
    success_pattern=re.compile(r"^Deleted (?:remote-tracking )?branch (.+?) \(was", re.MULTILINE),
    error_pattern=re.compile(r"^error: branch '([^']+)'(.*)$"),
    default_message="branch '{name}' could not be deleted",
)

_SYNTHETIC_ENTRY = re.compile(r"^\((?:HEAD detached|not a branch\)|no branch[,)])")
_REMOTE_REF = re.compile(r"^refs/remotes/([^/]+)/.")


def normalize_refname(refname: str) -> str:
    """Strip ``refs/heads/`` from local branches and ``refs/`` from the rest."""
    if refname.startswith("refs/heads/"):
        return refname[len("refs/heads/") :]
    if refname.startswith("refs/"):
        return refname[len("refs/") :]
    return refname


def is_synthetic_entry(record: str) -> bool:
    """Detached HEAD, rebase and bisect states are listed but are not branches."""
    return bool(_SYNTHETIC_ENTRY.match(record))


def remote_name(refname: str) -> str | None:
    """Remote of a full ``refs/remotes/<remote>/<branch>`` ref, else ``None``."""
    match = _REMOTE_REF.match(refname)
    return match.group(1) if match else None


def build_branch_info(fields: list[str]) -> BranchInfo:
    refname, objectname, head, worktreepath, symref, upstream = fields
    current = head == "*"
    return BranchInfo(
        refname=normalize_refname(refname),
        target_oid=objectname or None,
        current=current,
        worktree=bool(worktreepath) and not current,
        symref=symref or None,
        upstream=_upstream(upstream),
        remote_name=remote_name(refname),
    )


def _upstream(refname: str) -> BranchInfo | None:
    if not refname:
        return None
    return BranchInfo(
        refname=normalize_refname(refname),
        target_oid=None,
        current=False,
        worktree=False,
        symref=None,
        upstream=None,
        remote_name=remote_name(refname),
    )


def parse_list(stdout: str) -> list[BranchInfo]:
    """Parse ``git branch --list`` output produced with ``LIST_FORMAT``.

    Raises:
        UnexpectedResultError: If a branch line does not have six fields
    """
    records = [record for record in LIST_FORMAT.records(stdout) if not is_synthetic_entry(record)]
    return [build_branch_info(LIST_FORMAT.split(record, index, stdout)) for index, record in enumerate(records)]


def parse_deleted_branches(stdout: str) -> list[str]:
    return DELETE_PROTOCOL.succeeded_names(stdout)


def parse_error_messages(stderr: str) -> dict[str, str]:
    return DELETE_PROTOCOL.error_messages(stderr)
