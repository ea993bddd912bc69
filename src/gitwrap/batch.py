"""Reconciliation of best-effort git operations over several named targets.

Commands such as ``git tag --delete a b c`` process every target they can and
exit non-zero if any failed. Success is read from per-target markers on
stdout, failures from per-target error lines on stderr, and the records of
the succeeded targets come from a snapshot taken before the operation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from gitwrap.errors import FailedError
from gitwrap.types import BatchFailure, BatchResult

if TYPE_CHECKING:
    from gitwrap.commands.base import Command

logger = logging.getLogger(__name__)

InfoT = TypeVar("InfoT")


@dataclass(frozen=True)
class BatchProtocol:
    """How one batch operation reports per-target outcomes.

    ``success_pattern`` and ``error_pattern`` capture the target name in
    group 1. ``partial_failure_status`` is the exit status git uses when some
    targets failed and others succeeded.
    """

    success_pattern: re.Pattern[str]
    error_pattern: re.Pattern[str]
    default_message: str
    partial_failure_status: int = 1

    def succeeded_names(self, stdout: str) -> list[str]:
        return [match.group(1) for match in self.success_pattern.finditer(stdout)]

    def error_messages(self, stderr: str) -> dict[str, str]:
        """Map each target named in an error line to the stripped line."""
        messages: dict[str, str] = {}
        for line in stderr.splitlines():
            match = self.error_pattern.match(line)
            if match:
                messages[match.group(1)] = line.strip()
        return messages


def unique_names(names: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(names))


def reconcile(
    requested: Sequence[str],
    snapshot: Mapping[str, InfoT],
    succeeded_names: Iterable[str],
    error_map: Mapping[str, str],
    default_message: str,
) -> BatchResult[InfoT]:
    """Sort every requested name into succeeded or failed.

    Args:
        requested: Names the caller asked for; duplicates are collapsed
        snapshot: Records captured before the operation, keyed by name
        succeeded_names: Names with a success marker in the output
        error_map: Error line per name parsed from stderr
        default_message: Template with a ``{name}`` field for failures git
            did not explain

    Returns:
        BatchResult with each requested name in exactly one bucket
    """
    names = unique_names(requested)
    marked = set(succeeded_names)

    succeeded = []
    succeeded_order = []
    for name in names:
        if name not in marked:
            continue
        if name not in snapshot:
            logger.warning("%s reported as processed but missing from the snapshot", name)
            continue
        succeeded.append(snapshot[name])
        succeeded_order.append(name)

    done = set(succeeded_order)
    failed = [
        BatchFailure(name=name, error_message=error_map.get(name) or default_message.format(name=name))
        for name in names
        if name not in done
    ]
    return BatchResult(succeeded=tuple(succeeded), failed=tuple(failed), succeeded_names=tuple(succeeded_order))


def run_batch(
    command: Command,
    names: Sequence[str],
    snapshot: Mapping[str, InfoT],
    protocol: BatchProtocol,
    **options: Any,
) -> BatchResult[InfoT]:
    """Run ``command`` once over the unique ``names`` and reconcile the outcome.

    Duplicate names are collapsed before the call; git refuses to update
    one ref twice in a transaction. ``command`` must allow
    ``protocol.partial_failure_status`` as an exit status so that a partial
    failure reaches reconciliation.

    Raises:
        FailedError: If git exits with a status other than 0 or the partial
            failure status
    """
    names = unique_names(names)
    result = command.call(*names, **options)
    if result.exit_status not in (0, protocol.partial_failure_status):
        raise FailedError(result)

    outcome = reconcile(
        names,
        snapshot,
        protocol.succeeded_names(result.stdout),
        protocol.error_messages(result.stderr),
        protocol.default_message,
    )
    if outcome.failed:
        logger.info(
            "%s: %d of %d targets failed",
            type(command).__name__,
            len(outcome.failed),
            len(outcome.failed) + len(outcome.succeeded),
        )
    return outcome
