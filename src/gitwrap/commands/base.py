"""Command execution contract shared by every git operation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from gitwrap.commands.arguments import Arguments
from gitwrap.errors import ArgumentValidationError, FailedError
from gitwrap.exec import CommandResult, ExecutionContext

logger = logging.getLogger(__name__)


def check_exit_status_range(value: Any, owner: str) -> range:
    """Validate an allowed exit status declaration.

    Raises:
        ArgumentValidationError: If ``value`` is not a contiguous, non-empty range
    """
    if not isinstance(value, range):
        raise ArgumentValidationError(
            f"{owner}.allowed_exit_status must be a range, got {type(value).__name__}"
        )
    if value.step != 1:
        raise ArgumentValidationError(f"{owner}.allowed_exit_status must not have a step, got {value!r}")
    if not value:
        raise ArgumentValidationError(f"{owner}.allowed_exit_status must not be empty, got {value!r}")
    return value


class Command:
    """Base class for a git operation.

    Subclasses declare ``arguments`` and, when git signals non-error
    conditions with non-zero exits, ``allowed_exit_status``.
    """

    arguments: ClassVar[Arguments | None] = None
    allowed_exit_status: ClassVar[range] = range(0, 1)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        check_exit_status_range(cls.allowed_exit_status, cls.__name__)

    def __init__(self, context: ExecutionContext):
        self.context = context

    def call(self, *args: Any, **kwargs: Any) -> CommandResult:
        """Build argv, run git once and classify the exit status.

        Raises:
            ArgumentValidationError: If the arguments are invalid or undeclared
            FailedError: If git exits outside ``allowed_exit_status``
        """
        if self.arguments is None:
            raise ArgumentValidationError(f"{type(self).__name__} does not declare arguments")
        bound = self.arguments.build(*args, **kwargs)
        result = self.context.command(bound.argv, raise_on_failure=False, **bound.execution_options)
        self.validate_exit_status(result)
        return result

    def validate_exit_status(self, result: CommandResult) -> None:
        if result.exit_status in self.allowed_exit_status:
            return
        logger.debug(
            "%s exit status %s outside allowed %s",
            type(self).__name__,
            result.exit_status,
            self.allowed_exit_status,
        )
        raise FailedError(result)
