"""Error taxonomy for gitwrap."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitwrap.exec import CommandResult


class GitError(RuntimeError):
    """Base class for errors raised after git has been invoked."""


class ArgumentValidationError(ValueError):
    """Raised for caller misuse detected before any subprocess runs."""


class CommandLineError(GitError):
    """Raised when a git invocation did not complete as expected.

    The full :class:`~gitwrap.exec.CommandResult` is kept on ``result`` so the
    failure can be diagnosed without re-running the command.
    """

    def __init__(self, result: CommandResult):
        self.result = result
        super().__init__(self.error_message())

    def error_message(self) -> str:
        rendered = " ".join(self.result.argv)
        return f"{rendered}, status: {self.result.status_text()}, stderr: {self.result.stderr!r}"


class FailedError(CommandLineError):
    """Raised when git exits with a status outside the allowed range."""


class SignaledError(CommandLineError):
    """Raised when git is terminated by a signal."""


class CommandTimeoutError(SignaledError):
    """Raised when git is killed for exceeding its deadline."""

    def __init__(self, result: CommandResult, timeout: float):
        self.timeout = timeout
        super().__init__(result)

    def error_message(self) -> str:
        return f"{super().error_message()}, timed out after {self.timeout}s"


class UnexpectedResultError(GitError):
    """Raised when git output does not have the expected record structure."""

    def __init__(
        self,
        message: str,
        *,
        expected: int,
        actual: int,
        record: str,
        index: int,
        output: str,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.record = record
        self.index = index
        self.output = output
