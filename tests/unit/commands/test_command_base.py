"""Unit tests for the command execution contract."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from gitwrap.commands.arguments import Arguments
from gitwrap.commands.base import Command
from gitwrap.commands.declarations import ExecutionOption, FlagOption, Literal, Operand
from gitwrap.errors import ArgumentValidationError, CommandTimeoutError, FailedError, SignaledError
from gitwrap.exec import CommandResult


class _ContextStub:
    def __init__(self, result: CommandResult | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[tuple[str, ...], dict[str, Any]]] = []

    def command(self, argv, *, raise_on_failure: bool = True, **options: Any) -> CommandResult:
        self.calls.append((tuple(argv), {"raise_on_failure": raise_on_failure, **options}))
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


def _result(argv: tuple[str, ...], code: int | None = 0, stdout: str = "", stderr: str = "", **extra: Any) -> CommandResult:
    return CommandResult(
        argv=("git", *argv),
        cwd=Path("/repo"),
        exit_status=code,
        stdout=stdout,
        stderr=stderr,
        **extra,
    )


class _Fsck(Command):
    arguments = Arguments.define(
        Literal("fsck"),
        FlagOption("full", negatable=True),
        Operand("object", repeatable=True),
        ExecutionOption("timeout"),
    )
    allowed_exit_status = range(0, 8)


class _Status(Command):
    arguments = Arguments.define(Literal("status"), FlagOption("short"))


def test_call_invokes_context_once_without_raising_on_failure() -> None:
    stub = _ContextStub(_result(("fsck", "--no-full"), code=3))

    result = _Fsck(stub).call(full=False, timeout=10)

    assert result.exit_status == 3
    assert stub.calls == [(("fsck", "--no-full"), {"raise_on_failure": False, "timeout": 10})]


def test_status_outside_range_raises_failed_error() -> None:
    failing = _result(("fsck",), code=8, stderr="fatal: broken")
    stub = _ContextStub(failing)

    with pytest.raises(FailedError) as excinfo:
        _Fsck(stub).call()

    assert excinfo.value.result is failing
    assert "status: exit 8" in str(excinfo.value)
    assert len(stub.calls) == 1


def test_default_range_accepts_only_zero() -> None:
    assert _Status.allowed_exit_status == range(0, 1)
    _Status(_ContextStub(_result(("status",)))).call()

    with pytest.raises(FailedError):
        _Status(_ContextStub(_result(("status",), code=1))).call()


def test_signal_and_timeout_errors_propagate_unchanged() -> None:
    killed = _result(("status",), code=None, signal=9)
    signaled = SignaledError(killed)
    timed_out = CommandTimeoutError(_result(("status",), code=None, signal=9, timed_out=True), 1.5)

    with pytest.raises(SignaledError) as first:
        _Status(_ContextStub(error=signaled)).call()
    with pytest.raises(CommandTimeoutError) as second:
        _Status(_ContextStub(error=timed_out)).call()

    assert first.value is signaled
    assert second.value is timed_out
    assert "timed out after 1.5s" in str(second.value)


def test_invalid_arguments_never_reach_the_context() -> None:
    stub = _ContextStub(_result(("status",)))

    with pytest.raises(ArgumentValidationError, match="Unsupported options: long"):
        _Status(stub).call(long=True)
    assert stub.calls == []


def test_command_without_arguments_raises() -> None:
    class _Bare(Command):
        pass

    with pytest.raises(ArgumentValidationError, match="does not declare arguments"):
        _Bare(_ContextStub(_result(()))).call()


@pytest.mark.parametrize(
    ("declared", "message"),
    [
        ((0, 1), "must be a range"),
        (range(0, 8, 2), "must not have a step"),
        (range(2, 1), "must not be empty"),
    ],
)
def test_allowed_exit_status_is_validated_at_class_creation(declared: object, message: str) -> None:
    with pytest.raises(ArgumentValidationError, match=message):

        class _Broken(Command):
            allowed_exit_status = declared  # type: ignore[assignment]


def test_widened_range_accepts_status_one() -> None:
    class _Lenient(_Status):
        allowed_exit_status = range(0, 2)

    result = _result(("status",), code=1)

    with pytest.raises(FailedError):
        _Status(_ContextStub(result)).call()
    assert _Lenient(_ContextStub(result)).call() is result


@pytest.mark.parametrize("code", range(0, 8))
def test_fsck_range_accepts_zero_through_seven(code: int) -> None:
    assert _Fsck(_ContextStub(_result(("fsck",), code=code))).call().exit_status == code
