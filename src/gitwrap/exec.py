"""Execution contexts that run git and capture its result."""

from __future__ import annotations

import logging
import os
import signal as signal_module
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from gitwrap.config import ExecutionConfig
from gitwrap.errors import CommandTimeoutError, FailedError, SignaledError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Result envelope for one git invocation."""

    argv: tuple[str, ...]
    cwd: Path | None
    exit_status: int | None
    stdout: str
    stderr: str
    signal: int | None = None
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.exit_status == 0

    def status_text(self) -> str:
        if self.timed_out:
            return "timed out"
        if self.signal is not None:
            return f"signal {self.signal}"
        return f"exit {self.exit_status}"


class ExecutionContext(Protocol):
    """Runs git for a command and returns the captured result.

    Implementations may raise :class:`~gitwrap.errors.FailedError` when
    ``raise_on_failure`` is true, and :class:`~gitwrap.errors.SignaledError`
    or :class:`~gitwrap.errors.CommandTimeoutError` regardless of it.
    """

    def command(
        self,
        argv: Sequence[str],
        *,
        raise_on_failure: bool = True,
        **options: Any,
    ) -> CommandResult: ...


def _decode(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


def _merge_env(*layers: Mapping[str, str | None]) -> dict[str, str] | None:
    if not any(layers):
        return None
    merged = dict(os.environ)
    for layer in layers:
        for key, value in layer.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
    return merged


class SubprocessContext:
    """Execution context backed by :func:`subprocess.run`.

    Without an explicit ``config`` the defaults are used with
    ``GITWRAP_GIT_BINARY`` applied; an explicit ``config`` is taken as is.
    """

    def __init__(self, repo_root: Path | None = None, config: ExecutionConfig | None = None):
        self.repo_root = repo_root.resolve() if repo_root is not None else None
        self.config = config if config is not None else ExecutionConfig().with_env_overrides()

    def command(
        self,
        argv: Sequence[str],
        *,
        raise_on_failure: bool = True,
        timeout: float | None = None,
        chdir: Path | None = None,
        env: Mapping[str, str | None] | None = None,
    ) -> CommandResult:
        """Run git with ``argv`` and return a structured result."""
        full_argv = (self.config.binary_path, *self.config.global_opts, *(str(arg) for arg in argv))
        cwd = chdir if chdir is not None else self.repo_root
        deadline = timeout if timeout is not None else self.config.timeout
        process_env = _merge_env(self.config.env, env or {})

        try:
            completed = subprocess.run(
                full_argv,
                cwd=cwd,
                env=process_env,
                capture_output=True,
                text=True,
                check=False,
                timeout=deadline,
            )
        except subprocess.TimeoutExpired as exc:
            result = CommandResult(
                argv=full_argv,
                cwd=cwd,
                exit_status=None,
                stdout=_decode(exc.stdout),
                stderr=_decode(exc.stderr),
                signal=int(signal_module.SIGKILL),
                timed_out=True,
            )
            logger.info("%s timed out after %ss", " ".join(full_argv), deadline)
            raise CommandTimeoutError(result, deadline or 0) from exc

        if completed.returncode < 0:
            result = CommandResult(
                argv=full_argv,
                cwd=cwd,
                exit_status=None,
                stdout=completed.stdout,
                stderr=completed.stderr,
                signal=-completed.returncode,
            )
        else:
            result = CommandResult(
                argv=full_argv,
                cwd=cwd,
                exit_status=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
            )

        logger.info("%s exited with status %s", " ".join(full_argv), result.status_text())
        logger.debug("stdout:\n%r\nstderr:\n%r", result.stdout, result.stderr)

        if result.signal is not None:
            raise SignaledError(result)
        if raise_on_failure and result.exit_status != 0:
            raise FailedError(result)
        return result
