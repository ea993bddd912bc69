"""Validated argv building, execution and output parsing for git."""

from gitwrap.config import ExecutionConfig, load_execution_config
from gitwrap.errors import (
    ArgumentValidationError,
    CommandLineError,
    CommandTimeoutError,
    FailedError,
    GitError,
    SignaledError,
    UnexpectedResultError,
)
from gitwrap.exec import CommandResult, ExecutionContext, SubprocessContext
from gitwrap.types import BatchFailure, BatchResult, BranchInfo, FsckObject, FsckResult, StashInfo, TagInfo

__all__ = [
    "ArgumentValidationError",
    "BatchFailure",
    "BatchResult",
    "BranchInfo",
    "CommandLineError",
    "CommandResult",
    "CommandTimeoutError",
    "ExecutionConfig",
    "ExecutionContext",
    "FailedError",
    "FsckObject",
    "FsckResult",
    "GitError",
    "SignaledError",
    "StashInfo",
    "SubprocessContext",
    "TagInfo",
    "UnexpectedResultError",
    "load_execution_config",
]
