"""Execution configuration loader.

Supports ``.toml`` and ``.yaml``/``.yml`` files describing how git is run:

    binary_path = "/usr/local/bin/git"
    timeout = 30
    global_opts = ["-c", "core.quotepath=false"]

    [env]
    GIT_TERMINAL_PROMPT = "0"
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

BINARY_ENV_VAR = "GITWRAP_GIT_BINARY"


@dataclass(frozen=True)
class ExecutionConfig:
    """How the subprocess execution context invokes git."""

    binary_path: str = "git"
    timeout: float | None = None
    env: Mapping[str, str | None] = field(default_factory=lambda: MappingProxyType({}))
    global_opts: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExecutionConfig:
        """Parse and validate a config mapping into ExecutionConfig."""
        unknown = sorted(set(data) - {"binary_path", "timeout", "env", "global_opts"})
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")

        binary_path = data.get("binary_path", "git")
        if not isinstance(binary_path, str) or not binary_path:
            raise ValueError("binary_path must be a non-empty string")

        timeout = data.get("timeout")
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
            raise ValueError("timeout must be a number")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        env = data.get("env") or {}
        if not isinstance(env, Mapping):
            raise ValueError("env must be a table of variable names to values")
        for key, value in env.items():
            if value is not None and not isinstance(value, str):
                raise ValueError(f"env value for {key} must be a string")

        global_opts = data.get("global_opts") or []
        if not isinstance(global_opts, list) or not all(isinstance(opt, str) for opt in global_opts):
            raise ValueError("global_opts must be a list of strings")

        return cls(
            binary_path=binary_path,
            timeout=float(timeout) if timeout is not None else None,
            env=MappingProxyType(dict(env)),
            global_opts=tuple(global_opts),
        )

    def with_env_overrides(self) -> ExecutionConfig:
        """Return a copy with ``GITWRAP_GIT_BINARY`` applied when it is set."""
        override = os.environ.get(BINARY_ENV_VAR)
        if not override:
            return self
        return ExecutionConfig(
            binary_path=override,
            timeout=self.timeout,
            env=self.env,
            global_opts=self.global_opts,
        )


def load_execution_config(path: Path) -> ExecutionConfig:
    """Load execution configuration from a TOML or YAML file.

    Args:
        path: Path to a ``.toml``, ``.yaml`` or ``.yml`` file

    Returns:
        ExecutionConfig with ``GITWRAP_GIT_BINARY`` applied

    Raises:
        RuntimeError: If the file is missing, malformed or invalid
    """
    if not path.exists():
        raise RuntimeError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".toml":
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise RuntimeError(f"Malformed TOML config at {path}: {e}") from e
    elif suffix in {".yaml", ".yml"}:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RuntimeError(f"Malformed YAML config at {path}: {e}") from e
    else:
        raise RuntimeError(f"Unsupported config format: {path}")

    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid config structure in {path}: expected a mapping")

    try:
        config = ExecutionConfig.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise RuntimeError(f"Invalid config structure in {path}: {e}") from e
    return config.with_env_overrides()
