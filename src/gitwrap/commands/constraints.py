"""Cross-field constraints evaluated after arguments are resolved."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gitwrap.errors import ArgumentValidationError


def is_supplied(value: Any) -> bool:
    """A value counts as supplied unless it is None, False or empty."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, list, tuple, dict, set, frozenset)) and not value:
        return False
    return True


def _keys(value: Any) -> tuple[str, ...]:
    return (value,) if isinstance(value, str) else tuple(value)


def _join(keys: tuple[str, ...] | list[str]) -> str:
    return ", ".join(keys)


def _values_of(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else [value]


@dataclass(frozen=True)
class Conflicts:
    """At most one of ``keys`` may be supplied."""

    keys: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _keys(self.keys))

    @property
    def referenced(self) -> tuple[str, ...]:
        return self.keys

    def check(self, values: Mapping[str, Any]) -> None:
        supplied = [key for key in self.keys if is_supplied(values.get(key))]
        if len(supplied) > 1:
            raise ArgumentValidationError(f"cannot specify {' and '.join(supplied)}")


@dataclass(frozen=True)
class Requires:
    """When ``key`` is supplied, every key in ``requires`` must be too."""

    key: str
    requires: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "requires", _keys(self.requires))

    @property
    def referenced(self) -> tuple[str, ...]:
        return (self.key, *self.requires)

    def check(self, values: Mapping[str, Any]) -> None:
        if not is_supplied(values.get(self.key)):
            return
        missing = [key for key in self.requires if not is_supplied(values.get(key))]
        if missing:
            raise ArgumentValidationError(f"{self.key} requires {' and '.join(missing)}")


@dataclass(frozen=True)
class RequiresOneOf:
    """At least one of ``keys`` must be supplied."""

    keys: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _keys(self.keys))

    @property
    def referenced(self) -> tuple[str, ...]:
        return self.keys

    def check(self, values: Mapping[str, Any]) -> None:
        if not any(is_supplied(values.get(key)) for key in self.keys):
            raise ArgumentValidationError(f"at least one of {_join(self.keys)} must be provided")


@dataclass(frozen=True)
class RequiresExactlyOneOf:
    """Exactly one of ``keys`` must be supplied."""

    keys: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _keys(self.keys))

    @property
    def referenced(self) -> tuple[str, ...]:
        return self.keys

    def check(self, values: Mapping[str, Any]) -> None:
        supplied = [key for key in self.keys if is_supplied(values.get(key))]
        if not supplied:
            raise ArgumentValidationError(f"exactly one of {_join(self.keys)} must be provided")
        if len(supplied) > 1:
            raise ArgumentValidationError(
                f"cannot specify {' and '.join(supplied)}; exactly one of {_join(self.keys)} is allowed"
            )


@dataclass(frozen=True)
class ForbidValues:
    """``key`` must not be given any of ``values``."""

    key: str
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def referenced(self) -> tuple[str, ...]:
        return (self.key,)

    def check(self, values: Mapping[str, Any]) -> None:
        value = values.get(self.key)
        if not is_supplied(value):
            return
        for item in _values_of(value):
            if item in self.values:
                raise ArgumentValidationError(f"value {item!r} is not allowed for {self.key}")


@dataclass(frozen=True)
class AllowedValues:
    """``key``, when supplied, must be one of ``values``."""

    key: str
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def referenced(self) -> tuple[str, ...]:
        return (self.key,)

    def check(self, values: Mapping[str, Any]) -> None:
        value = values.get(self.key)
        if not is_supplied(value):
            return
        for item in _values_of(value):
            if item not in self.values:
                expected = _join([str(allowed) for allowed in self.values])
                raise ArgumentValidationError(
                    f"invalid value {item!r} for {self.key}; expected one of: {expected}"
                )


Constraint = Conflicts | Requires | RequiresOneOf | RequiresExactlyOneOf | ForbidValues | AllowedValues
