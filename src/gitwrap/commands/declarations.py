"""Token declarations that make up an argument schema.

Each declaration knows how to turn a caller-supplied value into CLI tokens.
Ordering, operand allocation and cross-field validation live in
:mod:`gitwrap.commands.arguments`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from gitwrap.errors import ArgumentValidationError

SEPARATOR = "--"


def derive_flag(key: str) -> str:
    """Return ``-x`` for single-character keys, ``--long-name`` otherwise."""
    if len(key) == 1:
        return f"-{key}"
    return f"--{key.replace('_', '-')}"


def is_short_flag(token: str) -> bool:
    return len(token) == 2 and token.startswith("-") and token != SEPARATOR


def negate_flag(token: str) -> str:
    return f"--no-{token.lstrip('-')}"


def _names(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    names = (value,) if isinstance(value, str) else tuple(value)
    if not names or not all(isinstance(name, str) and name for name in names):
        raise ArgumentValidationError(f"option names must be non-empty strings, got {value!r}")
    return names


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class Literal:
    """A fixed token that is always emitted.

    ``leading=True`` places the literal in the pre-positional group, which is
    emitted before every other token regardless of where it is declared.
    """

    token: str
    leading: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.token, str) or not self.token:
            raise ArgumentValidationError("literal token must be a non-empty string")


@dataclass(frozen=True)
class Option:
    """Common attributes of caller-controlled keyword options."""

    names: tuple[str, ...]
    flag: str | tuple[str, ...] | None = None
    required: bool = False
    allow_none: bool = True
    value_type: type | tuple[type, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", _names(self.names))
        if isinstance(self.flag, list):
            object.__setattr__(self, "flag", tuple(self.flag))
        if isinstance(self.flag, tuple) and not self._accepts_flag_tuple():
            raise ArgumentValidationError(
                f"tuple flag tokens are only supported for plain flag options (option {self.key!r})"
            )

    def _accepts_flag_tuple(self) -> bool:
        return False

    @property
    def key(self) -> str:
        return self.names[0]

    @property
    def token(self) -> str:
        if isinstance(self.flag, str):
            return self.flag
        if isinstance(self.flag, tuple):
            return self.flag[0]
        return derive_flag(self.key)

    def check_type(self, value: Any) -> None:
        if self.value_type is None or value is None or isinstance(value, self.value_type):
            return
        expected = self.value_type if isinstance(self.value_type, tuple) else (self.value_type,)
        names = " or ".join(kind.__name__ for kind in expected)
        raise ArgumentValidationError(
            f"The {self.key!r} option must be {names}, but was {type(value).__name__}"
        )

    def emit(self, value: Any) -> list[str]:
        raise NotImplementedError

    def _with_value(self, value: str, *, inline: bool) -> list[str]:
        token = self.token
        if not inline:
            return [token, value]
        if is_short_flag(token):
            return [f"{token}{value}"]
        return [f"{token}={value}"]


@dataclass(frozen=True)
class FlagOption(Option):
    """Boolean presence option; ``negatable=True`` adds the ``--no-`` form."""

    negatable: bool = False

    def _accepts_flag_tuple(self) -> bool:
        return not self.negatable

    def emit(self, value: Any) -> list[str]:
        if self.negatable:
            if not isinstance(value, bool):
                raise ArgumentValidationError(
                    f"negatable flag {self.key!r} expects a boolean value, got {value!r} ({type(value).__name__})"
                )
            return [self.token] if value else [negate_flag(self.token)]
        if not value:
            return []
        if isinstance(self.flag, tuple):
            return list(self.flag)
        return [self.token]


@dataclass(frozen=True)
class ValueOption(Option):
    """Option that carries a value: ``--opt value`` or ``--opt=value``.

    ``as_operand=True`` emits the bare value(s) as positional tokens, optionally
    preceded by ``separator`` when at least one value is present.
    """

    inline: bool = False
    repeatable: bool = False
    allow_empty: bool = False
    as_operand: bool = False
    separator: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.inline and self.as_operand:
            raise ArgumentValidationError(f"inline and as_operand cannot both be true for {self.key!r}")
        if self.separator is not None and not self.as_operand:
            raise ArgumentValidationError(f"separator is only valid with as_operand=True for {self.key!r}")

    def emit(self, value: Any) -> list[str]:
        if self.repeatable:
            values = list(value) if _is_sequence(value) else [value]
            if any(item is None for item in values):
                raise ArgumentValidationError(f"None values are not allowed in repeatable option {self.key!r}")
            if not self.allow_empty:
                values = [item for item in values if item != ""]
        else:
            if _is_sequence(value):
                raise ArgumentValidationError(
                    f"value option {self.key!r} requires repeatable=True to accept a list"
                )
            if value == "" and not self.allow_empty:
                return []
            values = [value]

        if not values:
            return []
        if self.as_operand:
            tokens = [str(item) for item in values]
            return [self.separator, *tokens] if self.separator else tokens

        tokens: list[str] = []
        for item in values:
            tokens.extend(self._with_value(str(item), inline=self.inline))
        return tokens


@dataclass(frozen=True)
class FlagOrValueOption(Option):
    """Option that is either a bare flag (``True``) or carries a string value."""

    inline: bool = False
    negatable: bool = False
    allow_empty: bool = False

    def emit(self, value: Any) -> list[str]:
        if value is True:
            return [self.token]
        if value is False:
            return [negate_flag(self.token)] if self.negatable else []
        if not isinstance(value, str):
            raise ArgumentValidationError(
                f"Invalid value for flag-or-value option {self.key!r}: {value!r} ({type(value).__name__}); "
                "expected True, False, or a str"
            )
        if value == "" and not self.allow_empty:
            return []
        return self._with_value(value, inline=self.inline)


@dataclass(frozen=True)
class KeyValueOption(Option):
    """Option fed from a mapping or list of pairs, one token per pair.

    ``{"Signed-off-by": "Jane"}`` becomes ``--trailer Signed-off-by=Jane``;
    a ``None`` value emits the key alone and a list value emits one token per
    element.
    """

    key_separator: str = "="
    inline: bool = False

    def emit(self, value: Any) -> list[str]:
        tokens: list[str] = []
        for key, item in self._pairs(value):
            entry = key if item is None else f"{key}{self.key_separator}{item}"
            tokens.extend(self._with_value(entry, inline=self.inline))
        return tokens

    def _pairs(self, value: Any) -> list[tuple[str, Any]]:
        if isinstance(value, Mapping):
            raw = list(value.items())
        elif _is_sequence(value):
            if not value:
                return []
            if all(_is_sequence(pair) for pair in value):
                raw = []
                for pair in value:
                    if len(pair) > 2:
                        raise ArgumentValidationError(
                            f"key-value option {self.key!r} pair {list(pair)!r} has too many elements"
                        )
                    raw.append((pair[0], pair[1] if len(pair) == 2 else None))
            elif len(value) == 2 and not _is_sequence(value[0]):
                raw = [(value[0], value[1])]
            else:
                raise ArgumentValidationError(
                    "key-value list input must be a [key, value] pair or a list of pairs"
                )
        else:
            raise ArgumentValidationError(
                f"key-value option must be a mapping or list, got {type(value).__name__}"
            )

        pairs: list[tuple[str, Any]] = []
        for key, item in raw:
            key = self._check_key(key)
            items = list(item) if _is_sequence(item) else [item]
            for element in items:
                if isinstance(element, (Mapping, list, tuple, set)):
                    raise ArgumentValidationError(
                        f"key-value option {self.key!r} value must be a scalar, got {type(element).__name__}"
                    )
                pairs.append((key, None if element is None else str(element)))
        return pairs

    def _check_key(self, key: Any) -> str:
        if key is None or str(key) == "":
            raise ArgumentValidationError(f"key-value option {self.key!r} requires a non-empty key")
        key = str(key)
        if self.key_separator in key:
            raise ArgumentValidationError(
                f"key-value option {self.key!r} key {key!r} cannot contain the separator {self.key_separator!r}"
            )
        return key


@dataclass(frozen=True)
class CustomOption(Option):
    """Option whose tokens come from a builder callable."""

    builder: Callable[[Any], str | list[str] | None] | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.builder is None:
            raise ArgumentValidationError(f"custom option {self.key!r} requires a builder")

    def emit(self, value: Any) -> list[str]:
        result = self.builder(value)  # type: ignore[misc]
        if result is None:
            return []
        if isinstance(result, str):
            return [result]
        return [str(token) for token in result]


@dataclass(frozen=True)
class Operand:
    """Positional argument.

    A ``repeatable`` operand consumes every positional not claimed by the
    operands around it. ``separator`` is emitted before the operand's values
    only when it has at least one.
    """

    name: str
    required: bool = False
    repeatable: bool = False
    default: Any = None
    separator: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ArgumentValidationError("operand name must be a non-empty string")
        if self.repeatable and isinstance(self.default, list):
            object.__setattr__(self, "default", tuple(self.default))


@dataclass(frozen=True)
class ExecutionOption:
    """Keyword consumed by the execution context; never a CLI token."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ArgumentValidationError("execution option name must be a non-empty string")


Declaration = Union[Literal, Option, Operand, ExecutionOption]


def opens_boundary(declaration: Declaration) -> bool:
    """Return True when tokens declared after ``declaration`` are git operands."""
    if isinstance(declaration, Literal):
        return declaration.token == SEPARATOR
    if isinstance(declaration, Operand):
        return declaration.separator == SEPARATOR
    if isinstance(declaration, ValueOption):
        return declaration.as_operand and declaration.separator == SEPARATOR
    return False


def emits_flags(declaration: Declaration) -> bool:
    """Return True for declarations whose tokens look like options to git."""
    if isinstance(declaration, ValueOption):
        return not declaration.as_operand
    return isinstance(declaration, Option)
