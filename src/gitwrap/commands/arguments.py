"""Argument schemas and the builder that binds caller input to argv."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from gitwrap.commands.constraints import Constraint
from gitwrap.commands.declarations import (
    SEPARATOR,
    Declaration,
    ExecutionOption,
    Literal,
    Operand,
    Option,
    ValueOption,
    emits_flags,
    opens_boundary,
)
from gitwrap.errors import ArgumentValidationError


@dataclass(frozen=True)
class Bound:
    """Arguments bound to one call.

    Iterating yields the argv tokens; indexing by a canonical name or alias
    returns the resolved value.
    """

    argv: tuple[str, ...]
    execution_options: Mapping[str, Any]
    values: Mapping[str, Any]
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), repr=False)

    def __iter__(self) -> Iterator[str]:
        return iter(self.argv)

    def __len__(self) -> int:
        return len(self.argv)

    def __getitem__(self, name: str) -> Any:
        key = self.aliases.get(name, name)
        if key not in self.values:
            raise KeyError(name)
        return self.values[key]


@dataclass(frozen=True)
class Arguments:
    """An immutable, ordered schema of token declarations.

    Build one per command with :meth:`define` and bind it per call with
    :meth:`build`.
    """

    declarations: tuple[Declaration, ...]
    constraints: tuple[Constraint, ...] = ()
    _aliases: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", tuple(self.declarations))
        object.__setattr__(self, "constraints", tuple(self.constraints))
        object.__setattr__(self, "_aliases", MappingProxyType(self._index_names()))
        self._check_definition()

    @classmethod
    def define(cls, *declarations: Declaration, constraints: Sequence[Constraint] = ()) -> Arguments:
        return cls(declarations=tuple(declarations), constraints=tuple(constraints))

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(d for d in self.declarations if isinstance(d, Option))

    @property
    def operands(self) -> tuple[Operand, ...]:
        return tuple(d for d in self.declarations if isinstance(d, Operand))

    @property
    def execution_option_names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self.declarations if isinstance(d, ExecutionOption))

    def _index_names(self) -> dict[str, str]:
        aliases: dict[str, str] = {}

        def claim(name: str, key: str) -> None:
            if name in aliases:
                raise ArgumentValidationError(f"name {name!r} is declared more than once")
            aliases[name] = key

        for declaration in self.declarations:
            if isinstance(declaration, Option):
                for name in declaration.names:
                    claim(name, declaration.key)
            elif isinstance(declaration, (Operand, ExecutionOption)):
                claim(declaration.name, declaration.name)
        return aliases

    def _check_definition(self) -> None:
        repeatable = [op.name for op in self.operands if op.repeatable]
        if len(repeatable) > 1:
            raise ArgumentValidationError(
                f"only one repeatable operand is allowed, got {', '.join(repeatable)}"
            )

        boundary = False
        for declaration in self.declarations:
            if boundary and emits_flags(declaration):
                assert isinstance(declaration, Option)
                raise ArgumentValidationError(
                    f"option {declaration.key!r} cannot be defined after a '--' separator boundary; "
                    "its flags would be treated as operands by git"
                )
            boundary = boundary or opens_boundary(declaration)

        canonical = set(self._aliases.values())
        for constraint in self.constraints:
            unknown = [key for key in constraint.referenced if key not in canonical]
            if unknown:
                raise ArgumentValidationError(
                    f"{type(constraint).__name__} references undeclared names: {', '.join(unknown)}"
                )

    def build(self, *positionals: Any, **options: Any) -> Bound:
        """Validate caller input and return the bound argv.

        Raises:
            ArgumentValidationError: On any misuse; nothing is executed
        """
        values = self._resolve_options(options)
        values.update(self._allocate_operands(positionals))
        for constraint in self.constraints:
            constraint.check(values)

        argv = self._emit(values)
        execution_options = {
            name: values[name] for name in self.execution_option_names if values.get(name) is not None
        }
        resolved = {key: values.get(key) for key in set(self._aliases.values())}
        return Bound(
            argv=tuple(argv),
            execution_options=MappingProxyType(execution_options),
            values=MappingProxyType(resolved),
            aliases=self._aliases,
        )

    def _resolve_options(self, options: Mapping[str, Any]) -> dict[str, Any]:
        operand_names = {op.name for op in self.operands}
        unsupported = sorted(name for name in options if name not in self._aliases or name in operand_names)
        if unsupported:
            raise ArgumentValidationError(f"Unsupported options: {', '.join(unsupported)}")

        seen: dict[str, str] = {}
        values: dict[str, Any] = {}
        for name, value in options.items():
            key = self._aliases[name]
            if key in seen:
                raise ArgumentValidationError(f"Conflicting options: {seen[key]!r} and {name!r}")
            seen[key] = name
            values[key] = value

        required = [option for option in self.options if option.required]
        missing = [option.key for option in required if option.key not in values]
        if missing:
            raise ArgumentValidationError(f"Required options not provided: {', '.join(missing)}")

        not_none = [
            option.key
            for option in self.options
            if option.key in values and values[option.key] is None and (option.required or not option.allow_none)
        ]
        if not_none:
            raise ArgumentValidationError(f"Required options cannot be None: {', '.join(not_none)}")

        for option in self.options:
            option.check_type(values.get(option.key))
        return values

    def _allocate_operands(self, positionals: tuple[Any, ...]) -> dict[str, Any]:
        if len(positionals) == 1 and isinstance(positionals[0], (list, tuple)):
            positionals = tuple(positionals[0])

        operands = self.operands
        split = next((i for i, op in enumerate(operands) if op.repeatable), None)
        before = operands if split is None else operands[:split]
        after = () if split is None else operands[split + 1 :]
        count = len(positionals)
        spare = max(count - sum(op.required for op in (*before, *after)), 0)

        def takes(operand: Operand) -> bool:
            nonlocal spare
            if operand.required:
                return True
            if spare > 0:
                spare -= 1
                return True
            return False

        before_takes = [takes(op) for op in before]
        after_takes = [takes(op) for op in after]

        allocated: dict[str, Any] = {}
        cursor = 0
        for operand, take in zip(before, before_takes):
            value = None
            if take and cursor < count:
                value = positionals[cursor]
                cursor += 1
            allocated[operand.name] = value

        tail_start = max(count - sum(after_takes), cursor)
        tail_cursor = tail_start
        for operand, take in zip(after, after_takes):
            value = None
            if take and tail_cursor < count:
                value = positionals[tail_cursor]
                tail_cursor += 1
            allocated[operand.name] = value

        if split is not None:
            allocated[operands[split].name] = tuple(positionals[cursor:tail_start])
        else:
            surplus = [value for value in positionals[cursor:] if value is not None]
            if surplus:
                rendered = ", ".join(str(value) for value in surplus)
                raise ArgumentValidationError(f"Unexpected positional arguments: {rendered}")

        for operand in operands:
            allocated[operand.name] = self._finish_operand(operand, allocated[operand.name])
        return allocated

    @staticmethod
    def _finish_operand(operand: Operand, value: Any) -> Any:
        if not operand.repeatable:
            if value is None:
                value = operand.default
            if operand.required and value is None:
                raise ArgumentValidationError(f"{operand.name} is required")
            return value

        if all(item is None for item in value):
            value = ()
        elif any(item is None for item in value):
            raise ArgumentValidationError(
                f"None values are not allowed in repeatable operand: {operand.name}"
            )
        if not value and operand.default is not None:
            default = operand.default
            value = tuple(default) if isinstance(default, (list, tuple)) else (default,)
        if operand.required and not value:
            raise ArgumentValidationError(f"at least one value is required for {operand.name}")
        return value

    def _emit(self, values: Mapping[str, Any]) -> list[str]:
        argv = [d.token for d in self.declarations if isinstance(d, Literal) and d.leading]
        past_boundary = False

        for declaration in self.declarations:
            if isinstance(declaration, Literal):
                if not declaration.leading:
                    argv.append(declaration.token)
                past_boundary = past_boundary or declaration.token == SEPARATOR
            elif isinstance(declaration, Operand):
                tokens = self._operand_tokens(declaration, values.get(declaration.name))
                if not tokens:
                    continue
                if declaration.separator:
                    argv.append(declaration.separator)
                    past_boundary = past_boundary or declaration.separator == SEPARATOR
                if not past_boundary:
                    _reject_option_like(declaration.name, tokens)
                argv.extend(tokens)
            elif isinstance(declaration, Option):
                value = values.get(declaration.key)
                if value is None:
                    continue
                tokens = declaration.emit(value)
                if tokens and isinstance(declaration, ValueOption) and declaration.separator == SEPARATOR:
                    past_boundary = True
                argv.extend(tokens)
        return argv

    @staticmethod
    def _operand_tokens(operand: Operand, value: Any) -> list[str]:
        if value is None:
            return []
        if operand.repeatable:
            return [str(item) for item in value]
        return [str(value)]


def _reject_option_like(name: str, tokens: list[str]) -> None:
    offending = [token for token in tokens if token.startswith("-")]
    if not offending:
        return
    if len(offending) == 1:
        raise ArgumentValidationError(
            f"operand {name!r} value {offending[0]!r} looks like a command-line option"
        )
    rendered = ", ".join(repr(token) for token in offending)
    raise ArgumentValidationError(f"operand {name!r} values {rendered} look like command-line options")
