"""Splitting of delimiter-formatted git output into records and fields."""

from __future__ import annotations

from dataclasses import dataclass

from gitwrap.errors import UnexpectedResultError

UNIT_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"

_DELIMITER_NAMES = {
    UNIT_SEPARATOR: "unit separator",
    RECORD_SEPARATOR: "record separator",
    "\n": "newline",
}


def describe_delimiter(delimiter: str) -> str:
    name = _DELIMITER_NAMES.get(delimiter)
    return f"{delimiter!r} ({name})" if name else repr(delimiter)


@dataclass(frozen=True)
class RecordFormat:
    """A ``--format=`` layout and the parser for the output it produces.

    ``fields`` are git format atoms such as ``%(refname)``. Records end with
    ``record_delimiter`` when one is given, otherwise each line is a record.
    """

    command: str
    fields: tuple[str, ...]
    field_delimiter: str = UNIT_SEPARATOR
    record_delimiter: str | None = None

    @property
    def format_string(self) -> str:
        template = self.field_delimiter.join(self.fields)
        if self.record_delimiter:
            template += self.record_delimiter
        return template

    @property
    def format_arg(self) -> str:
        return f"--format={self.format_string}"

    def records(self, output: str) -> list[str]:
        """Return non-empty records from ``output`` in order."""
        if self.record_delimiter:
            chunks = (chunk.lstrip() for chunk in output.split(self.record_delimiter))
        else:
            chunks = (line.rstrip("\r") for line in output.split("\n"))
        return [chunk for chunk in chunks if chunk]

    def split(self, record: str, index: int, output: str) -> list[str]:
        """Split one record into exactly ``len(fields)`` fields.

        Raises:
            UnexpectedResultError: If the field count differs
        """
        expected = len(self.fields)
        values = record.split(self.field_delimiter, expected - 1)
        if len(values) != expected:
            raise UnexpectedResultError(
                self._mismatch_message(expected, len(values), record, index, output),
                expected=expected,
                actual=len(values),
                record=record,
                index=index,
                output=output,
            )
        return values

    def parse(self, output: str) -> list[list[str]]:
        return [self.split(record, index, output) for index, record in enumerate(self.records(output))]

    def _mismatch_message(self, expected: int, actual: int, record: str, index: int, output: str) -> str:
        rendered_format = self.format_arg.replace(UNIT_SEPARATOR, "<FS>").replace(RECORD_SEPARATOR, "<RS>")
        return "\n".join(
            [
                f"Unexpected record in output from `{self.command} {rendered_format}`, at index {index}",
                f"Expected {expected} fields separated by {describe_delimiter(self.field_delimiter)}, "
                f"got {actual}",
                f"Full output: {output!r}",
                f"Record at index {index}: {record!r}",
            ]
        )

