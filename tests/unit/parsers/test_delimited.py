"""Unit tests for delimiter-based record splitting."""

from __future__ import annotations

import pytest

from gitwrap.errors import UnexpectedResultError
from gitwrap.parsers.delimited import RECORD_SEPARATOR, UNIT_SEPARATOR, RecordFormat

LINES = RecordFormat(command="git example", fields=("%(a)", "%(b)", "%(c)"))
RECORDS = RecordFormat(
    command="git example",
    fields=("%(a)", "%(b)"),
    record_delimiter=RECORD_SEPARATOR,
)


def test_format_string() -> None:
    assert LINES.format_arg == "--format=%(a)\x1f%(b)\x1f%(c)"
    assert RECORDS.format_string == "%(a)\x1f%(b)\x1e"


def test_last_field_keeps_extra_delimiters() -> None:
    assert LINES.parse(f"x{UNIT_SEPARATOR}y{UNIT_SEPARATOR}z{UNIT_SEPARATOR}w\n") == [["x", "y", f"z{UNIT_SEPARATOR}w"]]


def test_records_span_lines_and_skip_blank_chunks() -> None:
    output = f"one{UNIT_SEPARATOR}line 1\nline 2\n{RECORD_SEPARATOR}\ntwo{UNIT_SEPARATOR}\n{RECORD_SEPARATOR}\n"

    assert RECORDS.parse(output) == [["one", "line 1\nline 2\n"], ["two", "\n"]]


def test_mismatch_error_names_delimiter_and_record() -> None:
    with pytest.raises(UnexpectedResultError) as excinfo:
        LINES.parse("only-one\n")

    message = str(excinfo.value)
    assert "Expected 3 fields separated by '\\x1f' (unit separator), got 1" in message
    assert "Record at index 0: 'only-one'" in message
    assert "`git example --format=%(a)<FS>%(b)<FS>%(c)`" in message
