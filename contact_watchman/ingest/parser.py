"""
Batch parsing of contact CSV files.

The first record of a file is always treated as a header. Every following
record is validated and lands in exactly one of ``ParseResult.records`` or
``ParseResult.errors``, preserving file order.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO

from loguru import logger

from contact_watchman.ingest.errors import ParseFailure, RuleEvaluationError
from contact_watchman.ingest.validator import RecordValidator, validate_row
from contact_watchman.models.schemas import Contact, RowError


@dataclass(slots=True)
class ParseResult:
    """Partitioned outcome of parsing one file."""

    records: list[Contact] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.records) + len(self.errors)

    def summary(self) -> str:
        return f"total={self.total} loaded={len(self.records)} rejected={len(self.errors)}"


def parse_contact_stream(
    stream: TextIO,
    *,
    source: str = "<stream>",
    validator: Optional[RecordValidator] = None,
) -> ParseResult:
    """
    Parse an open CSV text stream into a ``ParseResult``.

    Args:
        stream: Readable text stream positioned at the header
        source: Name used in log lines and failures
        validator: Row validator; the default rules when omitted

    Returns:
        Accepted contacts and rejected rows, in file order

    Raises:
        ParseFailure: on malformed CSV, inconsistent field counts or a rule
            that cannot be evaluated
    """
    validate = validator.validate if validator is not None else validate_row
    result = ParseResult()
    reader = csv.reader(stream)
    expected_fields: Optional[int] = None

    line = 0
    try:
        for row in reader:
            # blank lines are not records
            if not row:
                continue
            line += 1

            # the first record is always the header
            if line == 1:
                expected_fields = len(row)
                continue

            if len(row) != expected_fields:
                raise ParseFailure(
                    source,
                    f"wrong number of fields: got {len(row)}, expected {expected_fields}",
                    line=line,
                )

            outcome = validate(row, line)
            if isinstance(outcome, Contact):
                result.records.append(outcome)
            else:
                logger.debug(f"Rejected [ {source}:{line} ]: {'; '.join(outcome)}")
                result.errors.append(RowError(line=line, fields=list(row), errors=outcome))

    except csv.Error as e:
        raise ParseFailure(source, f"malformed CSV: {e}", line=reader.line_num) from e
    except RuleEvaluationError as e:
        raise ParseFailure(source, f"rule evaluation failed: {e}", line=line) from e

    return result


def parse_contact_file(path: Path, *, validator: Optional[RecordValidator] = None) -> ParseResult:
    """
    Open ``path`` and parse it as a contact CSV file.

    Invalid UTF-8 sequences are replaced with U+FFFD rather than failing the file.

    Raises:
        ParseFailure: if the file cannot be opened or read, or its contents
            cannot be parsed
    """
    source = str(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace", newline="") as f:
            return parse_contact_stream(f, source=source, validator=validator)
    except OSError as e:
        raise ParseFailure(source, f"error reading input file: {e}") from e
