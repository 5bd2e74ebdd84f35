"""
Row validation for contact CSV records.

Turns one raw CSV record into either a ``Contact`` or the list of messages
describing every rule it violates. Rules are evaluated independently so a
row may carry several messages; the identifier format and parse rules
overlap and can both fire for the same value.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Sequence

from contact_watchman.ingest.errors import RuleEvaluationError
from contact_watchman.models.schemas import Contact

# expected CSV column order
COL_INTERNAL_ID = 0
COL_FIRST_NAME = 1
COL_MIDDLE_NAME = 2
COL_LAST_NAME = 3
COL_PHONE_NUM = 4
FIELD_COUNT = 5

NAME_MAX_LENGTH = 14

ID_PATTERN = r"[0-9]{8}"
PHONE_PATTERN = r"[0-9]{3}-[0-9]{3}-[0-9]{4}"
INT_SYNTAX = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

MSG_ID_FORMAT = "INTERNAL_ID must be an 8-digit integer."
MSG_ID_PARSE = "Failed to parse INTERNAL_ID: {detail}"
MSG_PHONE_FORMAT = "PHONE_NUM must be in the format ###-###-####."


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _fullmatch(rule: str, pattern: str, value: str) -> bool:
    try:
        compiled = _compile(pattern)
    except re.error as e:
        raise RuleEvaluationError(rule, f"invalid pattern {pattern!r}: {e}") from e
    return compiled.fullmatch(value) is not None


def parse_int64(value: str) -> int:
    """
    Parse a signed base-10 64-bit integer.

    Only an optional sign followed by ASCII digits is accepted; whitespace,
    underscores and non-ASCII digits are syntax errors.

    Raises:
        ValueError: on bad syntax or a value outside the 64-bit range
    """
    if INT_SYNTAX.fullmatch(value) is None:
        raise ValueError(f"parsing {value!r}: invalid syntax")
    parsed = int(value)
    if not INT64_MIN <= parsed <= INT64_MAX:
        raise ValueError(f"parsing {value!r}: value out of range")
    return parsed


def truncate(value: str, limit: int = NAME_MAX_LENGTH) -> str:
    """Cut ``value`` down to at most ``limit`` characters."""
    return value[:limit]


class RecordValidator:
    """
    Validates raw contact rows against the identifier and phone rules.

    Patterns are compiled on first use, so a malformed pattern surfaces as a
    ``RuleEvaluationError`` while validating rather than at construction.
    """

    def __init__(self, id_pattern: str = ID_PATTERN, phone_pattern: str = PHONE_PATTERN):
        self.id_pattern = id_pattern
        self.phone_pattern = phone_pattern

    def validate(self, row: Sequence[str], line: int) -> Contact | list[str]:
        """
        Validate one raw row.

        Args:
            row: Fields in column order (id, first, middle, last, phone)
            line: 1-based record number, used in error context

        Returns:
            A ``Contact`` when every rule passes, otherwise the non-empty list
            of violation messages in rule order

        Raises:
            RuleEvaluationError: if a rule cannot be evaluated for this row
        """
        if len(row) < FIELD_COUNT:
            raise RuleEvaluationError(
                "row", f"line {line} has {len(row)} fields, expected {FIELD_COUNT}"
            )

        errors: list[str] = []
        raw_id = row[COL_INTERNAL_ID]

        if not _fullmatch("INTERNAL_ID", self.id_pattern, raw_id):
            errors.append(MSG_ID_FORMAT)

        parsed_id = None
        try:
            parsed_id = parse_int64(raw_id)
        except ValueError as e:
            errors.append(MSG_ID_PARSE.format(detail=e))

        if not _fullmatch("PHONE_NUM", self.phone_pattern, row[COL_PHONE_NUM]):
            errors.append(MSG_PHONE_FORMAT)

        if errors:
            return errors

        return Contact(
            id=parsed_id,
            first=truncate(row[COL_FIRST_NAME]),
            middle=truncate(row[COL_MIDDLE_NAME]),
            last=truncate(row[COL_LAST_NAME]),
            phone=row[COL_PHONE_NUM],
        )


_default_validator = RecordValidator()


def validate_row(row: Sequence[str], line: int) -> Contact | list[str]:
    """Validate ``row`` with the default identifier and phone rules."""
    return _default_validator.validate(row, line)
