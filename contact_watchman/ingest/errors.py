"""Exceptions raised while ingesting a contact file."""

from pathlib import Path
from typing import Optional


class IngestError(Exception):
    """Base class for ingestion failures."""


class RuleEvaluationError(IngestError):
    """A validation rule could not be evaluated (e.g. malformed pattern)."""

    def __init__(self, rule: str, detail: str):
        self.rule = rule
        self.detail = detail
        super().__init__(f"{rule}: {detail}")


class ParseFailure(IngestError):
    """The whole file could not be parsed; no partial result is produced."""

    def __init__(self, source: str, detail: str, line: Optional[int] = None):
        self.source = source
        self.detail = detail
        self.line = line
        location = f"{source}:{line}" if line is not None else source
        super().__init__(f"Failed to parse [ {location} ]: {detail}")


class ArtifactWriteError(IngestError):
    """An output or error artifact could not be serialized or written."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to write [ {path} ]: {detail}")
