"""
Contact ingestion

CSV contact files are turned into:
- Contact records -> output artifact
- RowError entries -> error artifact
"""

from contact_watchman.ingest.errors import (
    ArtifactWriteError,
    IngestError,
    ParseFailure,
    RuleEvaluationError,
)
from contact_watchman.ingest.parser import ParseResult, parse_contact_file, parse_contact_stream
from contact_watchman.ingest.validator import RecordValidator, validate_row

__all__ = [
    "ArtifactWriteError",
    "IngestError",
    "ParseFailure",
    "ParseResult",
    "RecordValidator",
    "RuleEvaluationError",
    "parse_contact_file",
    "parse_contact_stream",
    "validate_row",
]
