"""
Processing of a single claimed contact file.

A processing task stats the file, parses it and writes the output and error
artifacts. Whether the claim is released afterwards depends on the outcome:
a file that produced output stays claimed so the same name is not processed
again, while every other outcome frees the name for a later event.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger

from contact_watchman.ingest.errors import ArtifactWriteError, ParseFailure
from contact_watchman.ingest.parser import parse_contact_file
from contact_watchman.ingest.validator import RecordValidator
from contact_watchman.ingest.writers import write_errors, write_records
from contact_watchman.utils.config import Settings
from contact_watchman.utils.helpers import artifact_name, permission_bits
from contact_watchman.watchers.guard import ClaimSet


class ProcessOutcome(str, Enum):
    """Result of one processing attempt."""
    FAILED = "failed"            # stat or parse failure, or output write failure
    NO_RECORDS = "no_records"    # parsed, but nothing was accepted
    PRODUCED = "produced"        # output artifact written


class FileProcessor:
    """Runs the parse/write pipeline for files claimed by the watcher."""

    def __init__(
        self,
        claims: ClaimSet,
        output_dir: Path,
        error_dir: Path,
        *,
        input_extension: str = ".csv",
        output_extension: str = ".json",
        release_on_success: bool = False,
        delete_processed_input: bool = False,
        validator: Optional[RecordValidator] = None,
    ):
        self.claims = claims
        self.output_dir = output_dir
        self.error_dir = error_dir
        self.input_extension = input_extension
        self.output_extension = output_extension
        self.release_on_success = release_on_success
        self.delete_processed_input = delete_processed_input
        self.validator = validator

    @classmethod
    def from_settings(cls, claims: ClaimSet, settings: Settings) -> "FileProcessor":
        """Build a processor from application settings."""
        return cls(
            claims,
            settings.output_dir,
            settings.error_dir,
            input_extension=settings.input_extension,
            output_extension=settings.output_extension,
            release_on_success=settings.release_on_success,
            delete_processed_input=settings.delete_processed_input,
        )

    def process(self, path: Path, identifier: Optional[str] = None) -> ProcessOutcome:
        """
        Process a claimed file and settle its claim.

        Args:
            path: Input file to convert
            identifier: Claim identifier; defaults to ``str(path)``

        Returns:
            The outcome of this attempt
        """
        identifier = identifier or str(path)
        outcome = ProcessOutcome.FAILED
        input_removed = False

        try:
            outcome = self._run(path)
            if outcome is ProcessOutcome.PRODUCED and self.delete_processed_input:
                input_removed = self._remove_input(path)
        finally:
            if self._should_release(outcome, input_removed):
                self.claims.release(identifier)
            else:
                logger.debug(f"Keeping claim on [ {identifier} ] after successful processing.")

        return outcome

    def _should_release(self, outcome: ProcessOutcome, input_removed: bool) -> bool:
        if outcome is not ProcessOutcome.PRODUCED:
            return True
        return self.release_on_success or input_removed

    def _run(self, path: Path) -> ProcessOutcome:
        try:
            st = path.stat()
        except OSError as e:
            logger.error(f"Failed to get status for file [ {path} ]: {e}")
            return ProcessOutcome.FAILED
        mode = permission_bits(st.st_mode)

        try:
            result = parse_contact_file(path, validator=self.validator)
        except ParseFailure as e:
            logger.error(str(e))
            return ProcessOutcome.FAILED

        logger.info(f"Parsed file [ {path.name} ]: {result.summary()}")
        filename = artifact_name(path, self.input_extension, self.output_extension)

        # only considered processed if at least one record was accepted
        outcome = ProcessOutcome.NO_RECORDS
        if result.records:
            try:
                written = write_records(self.output_dir / filename, result.records, mode)
                logger.info(f"Wrote {len(result.records)} records for [ {path.name} ] to [ {written} ].")
                outcome = ProcessOutcome.PRODUCED
            except ArtifactWriteError as e:
                logger.error(f"Error writing file [ {path.name} ] records: {e}")
                outcome = ProcessOutcome.FAILED

        if result.errors:
            try:
                written = write_errors(self.error_dir / filename, result.errors, mode)
                logger.info(f"Wrote {len(result.errors)} row errors for [ {path.name} ] to [ {written} ].")
            except ArtifactWriteError as e:
                logger.error(f"Error writing file [ {path.name} ] errors: {e}")

        return outcome

    def _remove_input(self, path: Path) -> bool:
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(f"Failed to remove processed input [ {path} ]: {e}")
            return False
        logger.info(f"Removed processed input [ {path} ].")
        return True
