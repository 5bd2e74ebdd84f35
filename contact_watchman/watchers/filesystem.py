"""
File system watcher for contact CSV ingestion.

Monitors the input directory for new or rewritten CSV files and hands each
one to a processing task. Uses the watchdog library for cross-platform file
system event monitoring; processing runs on a thread pool so slow files never
block event delivery.
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from contact_watchman.ingest.processor import FileProcessor
from contact_watchman.utils.config import Settings
from contact_watchman.utils.helpers import has_extension, normalise_path
from contact_watchman.watchers.guard import ClaimSet

SubmitTask = Callable[[Path, str], None]


class ContactEventHandler(FileSystemEventHandler):
    """Filters watchdog events down to claimable input files."""

    def __init__(self, claims: ClaimSet, submit_task: SubmitTask, extension: str = ".csv"):
        """
        Initialize event handler.

        Args:
            claims: Claim set shared with the processing tasks
            submit_task: Called with ``(path, identifier)`` once a file is claimed
            extension: Suffix a file name must end with to be considered
        """
        super().__init__()
        self.claims = claims
        self.submit_task = submit_task
        self.extension = extension

    def on_created(self, event: FileSystemEvent) -> None:
        """Handle file creation."""
        self._handle(event, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        """Handle file writes."""
        self._handle(event, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle a file renamed into place."""
        dest = getattr(event, "dest_path", None)
        if dest:
            self._handle(event, dest)

    def _handle(self, event: FileSystemEvent, raw_path) -> None:
        logger.debug(f"Received event: {event}")

        if event.is_directory:
            return

        path_str = os.fsdecode(raw_path)
        if not has_extension(path_str, self.extension):
            return

        path = normalise_path(Path(path_str))
        identifier = str(path)

        # a claimed file is either in flight or already converted
        if not self.claims.try_claim(identifier):
            logger.debug(f"Ignoring event for claimed file [ {identifier} ].")
            return

        logger.info(f"Processing file [ {identifier} ].")
        try:
            self.submit_task(path, identifier)
        except Exception as e:
            logger.error(f"Error during watch: failed to dispatch [ {identifier} ]: {e}")
            self.claims.release(identifier)


class ContactWatcher:
    """Watch orchestrator: observer, claim set and processing pool."""

    def __init__(self, settings: Settings, processor: Optional[FileProcessor] = None):
        """
        Initialize the watcher.

        Args:
            settings: Settings with input, output and error directories set
            processor: Processing pipeline; built from ``settings`` when omitted
        """
        self.settings = settings
        self.input_dir = normalise_path(settings.input_dir)
        self.processor = processor or FileProcessor.from_settings(ClaimSet(), settings)
        # the handler claims on the same set the processor releases from
        self.claims = self.processor.claims

        self.executor: Optional[ThreadPoolExecutor] = None
        self.observer: Optional[Observer] = None
        self.event_handler = ContactEventHandler(
            self.claims, self.submit, extension=settings.input_extension
        )

    def submit(self, path: Path, identifier: str) -> None:
        """Queue a claimed file on the processing pool."""
        if self.executor is None:
            raise RuntimeError("watcher is not running")
        future = self.executor.submit(self.processor.process, path, identifier)
        future.add_done_callback(lambda f: self._log_task_failure(f, identifier))

    @staticmethod
    def _log_task_failure(future: Future, identifier: str) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Processing task for [ {identifier} ] crashed: {exc}")

    def start(self) -> None:
        """Start the processing pool and the observer."""
        self.executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="contact-processor",
        )
        self.observer = Observer()
        self.observer.schedule(self.event_handler, str(self.input_dir), recursive=False)
        self.observer.start()
        logger.info(f"Watching input directory [ {self.input_dir} ].")

    def stop(self) -> None:
        """
        Stop event intake.

        Queued tasks are cancelled and running ones are left to finish on their
        own; shutdown does not drain the backlog.
        """
        if self.observer is not None:
            self.observer.stop()
            self.observer.join()
            self.observer = None
        if self.executor is not None:
            self.executor.shutdown(wait=False, cancel_futures=True)
            self.executor = None
        logger.info("File system observer stopped")

    def run(self, stop_event: threading.Event, poll: float = 1.0) -> None:
        """Watch until ``stop_event`` is set."""
        self.start()
        try:
            while not stop_event.is_set():
                stop_event.wait(poll)
        finally:
            self.stop()
