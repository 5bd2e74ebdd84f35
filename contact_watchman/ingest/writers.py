"""Serialization of parse results into JSON artifacts."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterable, Optional

from contact_watchman.ingest.errors import ArtifactWriteError
from contact_watchman.models.schemas import Contact, RowError


def write_json_artifact(path: Path, payload: list[dict[str, Any]], mode: Optional[int] = None) -> Path:
    """
    Persist ``payload`` as indented JSON at ``path``.

    The document is written to a temporary sibling and then moved into place,
    so a partially written artifact is never visible under its final name.

    Args:
        path: Destination file
        payload: JSON-ready list of objects
        mode: Permission bits applied to the artifact, when given

    Returns:
        The destination path

    Raises:
        ArtifactWriteError: on serialization or filesystem failure
    """
    try:
        data = json.dumps(payload, indent=4)
    except (TypeError, ValueError) as e:
        raise ArtifactWriteError(path, f"error marshalling to json: {e}") from e

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(data, encoding="utf-8")
        if mode is not None:
            os.chmod(tmp_path, mode)
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise ArtifactWriteError(path, str(e)) from e

    return path


def write_records(path: Path, records: Iterable[Contact], mode: Optional[int] = None) -> Path:
    """Write accepted contacts to the output artifact."""
    return write_json_artifact(path, [r.as_json_ready() for r in records], mode)


def write_errors(path: Path, errors: Iterable[RowError], mode: Optional[int] = None) -> Path:
    """Write rejected rows to the error artifact."""
    return write_json_artifact(path, [e.as_json_ready() for e in errors], mode)
