import json

import pytest

from contact_watchman.ingest.errors import ArtifactWriteError
from contact_watchman.ingest.writers import write_errors, write_json_artifact
from contact_watchman.models.schemas import RowError


def test_error_artifact_layout(tmp_path):
    path = tmp_path / "contacts.json"
    row_error = RowError(line=2, fields=["1234", "Jo", "", "Smith", "555-123-4567"], errors=["bad id"])

    write_errors(path, [row_error])

    text = path.read_text()
    assert text.startswith('[\n    {\n        "line": 2')
    assert json.loads(text) == [row_error.as_json_ready()]
    assert not (tmp_path / "contacts.json.tmp").exists()


def test_unserializable_payload_raises(tmp_path):
    with pytest.raises(ArtifactWriteError):
        write_json_artifact(tmp_path / "out.json", [{"value": object()}])


def test_missing_directory_raises(tmp_path):
    with pytest.raises(ArtifactWriteError) as exc_info:
        write_json_artifact(tmp_path / "missing" / "out.json", [])

    assert exc_info.value.path == tmp_path / "missing" / "out.json"
