from pathlib import Path

import pytest

HEADER = "INTERNAL_ID,FIRST_NAME,MIDDLE_NAME,LAST_NAME,PHONE_NUM\n"


@pytest.fixture
def dirs(tmp_path: Path) -> dict[str, Path]:
    """Input, output and error directories under ``tmp_path``."""
    paths = {name: tmp_path / name for name in ("input", "output", "error")}
    for path in paths.values():
        path.mkdir()
    return paths


@pytest.fixture
def write_csv():
    """Write a contact CSV file with the standard header."""

    def _write(path: Path, *lines: str, header: str = HEADER) -> Path:
        path.write_text(header + "".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    return _write
