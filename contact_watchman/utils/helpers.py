"""
Helper utilities for Contact Watchman.

Path handling shared by the watcher, the processor and the CLI.
"""

import stat
from pathlib import Path


def normalise_path(path: Path) -> Path:
    """Return a resolved version of ``path`` without forcing existence."""

    try:
        return path.expanduser().resolve()
    except FileNotFoundError:
        return path.expanduser().absolute()


def has_extension(path: str, extension: str) -> bool:
    """Check whether the file name of ``path`` ends with ``extension``."""
    return Path(path).name.endswith(extension)


def artifact_name(path: Path, input_extension: str, output_extension: str) -> str:
    """
    Derive the artifact file name for an input file.

    The input extension is swapped for the output one:
    ``contacts.csv`` -> ``contacts.json``.

    Args:
        path: Input file path
        input_extension: Suffix stripped from the name when present
        output_extension: Suffix appended to the stripped name

    Returns:
        Artifact file name (no directory)
    """
    name = path.name
    if input_extension and name.endswith(input_extension):
        name = name[: -len(input_extension)]
    return name + output_extension


def permission_bits(st_mode: int) -> int:
    """Extract the permission bits from a ``stat`` mode."""
    return stat.S_IMODE(st_mode)
