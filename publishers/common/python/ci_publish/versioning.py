import re
from pathlib import Path
from typing import List, Optional

ARCHIVE_EXTENSION = ".zip"


def _sequence_pattern(base_name: str) -> "re.Pattern[str]":
    return re.compile(
        rf"^{re.escape(base_name)}-([0-9]+){re.escape(ARCHIVE_EXTENSION)}$"
    )


def existing_sequences(destination: Path, base_name: str) -> List[int]:
    if not destination.is_dir():
        return []
    pattern = _sequence_pattern(base_name)
    found: List[int] = []
    for entry in destination.iterdir():
        match = pattern.match(entry.name)
        if match and entry.is_file():
            found.append(int(match.group(1)))
    return found


def next_sequence(destination: Path, base_name: str) -> int:
    highest: Optional[int] = max(existing_sequences(destination, base_name), default=None)
    return 1 if highest is None else highest + 1


def allocate_name(destination: Path, base_name: str, single_instance: bool) -> Path:
    """
    Pick the archive path for the next package.

    Single-instance packages always reuse ``<base_name>.zip``; otherwise the
    next unused ``<base_name>-<n>.zip`` above every number already present.
    """
    if single_instance:
        return destination / f"{base_name}{ARCHIVE_EXTENSION}"
    sequence = next_sequence(destination, base_name)
    return destination / f"{base_name}-{sequence}{ARCHIVE_EXTENSION}"
