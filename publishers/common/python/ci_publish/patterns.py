"""
Expand file patterns into the concrete list of files to package.
"""
import re
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Set, Tuple

from . import utils

LITERAL = "literal"
WILDCARD = "wildcard"
RECURSIVE = "recursive"

RECURSIVE_MARKER = "**"
_MAGIC = ("*", "?", "[")
_STAR_RUN = re.compile(r"\*{2,}")


def _has_magic(text: str) -> bool:
    return any(ch in text for ch in _MAGIC)


def _split(pattern: str) -> Tuple[str, List[str]]:
    normalized = pattern.replace("\\", "/")
    anchor = "/" if normalized.startswith("/") else ""
    parts = [p for p in PurePosixPath(normalized).parts if p != "/"]
    # "**" only recurses as a whole segment; inside a name it means "*".
    return anchor, [p if p == RECURSIVE_MARKER else _STAR_RUN.sub("*", p) for p in parts]


def classify(pattern: str) -> str:
    _, parts = _split(pattern)
    if RECURSIVE_MARKER in parts:
        return RECURSIVE
    if any(_has_magic(part) for part in parts):
        return WILDCARD
    return LITERAL


def _root_and_rest(pattern: str, base_directory: Path) -> Tuple[Path, List[str]]:
    anchor, parts = _split(pattern)
    root = Path(anchor) if anchor else base_directory
    index = 0
    while index < len(parts) and not _has_magic(parts[index]):
        index += 1
    return root.joinpath(*parts[:index]), parts[index:]


def _expand_literal(pattern: str, base_directory: Path) -> List[Path]:
    root, _ = _root_and_rest(pattern, base_directory)
    if root.is_file():
        return [root]
    utils.log("warn", f"Skipping missing file {root}")
    return []


def _expand_wildcard(pattern: str, base_directory: Path) -> List[Path]:
    root, rest = _root_and_rest(pattern, base_directory)
    if not root.is_dir():
        return []
    return sorted(p for p in root.glob("/".join(rest)) if p.is_file())


def _expand_recursive(pattern: str, base_directory: Path) -> List[Path]:
    root, rest = _root_and_rest(pattern, base_directory)
    marker = rest.index(RECURSIVE_MARKER)
    # Wildcards ahead of the marker narrow the directories walked.
    prefix, tail = rest[:marker], rest[marker + 1:]
    if not tail:
        tail = ["*"]
    if not root.is_dir():
        return []
    starts = [d for d in root.glob("/".join(prefix)) if d.is_dir()] if prefix else [root]
    matches: List[Path] = []
    for start in sorted(starts):
        matches.extend(p for p in start.rglob("/".join(tail)) if p.is_file())
    return sorted(matches)


_EXPANDERS = {
    LITERAL: _expand_literal,
    WILDCARD: _expand_wildcard,
    RECURSIVE: _expand_recursive,
}


def resolve(patterns: Iterable[str], base_directory: Path) -> List[Path]:
    base_directory = utils.normalize_path(base_directory)
    resolved: List[Path] = []
    seen: Set[Path] = set()
    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern:
            continue
        try:
            matches = _EXPANDERS[classify(pattern)](pattern, base_directory)
        except ValueError as exc:
            utils.log("warn", f"Skipping pattern {pattern!r}: {exc}")
            continue
        for path in matches:
            path = utils.normalize_path(path)
            if path in seen:
                continue
            seen.add(path)
            resolved.append(path)
    return resolved
