import hashlib
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator


def log(tag: str, message: str) -> None:
    print(f"[{tag}] {message}", flush=True)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(8192), b""):
            digest.update(chunk)
    return digest.hexdigest()


def normalize_path(path: Path) -> Path:
    """Absolute, with ``.``/``..`` collapsed; symlinks are left alone."""
    return Path(os.path.normpath(os.path.abspath(path)))


@contextmanager
def staged_file(target: Path, prefix: str = ".ci-publish-") -> Iterator[Path]:
    """
    Yield a unique staging path next to ``target``.

    The staging file replaces ``target`` atomically when the block exits
    cleanly and is removed when it raises.
    """
    ensure_dir(target.parent)
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=".tmp", dir=str(target.parent))
    os.close(fd)
    staging = Path(name)
    try:
        yield staging
        os.replace(staging, target)
    finally:
        staging.unlink(missing_ok=True)
