"""
Named-resource locks for the allocate-then-write and read-then-rewrite steps.

A key is the path of a sidecar lock file. Threads in one process share a
``threading.Lock`` per key; separate processes serialize on ``flock``.
"""
import fcntl
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator

from . import utils

_registry_guard = threading.Lock()
_registry: Dict[str, threading.Lock] = {}


def _thread_lock(key: str) -> threading.Lock:
    with _registry_guard:
        lock = _registry.get(key)
        if lock is None:
            lock = _registry[key] = threading.Lock()
        return lock


def archive_lock_path(destination: Path, base_name: str) -> Path:
    return destination / f".{base_name}.lock"


def inventory_lock_path(inventory: Path) -> Path:
    return inventory.with_name(f"{inventory.name}.lock")


@contextmanager
def resource_lock(lock_file: Path) -> Iterator[None]:
    lock_file = utils.normalize_path(lock_file)
    utils.ensure_dir(lock_file.parent)
    with _thread_lock(str(lock_file)):
        with lock_file.open("a") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
