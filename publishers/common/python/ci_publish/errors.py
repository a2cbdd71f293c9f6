"""
Failure categories surfaced by a packaging run.
"""
from pathlib import Path
from typing import Optional


class PackagingError(Exception):
    category = "packaging"


class ConfigurationError(PackagingError, ValueError):
    category = "configuration"


class ManifestGenerationError(PackagingError):
    category = "manifest"


class ArchiveWriteError(PackagingError):
    category = "archive"


class InventoryWriteError(PackagingError):
    """
    Raised after the archive was written; ``archive_path`` points at it so the
    caller can tell the package exists even though the run failed.
    """

    category = "inventory"

    def __init__(self, message: str, archive_path: Optional[Path] = None):
        super().__init__(message)
        self.archive_path = archive_path
