"""
Package build outputs into versioned zip archives for the CI server.
"""
from .archive import ArchiveRecord
from .config import PackageSpecification, PublisherConfig
from .errors import (
    ArchiveWriteError,
    ConfigurationError,
    InventoryWriteError,
    ManifestGenerationError,
    PackagingError,
)
from .publisher import PackagePublisher, PackageResult
from .results import IntegrationResult, Modification
