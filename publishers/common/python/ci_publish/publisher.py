"""
Package the outputs of a finished build and record the package.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import inventory, locks, manifest, patterns, utils, versioning
from .archive import ArchiveRecord, build_archive
from .config import PackageSpecification
from .errors import ArchiveWriteError, InventoryWriteError, PackagingError
from .results import BuildResult

IDLE = "idle"
PATTERNS_RESOLVED = "patterns-resolved"
MANIFEST_GENERATED = "manifest-generated"
NAME_ALLOCATED = "name-allocated"
ARCHIVE_WRITTEN = "archive-written"
INVENTORIES_UPDATED = "inventories-updated"
DONE = "done"
FAILED = "failed"


@dataclass
class PackageResult:
    status: str
    state: str
    archive_path: Optional[Path] = None
    record: Optional[ArchiveRecord] = None
    error: Optional[PackagingError] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    @property
    def category(self) -> Optional[str]:
        return self.error.category if self.error else None


class PackagePublisher:
    def __init__(self, specification: PackageSpecification):
        self.specification = specification
        self.state = IDLE
        self.archive_path: Optional[Path] = None

    def should_package(self, result: BuildResult) -> bool:
        return self.specification.always_package or bool(result.modifications)

    def base_directory(self, result: BuildResult) -> Path:
        base = self.specification.base_directory
        working = Path(result.working_directory)
        if base is None:
            return utils.normalize_path(working)
        if not base.is_absolute():
            base = working / base
        return utils.normalize_path(base)

    def package_location(self, result: BuildResult) -> Path:
        target = Path(self.specification.name)
        if not target.is_absolute():
            target = Path(result.artifact_directory) / target
        return utils.normalize_path(target)

    def resolve_files(self, result: BuildResult) -> List[Path]:
        return patterns.resolve(self.specification.files, self.base_directory(result))

    def run(self, result: BuildResult) -> ArchiveRecord:
        spec = self.specification
        spec.validate()
        self.state = IDLE
        self.archive_path = None
        try:
            base_directory = self.base_directory(result)
            files = patterns.resolve(spec.files, base_directory)
            self.state = PATTERNS_RESOLVED
            utils.log("package", f"Resolved {len(files)} file(s) for {result.project_name}")

            document = manifest.generate_manifest(spec.manifest_generator, result, files)
            if document is not None:
                self.state = MANIFEST_GENERATED

            location = self.package_location(result)
            destination, base_name = location.parent, location.name
            try:
                with locks.resource_lock(locks.archive_lock_path(destination, base_name)):
                    output_path = versioning.allocate_name(
                        destination, base_name, spec.single_instance
                    )
                    self.state = NAME_ALLOCATED
                    record = build_archive(
                        files,
                        document,
                        spec.compression_level,
                        spec.flatten,
                        output_path,
                        base_directory,
                    )
            except OSError as exc:
                raise ArchiveWriteError(
                    f"Unable to write package into {destination}: {exc}"
                ) from exc
            self.archive_path = record.path
            self.state = ARCHIVE_WRITTEN
            utils.log("package", f"Wrote {record.path} ({record.size} bytes)")

            artifact_directory = Path(result.artifact_directory)
            try:
                inventory.record(
                    inventory.project_inventory_path(artifact_directory, result.project_name),
                    inventory.build_inventory_path(
                        artifact_directory, result.label, result.project_name
                    ),
                    record,
                )
            except InventoryWriteError as exc:
                exc.archive_path = record.path
                raise
            self.state = INVENTORIES_UPDATED
        except Exception:
            self.state = FAILED
            raise
        self.state = DONE
        return record

    def publish(self, result: BuildResult) -> PackageResult:
        try:
            record = self.run(result)
        except PackagingError as exc:
            utils.log("error", f"Packaging {result.project_name} failed ({exc.category}): {exc}")
            return PackageResult(
                status="failure",
                state=self.state,
                archive_path=self.archive_path,
                error=exc,
            )
        return PackageResult(
            status="success",
            state=self.state,
            archive_path=record.path,
            record=record,
        )
