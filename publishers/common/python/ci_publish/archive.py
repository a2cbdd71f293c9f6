import zipfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePath
from typing import Optional, Sequence, Set

from . import utils
from .errors import ArchiveWriteError
from .manifest import MANIFEST_ENTRY


@dataclass(frozen=True)
class ArchiveRecord:
    name: str
    path: Path
    created: datetime
    size: int
    sha256: str


def entry_name(path: Path, base_directory: Optional[Path], flatten: bool) -> str:
    if flatten:
        return path.name
    if base_directory is not None:
        try:
            return path.relative_to(base_directory).as_posix()
        except ValueError:
            pass
    return PurePath(*path.parts[1:]).as_posix() if path.anchor else path.as_posix()


def _compression(level: int) -> int:
    return zipfile.ZIP_STORED if level == 0 else zipfile.ZIP_DEFLATED


def build_archive(
    files: Sequence[Path],
    manifest: Optional[bytes],
    compression_level: int,
    flatten: bool,
    output_path: Path,
    base_directory: Optional[Path] = None,
) -> ArchiveRecord:
    compression = _compression(compression_level)
    compresslevel = compression_level if compression == zipfile.ZIP_DEFLATED else None
    if base_directory is not None:
        base_directory = utils.normalize_path(base_directory)
    try:
        with utils.staged_file(output_path) as staging:
            with zipfile.ZipFile(
                staging,
                "w",
                compression=compression,
                compresslevel=compresslevel,
                strict_timestamps=False,
            ) as zf:
                written: Set[str] = set()
                for path in files:
                    arcname = entry_name(path, base_directory, flatten)
                    if manifest is not None and arcname == MANIFEST_ENTRY:
                        utils.log(
                            "warn", f"Skipping {path}: {MANIFEST_ENTRY} is reserved for the manifest"
                        )
                        continue
                    if arcname in written:
                        utils.log("warn", f"Skipping {path}: entry {arcname} already packaged")
                        continue
                    try:
                        zf.write(path, arcname=arcname)
                    except FileNotFoundError:
                        utils.log("warn", f"Skipping {path}: file disappeared before packaging")
                        continue
                    written.add(arcname)
                if manifest is not None:
                    zf.writestr(MANIFEST_ENTRY, manifest)
    except OSError as exc:
        raise ArchiveWriteError(f"Unable to write package {output_path}: {exc}") from exc

    stat = output_path.stat()
    return ArchiveRecord(
        name=output_path.name,
        path=output_path,
        created=utils.utcnow(),
        size=stat.st_size,
        sha256=utils.sha256_file(output_path),
    )
