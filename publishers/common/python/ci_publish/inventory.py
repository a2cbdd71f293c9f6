"""
Cumulative package lists kept per project and per build label.
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import List

from . import locks, utils
from .archive import ArchiveRecord
from .errors import InventoryWriteError

INVENTORY_SUFFIX = "-packages.xml"
ROOT_TAG = "packages"
ENTRY_TAG = "package"


@dataclass(frozen=True)
class InventoryEntry:
    name: str
    time: str
    size: int
    sha256: str = ""


def inventory_file_name(project_name: str) -> str:
    return f"{project_name}{INVENTORY_SUFFIX}"


def project_inventory_path(artifact_directory: Path, project_name: str) -> Path:
    return artifact_directory / inventory_file_name(project_name)


def build_inventory_path(artifact_directory: Path, label: str, project_name: str) -> Path:
    return artifact_directory / label / inventory_file_name(project_name)


def _load_tree(path: Path) -> ET.Element:
    if not path.exists():
        return ET.Element(ROOT_TAG)
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as exc:
        raise InventoryWriteError(f"Unable to read package list {path}: {exc}") from exc
    if root.tag != ROOT_TAG:
        raise InventoryWriteError(
            f"Unexpected root element <{root.tag}> in package list {path}"
        )
    return root


def read_inventory(path: Path) -> List[InventoryEntry]:
    entries = []
    for node in _load_tree(path).findall(ENTRY_TAG):
        entries.append(
            InventoryEntry(
                name=node.get("name", ""),
                time=node.get("time", ""),
                size=int(node.get("size", "0")),
                sha256=node.get("sha256", ""),
            )
        )
    return entries


def append_entry(path: Path, record: ArchiveRecord) -> None:
    try:
        with locks.resource_lock(locks.inventory_lock_path(path)):
            root = _load_tree(path)
            node = ET.SubElement(root, ENTRY_TAG)
            node.set("name", record.name)
            node.set("time", utils.format_timestamp(record.created))
            node.set("size", str(record.size))
            node.set("sha256", record.sha256)
            ET.indent(root)
            with utils.staged_file(path) as staging:
                ET.ElementTree(root).write(staging, encoding="utf-8", xml_declaration=True)
    except OSError as exc:
        raise InventoryWriteError(f"Unable to write package list {path}: {exc}") from exc


def record(project_inventory: Path, build_inventory: Path, entry: ArchiveRecord) -> None:
    for path in (project_inventory, build_inventory):
        append_entry(path, entry)
        utils.log("package", f"Recorded {entry.name} in {path}")
