from datetime import datetime, timezone
from pathlib import Path

import pytest

from ci_publish import inventory
from ci_publish.archive import ArchiveRecord
from ci_publish.errors import InventoryWriteError


def _record(name: str, size: int = 10) -> ArchiveRecord:
    return ArchiveRecord(
        name=name,
        path=Path("/packages") / name,
        created=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        size=size,
        sha256="ab" * 32,
    )


def test_inventory_locations(tmp_path):
    assert inventory.project_inventory_path(tmp_path, "Test project") == (
        tmp_path / "Test project-packages.xml"
    )
    assert inventory.build_inventory_path(tmp_path, "A Label", "Test project") == (
        tmp_path / "A Label" / "Test project-packages.xml"
    )


def test_missing_inventory_reads_empty(tmp_path):
    assert inventory.read_inventory(tmp_path / "none.xml") == []


def test_record_creates_both_inventories(tmp_path):
    project = tmp_path / "p-packages.xml"
    build = tmp_path / "label" / "p-packages.xml"
    inventory.record(project, build, _record("app-1.zip", 42))

    for path in (project, build):
        entries = inventory.read_inventory(path)
        assert len(entries) == 1
        assert entries[0].name == "app-1.zip"
        assert entries[0].size == 42
        assert entries[0].time == "2026-01-02T03:04:05Z"
        assert entries[0].sha256 == "ab" * 32


def test_record_appends_in_creation_order(tmp_path):
    project = tmp_path / "p-packages.xml"
    for label, name in (("1", "app-1.zip"), ("2", "app-2.zip"), ("2", "app-3.zip")):
        inventory.record(project, tmp_path / label / "p-packages.xml", _record(name))

    assert [e.name for e in inventory.read_inventory(project)] == [
        "app-1.zip",
        "app-2.zip",
        "app-3.zip",
    ]
    assert [e.name for e in inventory.read_inventory(tmp_path / "1" / "p-packages.xml")] == [
        "app-1.zip"
    ]
    assert [e.name for e in inventory.read_inventory(tmp_path / "2" / "p-packages.xml")] == [
        "app-2.zip",
        "app-3.zip",
    ]


def test_existing_history_is_merged(tmp_path):
    project = tmp_path / "p-packages.xml"
    project.write_text(
        '<?xml version="1.0"?>\n'
        '<packages><package name="old-1.zip" time="2020-01-01T00:00:00Z" size="5"/></packages>'
    )
    inventory.append_entry(project, _record("app-1.zip"))

    entries = inventory.read_inventory(project)
    assert [e.name for e in entries] == ["old-1.zip", "app-1.zip"]
    assert entries[0].sha256 == ""


def test_malformed_inventory_is_not_replaced(tmp_path):
    project = tmp_path / "p-packages.xml"
    project.write_text("<packages><package")
    with pytest.raises(InventoryWriteError):
        inventory.append_entry(project, _record("app-1.zip"))
    assert project.read_text() == "<packages><package"


def test_foreign_root_element_is_rejected(tmp_path):
    project = tmp_path / "p-packages.xml"
    project.write_text("<something/>")
    with pytest.raises(InventoryWriteError, match="something"):
        inventory.append_entry(project, _record("app-1.zip"))


def test_unwritable_inventory_raises(tmp_path):
    blocker = tmp_path / "label"
    blocker.write_text("not a directory")
    with pytest.raises(InventoryWriteError):
        inventory.append_entry(blocker / "p-packages.xml", _record("app-1.zip"))


def test_no_staging_files_left_behind(tmp_path):
    project = tmp_path / "p-packages.xml"
    inventory.append_entry(project, _record("app-1.zip"))
    leftovers = [p.name for p in tmp_path.iterdir() if p.suffix == ".tmp"]
    assert leftovers == []
