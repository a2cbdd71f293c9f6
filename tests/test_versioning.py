from pathlib import Path

from ci_publish.versioning import allocate_name, existing_sequences


def _touch(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"")


def test_first_package_gets_sequence_one(tmp_path):
    assert allocate_name(tmp_path, "build", False) == tmp_path / "build-1.zip"


def test_missing_destination_counts_as_empty(tmp_path):
    destination = tmp_path / "not-yet"
    assert allocate_name(destination, "build", False) == destination / "build-1.zip"


def test_next_number_is_above_the_highest(tmp_path):
    _touch(tmp_path, "base-1.zip", "base-3.zip", "base-7.zip")
    assert allocate_name(tmp_path, "base", False) == tmp_path / "base-8.zip"


def test_single_instance_ignores_numbered_packages(tmp_path):
    _touch(tmp_path, "base-1.zip", "base-3.zip", "base-7.zip")
    assert allocate_name(tmp_path, "base", True) == tmp_path / "base.zip"


def test_existing_build_one_gives_build_two(tmp_path):
    _touch(tmp_path, "build-1.zip")
    assert allocate_name(tmp_path, "build", False) == tmp_path / "build-2.zip"


def test_unrelated_names_are_ignored(tmp_path):
    _touch(
        tmp_path,
        "base.zip",
        "base-x.zip",
        "base-2.tar.gz",
        "base-2-1.zip",
        "other-9.zip",
        "database-12.zip",
        "base-4.zip",
    )
    assert existing_sequences(tmp_path, "base") == [4]
    assert allocate_name(tmp_path, "base", False) == tmp_path / "base-5.zip"


def test_directories_do_not_count(tmp_path):
    (tmp_path / "base-20.zip").mkdir()
    _touch(tmp_path, "base-2.zip")
    assert allocate_name(tmp_path, "base", False) == tmp_path / "base-3.zip"


def test_base_name_with_regex_characters(tmp_path):
    _touch(tmp_path, "app (x86)-2.zip", "app (x86)+-9.zip")
    assert allocate_name(tmp_path, "app (x86)", False) == tmp_path / "app (x86)-3.zip"


def test_leading_zeros_compare_numerically(tmp_path):
    _touch(tmp_path, "base-010.zip", "base-9.zip")
    assert allocate_name(tmp_path, "base", False) == tmp_path / "base-11.zip"
