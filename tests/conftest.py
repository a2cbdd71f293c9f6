from pathlib import Path

import pytest

from ci_publish.results import IntegrationResult

from helpers import make_modification


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def artifacts(tmp_path: Path) -> Path:
    path = tmp_path / "artifacts"
    path.mkdir()
    return path


@pytest.fixture
def build_result(workdir: Path, artifacts: Path) -> IntegrationResult:
    return IntegrationResult(
        project_name="Test project",
        label="A Label",
        working_directory=workdir,
        artifact_directory=artifacts,
        modifications=[
            make_modification("first file", "Add"),
            make_modification("second file", "Modify"),
        ],
    )


@pytest.fixture
def data_file(workdir: Path) -> Path:
    path = workdir / "datafile.txt"
    path.write_text("This is a test file for the packaging publisher")
    return path
