"""
Build results handed to the publisher by the CI server.

The publisher only reads the identifying strings and directories; anything
that satisfies ``BuildResult`` can be packaged.
"""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, Sequence


@dataclass
class Modification:
    file_name: str
    folder_name: str = ""
    type: str = ""
    user_name: str = ""
    comment: str = ""
    change_number: Optional[int] = None
    modified_time: Optional[datetime] = None
    email_address: str = ""
    version: str = ""
    url: str = ""


class BuildResult(Protocol):
    project_name: str
    label: str
    working_directory: Path
    artifact_directory: Path
    modifications: Sequence[Modification]


@dataclass
class IntegrationResult:
    project_name: str
    label: str
    working_directory: Path
    artifact_directory: Path
    modifications: List[Modification] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.working_directory = Path(self.working_directory)
        self.artifact_directory = Path(self.artifact_directory)
