from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from .errors import ConfigurationError
from .manifest import DefaultManifestGenerator, ManifestGenerator

MIN_COMPRESSION = 0
MAX_COMPRESSION = 9
DEFAULT_COMPRESSION = 5

MANIFEST_GENERATORS = {
    "default": DefaultManifestGenerator,
}


class PackageSpecification:
    """
    Options for one package publisher.

    Every value is checked when it is assigned, so a bad option fails while
    the configuration is loaded rather than in the middle of a build.
    """

    def __init__(
        self,
        name: str = "",
        files: Iterable[str] = (),
        base_directory: Optional[Path] = None,
        compression_level: int = DEFAULT_COMPRESSION,
        flatten: bool = False,
        single_instance: bool = False,
        always_package: bool = False,
        manifest_generator: Optional[ManifestGenerator] = None,
    ):
        self.name = name
        self.files = files
        self.base_directory = base_directory
        self.compression_level = compression_level
        self.flatten = flatten
        self.single_instance = single_instance
        self.always_package = always_package
        self.manifest_generator = manifest_generator

    @property
    def compression_level(self) -> int:
        return self._compression_level

    @compression_level.setter
    def compression_level(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(
                f"compression_level must be an integer, got {value!r}"
            )
        if not MIN_COMPRESSION <= value <= MAX_COMPRESSION:
            raise ConfigurationError(
                f"compression_level must be between {MIN_COMPRESSION} and {MAX_COMPRESSION}, got {value}"
            )
        self._compression_level = value

    @property
    def files(self) -> List[str]:
        return list(self._files)

    @files.setter
    def files(self, value: Iterable[str]) -> None:
        if isinstance(value, (str, bytes)):
            raise ConfigurationError("files must be a list of patterns, not a single string")
        patterns = list(value)
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise ConfigurationError(f"file pattern must be a string, got {pattern!r}")
        self._files = patterns

    @property
    def base_directory(self) -> Optional[Path]:
        return self._base_directory

    @base_directory.setter
    def base_directory(self, value: Optional[Path]) -> None:
        self._base_directory = Path(value) if value not in (None, "") else None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not isinstance(value, str):
            raise ConfigurationError(f"name must be a string, got {value!r}")
        self._name = value.strip()

    @property
    def manifest_generator(self) -> Optional[ManifestGenerator]:
        return self._manifest_generator

    @manifest_generator.setter
    def manifest_generator(self, value: Optional[ManifestGenerator]) -> None:
        if value is not None and not callable(getattr(value, "generate", None)):
            raise ConfigurationError("manifest_generator must provide a generate() method")
        self._manifest_generator = value

    def validate(self) -> None:
        if not self.name:
            raise ConfigurationError("A package name is required")


def _as_bool(section: Dict[str, Any], key: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
    return value


class PublisherConfig:
    def __init__(self, path: Path):
        self.path = path
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Unable to load publisher config {path}: {exc}") from exc
        self.data: Dict[str, Any] = data if isinstance(data, dict) else {}

    @property
    def publisher(self) -> Dict[str, Any]:
        section = self.data.get("publisher", {})
        if not isinstance(section, dict):
            raise ConfigurationError(f"'publisher' section in {self.path} must be a mapping")
        return section

    def manifest_generator(self) -> Optional[ManifestGenerator]:
        key = self.publisher.get("manifest")
        if key in (None, False, ""):
            return None
        factory = MANIFEST_GENERATORS.get(str(key))
        if factory is None:
            raise ConfigurationError(
                f"Unknown manifest generator '{key}'; expected one of {', '.join(sorted(MANIFEST_GENERATORS))}"
            )
        return factory()

    def specification(self) -> PackageSpecification:
        section = self.publisher
        base_directory = section.get("base_directory")
        if base_directory:
            base_directory = Path(str(base_directory)).expanduser()
        spec = PackageSpecification(
            name=section.get("name", ""),
            files=section.get("files") or [],
            base_directory=base_directory,
            compression_level=section.get("compression_level", DEFAULT_COMPRESSION),
            flatten=_as_bool(section, "flatten"),
            single_instance=_as_bool(section, "single_instance"),
            always_package=_as_bool(section, "always_package"),
            manifest_generator=self.manifest_generator(),
        )
        spec.validate()
        return spec
