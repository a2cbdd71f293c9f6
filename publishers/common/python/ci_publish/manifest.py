import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

from . import utils
from .errors import ManifestGenerationError
from .results import BuildResult

MANIFEST_ENTRY = "manifest.xml"


class ManifestGenerator(Protocol):
    def generate(self, result: BuildResult, files: Sequence[Path]) -> Any:
        ...


class DefaultManifestGenerator:
    """Describe the build and the packaged files as an XML document."""

    def generate(self, result: BuildResult, files: Sequence[Path]) -> ET.Element:
        root = ET.Element("manifest")
        header = ET.SubElement(root, "header")
        header.set("project", result.project_name)
        header.set("label", result.label)
        header.set("generated", utils.format_timestamp(utils.utcnow()))

        modifications = ET.SubElement(root, "modifications")
        for mod in result.modifications or []:
            node = ET.SubElement(modifications, "modification")
            node.set("file", mod.file_name)
            if mod.folder_name:
                node.set("folder", mod.folder_name)
            if mod.type:
                node.set("type", mod.type)
            if mod.user_name:
                node.set("user", mod.user_name)
            if mod.change_number is not None:
                node.set("changeNumber", str(mod.change_number))
            if mod.modified_time is not None:
                node.set("time", mod.modified_time.isoformat())
            if mod.email_address:
                node.set("email", mod.email_address)
            if mod.version:
                node.set("version", mod.version)
            if mod.url:
                node.set("url", mod.url)
            if mod.comment:
                node.text = mod.comment

        packaged = ET.SubElement(root, "files")
        for path in files:
            ET.SubElement(packaged, "file", name=Path(path).name).text = str(path)
        return root


def generate_manifest(
    generator: Optional[ManifestGenerator],
    result: BuildResult,
    files: Sequence[Path],
) -> Optional[bytes]:
    if generator is None:
        return None
    try:
        return serialize_document(generator.generate(result, list(files)))
    except ManifestGenerationError:
        raise
    except Exception as exc:
        raise ManifestGenerationError(
            f"Manifest generation failed for {result.project_name} ({result.label}): {exc}"
        ) from exc


def serialize_document(document: Any) -> Optional[bytes]:
    if document is None:
        return None
    if isinstance(document, bytes):
        return document
    if isinstance(document, str):
        return document.encode("utf-8")
    if isinstance(document, ET.ElementTree):
        document = document.getroot()
    if isinstance(document, ET.Element):
        return ET.tostring(document, encoding="utf-8", xml_declaration=True)
    to_bytes = getattr(document, "to_bytes", None)
    if callable(to_bytes):
        return to_bytes()
    raise ManifestGenerationError(
        f"Unable to serialize manifest document of type {type(document).__name__}"
    )
