"""Read-only snapshot of an SPFx project's configuration files."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from spfx_doctor.domain.entities import Position

PropertyPath = Union[str, Sequence[str]]

# Known configuration documents: key -> path relative to the project root.
DOCUMENT_PATHS: dict[str, str] = {
    "package_json": "./package.json",
    "package_lock_json": "./package-lock.json",
    "yo_rc_json": "./.yo-rc.json",
    "tsconfig_json": "./tsconfig.json",
    "package_solution_json": "./config/package-solution.json",
    "config_json": "./config/config.json",
    "serve_json": "./config/serve.json",
    "sass_json": "./config/sass.json",
    "write_manifests_json": "./config/write-manifests.json",
    "copy_assets_json": "./config/copy-assets.json",
    "deploy_azure_storage_json": "./config/deploy-azure-storage.json",
}


@dataclass(frozen=True)
class JsonProperty:
    """An object member: where its key starts and the value node."""
    key_position: Position
    value: "JsonNode"


@dataclass(frozen=True)
class JsonNode:
    """A parsed JSON value together with the position where it starts."""
    kind: str
    position: Position
    value: Any = None
    properties: dict[str, JsonProperty] = field(default_factory=dict)
    items: list["JsonNode"] = field(default_factory=list)


def split_property_path(property_path: PropertyPath) -> list[str]:
    """'a.b.c' -> ['a', 'b', 'c']; sequences are taken as pre-split segments."""
    if isinstance(property_path, str):
        return [p for p in property_path.split(".") if p]
    return list(property_path)


@dataclass(frozen=True)
class JsonDocument:
    """A configuration file: its relative path, raw text, parsed data and node tree."""
    path: str
    source: str
    data: Any
    root: JsonNode

    def get(self, property_path: PropertyPath, default: Any = None) -> Any:
        """Return the value at property_path, or default when any segment is missing."""
        current = self.data
        for segment in split_property_path(property_path):
            if isinstance(current, dict) and segment in current:
                current = current[segment]
            elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
                current = current[int(segment)]
            else:
                return default
        return current

    def has(self, property_path: PropertyPath) -> bool:
        marker = object()
        return self.get(property_path, marker) is not marker

    def locate(self, property_path: PropertyPath) -> Position:
        """
        Best-effort position of property_path in the source file.

        Walks the node tree segment by segment and returns the position of
        the deepest property that exists. If not even the first segment
        exists, this is the start of the document.
        """
        node = self.root
        position = self.root.position
        for segment in split_property_path(property_path):
            if node.kind == "object" and segment in node.properties:
                prop = node.properties[segment]
                position = prop.key_position
                node = prop.value
            elif node.kind == "array" and segment.isdigit() and int(segment) < len(node.items):
                node = node.items[int(segment)]
                position = node.position
            else:
                break
        return position


@dataclass(frozen=True)
class Project:
    """
    Immutable snapshot of a project: its root folder, the configuration
    documents that exist on disk and the detected SPFx version.
    """
    path: str
    documents: Mapping[str, JsonDocument] = field(default_factory=dict)
    version: Optional[str] = None

    def document(self, key: str) -> Optional[JsonDocument]:
        return self.documents.get(key)

    def with_version(self, version: Optional[str]) -> "Project":
        """Return a copy of the snapshot with the version resolved."""
        return dataclasses.replace(self, version=version)

    @property
    def package_json(self) -> Optional[JsonDocument]:
        return self.document("package_json")

    @property
    def package_lock_json(self) -> Optional[JsonDocument]:
        return self.document("package_lock_json")

    @property
    def package_solution_json(self) -> Optional[JsonDocument]:
        return self.document("package_solution_json")

    @property
    def yo_rc_json(self) -> Optional[JsonDocument]:
        return self.document("yo_rc_json")

    @property
    def tsconfig_json(self) -> Optional[JsonDocument]:
        return self.document("tsconfig_json")

    @property
    def sass_json(self) -> Optional[JsonDocument]:
        return self.document("sass_json")

    @property
    def solution_name(self) -> Optional[str]:
        """Name from config/package-solution.json (used in report titles)."""
        doc = self.package_solution_json
        if doc is None:
            return None
        name = doc.get("solution.name")
        return name if isinstance(name, str) else None
