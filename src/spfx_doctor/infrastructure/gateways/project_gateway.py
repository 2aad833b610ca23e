"""Project Gateway - locates an SPFx project on disk and loads its configuration documents."""

import re
from typing import Optional

from spfx_doctor.domain.errors import JsonParseError
from spfx_doctor.domain.project import DOCUMENT_PATHS, JsonDocument, Project
from spfx_doctor.domain.protocols import (
    FileSystemProtocol,
    ProjectGatewayProtocol,
    TelemetryPort,
)
from spfx_doctor.infrastructure.gateways.json_gateway import JsonGateway

GENERATOR_PACKAGE = "@microsoft/generator-sharepoint"
CORE_LIBRARY_PACKAGE = "@microsoft/sp-core-library"
_NON_VERSION_CHARS = re.compile(r"[^0-9.]")
# Read for their data only; no rule reports a position inside them
_DATA_ONLY_DOCUMENTS = frozenset({"package_lock_json"})


class ProjectGateway(ProjectGatewayProtocol):
    """Builds the read-only Project snapshot from the files under a project root."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        json_gateway: Optional[JsonGateway] = None,
    ) -> None:
        self._fs = filesystem
        self._telemetry = telemetry
        self._json = json_gateway or JsonGateway()

    def find_project_root(self, start_path: str) -> Optional[str]:
        """Walk up from start_path until a folder containing package.json is found."""
        current = self._fs.resolve_path(start_path)
        while True:
            if self._fs.exists(self._fs.join_path(current, "package.json")):
                return current
            parent = self._fs.parent(current)
            if parent == current:
                return None
            current = parent

    def load(self, root_path: str) -> Project:
        """Parse every known document present under root_path. Broken files are skipped."""
        documents: dict[str, JsonDocument] = {}
        for key, relative_path in DOCUMENT_PATHS.items():
            full_path = self._fs.join_path(root_path, relative_path[2:])
            if not self._fs.exists(full_path):
                continue
            try:
                text = self._fs.read_text(full_path)
                if key in _DATA_ONLY_DOCUMENTS:
                    documents[key] = self._json.parse_data(text, relative_path)
                else:
                    documents[key] = self._json.parse(text, relative_path)
            except (OSError, UnicodeDecodeError, JsonParseError) as e:
                self._telemetry.warning(f"Skipping {relative_path}: {e}")
        return Project(path=root_path, documents=documents)

    def detect_version(self, project: Project) -> Optional[str]:
        """
        SPFx version the project was scaffolded with.

        Prefers the generator version recorded in .yo-rc.json; falls back to
        the sp-core-library dependency in package.json with range operators
        stripped (^1.21.0 -> 1.21.0).
        """
        yo_rc = project.yo_rc_json
        if yo_rc is not None:
            version = yo_rc.get([GENERATOR_PACKAGE, "version"])
            if isinstance(version, str) and version:
                return version

        package_json = project.package_json
        if package_json is not None:
            entry = package_json.get(["dependencies", CORE_LIBRARY_PACKAGE])
            if isinstance(entry, str):
                version = _NON_VERSION_CHARS.sub("", entry)
                if version:
                    return version
        return None
