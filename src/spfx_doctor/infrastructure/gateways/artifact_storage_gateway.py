"""Local artifact storage - Infrastructure implementation of ArtifactStorageProtocol."""

from spfx_doctor.domain.protocols import (
    ArtifactStorageProtocol,
    FileSystemProtocol,
)


class LocalArtifactStorage(ArtifactStorageProtocol):
    """Stores doctor artifacts under a base path (the project root) using FileSystemProtocol.
    Keys like .tours/validation.tour."""

    def __init__(self, base_path: str, filesystem: FileSystemProtocol) -> None:
        self._base = base_path
        self._fs = filesystem

    def _path(self, key: str) -> str:
        return self._fs.join_path(self._base, key)

    def _ensure_parent(self, key: str) -> None:
        if "/" in key or "\\" in key:
            parts = key.replace("\\", "/").rsplit("/", 1)
            if len(parts) == 2:
                parent_dir = self._fs.join_path(self._base, parts[0])
                self._fs.make_dirs(parent_dir, exist_ok=True)

    def write_artifact(self, key: str, content: str, encoding: str = "utf-8") -> str:
        """Write content to artifact at key. Overwrites if present. Returns the full path."""
        self._ensure_parent(key)
        path = self._path(key)
        self._fs.write_text(path, content, encoding=encoding)
        return path
