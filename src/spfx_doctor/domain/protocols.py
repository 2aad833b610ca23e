from typing import TYPE_CHECKING, Any, Optional, Protocol

if TYPE_CHECKING:
    from spfx_doctor.domain.entities import FindingToReport
    from spfx_doctor.domain.package_manager import PackageManager
    from spfx_doctor.domain.project import Project
    from spfx_doctor.domain.rules import Rule


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...
    def configure(self, verbose: bool = False, debug: bool = False) -> None: ...


class RuleFactoryProtocol(Protocol):
    """Builds catalogued rules by code. Implemented by RuleRegistryService in infrastructure."""

    def dependency(
        self,
        code: str,
        package_version: str,
        add: bool = True,
        supersedes: Optional[list[str]] = None,
    ) -> "Rule":
        """Dependency rule for code, targeting package_version (exact or npm range)."""
        ...

    def json_property(
        self,
        code: str,
        expected: Any,
        supersedes: Optional[list[str]] = None,
    ) -> "Rule":
        """JSON-property rule for code, expecting expected at the registered path."""
        ...


class ProjectGatewayProtocol(Protocol):
    """Locates, loads and versions a project on disk."""

    def find_project_root(self, start_path: str) -> Optional[str]:
        """Closest folder (start_path or a parent) containing package.json, or None."""
        ...

    def load(self, root_path: str) -> "Project":
        """Snapshot of every known configuration document under root_path."""
        ...

    def detect_version(self, project: "Project") -> Optional[str]:
        """SPFx version the project was scaffolded with, or None."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def make_dirs(self, path: str, exist_ok: bool = True) -> None:
        """Create directory and parent directories if needed."""
        ...

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        ...

    def parent(self, path: str) -> str:
        """Parent directory of path (the path itself at the filesystem root)."""
        ...


class ArtifactStorageProtocol(Protocol):
    """Writes doctor artifacts (the CodeTour file) under a base path.
    Keys are relative paths such as .tours/validation.tour."""

    def write_artifact(self, key: str, content: str, encoding: str = "utf-8") -> str:
        """Write content to artifact at key, creating parent folders. Returns the full path."""
        ...


class ReporterProtocol(Protocol):
    """Renders flattened findings into one output format."""

    def render(
        self,
        project: "Project",
        findings: list["FindingToReport"],
        package_manager: "PackageManager",
    ) -> str:
        """Return the report text."""
        ...
