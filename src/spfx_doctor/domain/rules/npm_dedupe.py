"""FN017001: npm-only check for duplicated or extraneous lockfile entries."""

from typing import TYPE_CHECKING, Any

from spfx_doctor.domain.entities import Finding, ResolutionType, Severity
from spfx_doctor.domain.rules.json_rule import JsonRule

if TYPE_CHECKING:
    from spfx_doctor.domain.project import Project

_NODE_MODULES = "node_modules/"


def _package_name(lock_path: str) -> str:
    """'node_modules/a/node_modules/@s/b' -> '@s/b'."""
    return lock_path.rsplit(_NODE_MODULES, 1)[-1]


class NpmDedupeRule(JsonRule):
    """
    Suggests `npm dedupe` when package-lock.json shows packages that npm
    could hoist: the same name and version installed both at the top level
    and nested under another package, or entries marked extraneous.
    """

    id = "FN017001"
    title = "Run npm dedupe"
    description = (
        "If, after upgrading npm packages, when building the project you have errors similar to: "
        "\"error TS2345: Argument of type 'SPHttpClientConfiguration' is not assignable to parameter "
        "of type 'SPHttpClientConfiguration'\", try running 'npm dedupe' to cleanup npm packages."
    )
    severity = Severity.OPTIONAL
    resolution = "npm dedupe"
    resolution_type = ResolutionType.CMD
    file = "./package.json"

    def find_redundant_entries(self, packages: dict[str, Any]) -> list[str]:
        top_level: dict[str, Any] = {}
        for lock_path, meta in packages.items():
            if lock_path.startswith(_NODE_MODULES) and lock_path.count(_NODE_MODULES) == 1 and isinstance(meta, dict):
                top_level[_package_name(lock_path)] = meta.get("version")

        redundant: list[str] = []
        for lock_path, meta in packages.items():
            if not isinstance(meta, dict) or not lock_path:
                continue
            if meta.get("extraneous") is True:
                redundant.append(lock_path)
                continue
            if lock_path.count(_NODE_MODULES) > 1:
                name = _package_name(lock_path)
                version = meta.get("version")
                if version is not None and top_level.get(name) == version:
                    redundant.append(lock_path)
        return redundant

    def visit(self, project: "Project", findings: list[Finding]) -> None:
        if project.package_json is None:
            return
        lock = project.package_lock_json
        if lock is None:
            return
        packages = lock.get("packages")
        if not isinstance(packages, dict):
            return
        if self.find_redundant_entries(packages):
            self.add_finding(findings)
