"""Rules that look at package.json as a whole rather than a single property."""

from typing import TYPE_CHECKING

from spfx_doctor.domain.entities import (
    Finding,
    Occurrence,
    ResolutionType,
    Severity,
)
from spfx_doctor.domain.package_manager import (
    VERB_INSTALL,
    VERB_INSTALL_DEV,
    VERB_UNINSTALL_DEV,
)
from spfx_doctor.domain.rules.json_rule import JsonRule
from spfx_doctor.domain.semver import min_version, parse_version

if TYPE_CHECKING:
    from spfx_doctor.domain.project import Project

SPFX_PACKAGE_PREFIX = "@microsoft/sp-"
# checked on its own by FN001001
SKIPPED_PACKAGES = frozenset({"@microsoft/sp-core-library"})


class SpfxDepsMatchProjectVersionRule(JsonRule):
    """FN021001: every @microsoft/sp-* package must be on the project's version."""

    id = "FN021001"
    title = "SharePoint Framework dependencies versions"
    description = "SharePoint Framework dependencies must match the project version"
    severity = Severity.REQUIRED
    resolution_type = ResolutionType.CMD
    file = "./package.json"

    def visit(self, project: "Project", findings: list[Finding]) -> None:
        package_json = project.package_json
        if package_json is None or not project.version:
            return
        project_version = parse_version(project.version)
        if project_version is None:
            return

        occurrences: list[Occurrence] = []
        for section, verb in (("dependencies", VERB_INSTALL), ("devDependencies", VERB_INSTALL_DEV)):
            packages = package_json.get(section)
            if not isinstance(packages, dict):
                continue
            for name, entry in packages.items():
                if name in SKIPPED_PACKAGES or not name.startswith(SPFX_PACKAGE_PREFIX):
                    continue
                if not isinstance(entry, str):
                    continue
                version = min_version(entry)
                if version is None or version == project_version:
                    continue
                occurrences.append(
                    Occurrence(
                        file=self.file,
                        resolution=f"{verb} {name}@{project.version}",
                        position=self.get_position(package_json, [section, name]),
                    )
                )
        self.add_finding_with_occurrences(findings, occurrences)


class NoDuplicateDepsRule(JsonRule):
    """FN021002: a package must not be listed in both dependencies and devDependencies."""

    id = "FN021002"
    title = "Duplicate dependency declaration"
    description = (
        "Package is declared both in dependencies and devDependencies. "
        "Keep it only in dependencies"
    )
    severity = Severity.RECOMMENDED
    resolution_type = ResolutionType.CMD
    file = "./package.json"

    def visit(self, project: "Project", findings: list[Finding]) -> None:
        package_json = project.package_json
        if package_json is None:
            return
        dependencies = package_json.get("dependencies")
        dev_dependencies = package_json.get("devDependencies")
        if not isinstance(dependencies, dict) or not isinstance(dev_dependencies, dict):
            return

        occurrences = [
            Occurrence(
                file=self.file,
                resolution=f"{VERB_UNINSTALL_DEV} {name}",
                position=self.get_position(package_json, ["devDependencies", name]),
            )
            for name in dev_dependencies
            if name in dependencies
        ]
        self.add_finding_with_occurrences(findings, occurrences)
