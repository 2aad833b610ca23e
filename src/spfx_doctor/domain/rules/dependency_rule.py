"""Rules that check a package.json dependency against a target version or range."""

from typing import TYPE_CHECKING, Optional

from spfx_doctor.domain.entities import Finding, ResolutionType, Severity
from spfx_doctor.domain.package_manager import VERB_INSTALL, VERB_INSTALL_DEV
from spfx_doctor.domain.rules.json_rule import JsonRule
from spfx_doctor.domain.semver import min_version, satisfies

if TYPE_CHECKING:
    from spfx_doctor.domain.project import Project


class DependencyRule(JsonRule):
    """
    Checks one package in dependencies (or devDependencies).

    Fires when the package is missing and the rule is required and allowed
    to add it, or when the referenced version does not satisfy
    package_version. With add=False a missing package is never reported:
    the rule only corrects a package the project already references.
    """

    resolution_type = ResolutionType.CMD
    file = "./package.json"

    def __init__(
        self,
        rule_id: str,
        package_name: str,
        package_version: str,
        is_dev_dep: bool = False,
        is_optional: bool = False,
        add: bool = True,
        supersedes: Optional[list[str]] = None,
    ) -> None:
        self.id = rule_id
        self.package_name = package_name
        self.package_version = package_version
        self.is_dev_dep = is_dev_dep
        self.is_optional = is_optional
        self.add = add
        self._supersedes = list(supersedes or [])

    @property
    def supersedes(self) -> list[str]:
        return self._supersedes

    @property
    def title(self) -> str:
        return self.package_name

    @property
    def description(self) -> str:
        dev = "dev " if self.is_dev_dep else ""
        return f"Install SharePoint Framework {dev}dependency package {self.package_name}"

    @property
    def severity(self) -> str:
        return Severity.OPTIONAL if self.is_optional else Severity.REQUIRED

    @property
    def section(self) -> str:
        return "devDependencies" if self.is_dev_dep else "dependencies"

    @property
    def resolution(self) -> str:
        verb = VERB_INSTALL_DEV if self.is_dev_dep else VERB_INSTALL
        spec = f"{self.package_name}@{self.package_version}"
        # ranges like '>=1.12.1 <1.14.0' must stay one shell word
        if any(c.isspace() for c in spec):
            spec = f'"{spec}"'
        return f"{verb} {spec}"

    def is_version_ok(self, version_entry: str) -> bool:
        version = min_version(version_entry)
        if version is None:
            # tags, URLs and workspace references can't be judged
            return True
        return satisfies(version, self.package_version)

    def visit(self, project: "Project", findings: list[Finding]) -> None:
        package_json = project.package_json
        if package_json is None:
            return

        dependencies = package_json.get(self.section)
        version_entry = dependencies.get(self.package_name) if isinstance(dependencies, dict) else None

        if version_entry is None:
            if not self.add or self.is_optional:
                return
            position = self.get_position(package_json, [self.section])
            self.add_finding_with_position(findings, position)
            return

        if isinstance(version_entry, str) and self.is_version_ok(version_entry):
            return
        position = self.get_position(package_json, [self.section, self.package_name])
        self.add_finding_with_position(findings, position)
