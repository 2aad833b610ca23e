"""Use Case: Validate an SPFx project against the rules for its version."""

from dataclasses import dataclass, field

from spfx_doctor.domain.entities import Finding, FindingToReport
from spfx_doctor.domain.errors import NoProjectRoot
from spfx_doctor.domain.package_manager import PackageManager
from spfx_doctor.domain.project import Project
from spfx_doctor.domain.protocols import ProjectGatewayProtocol, TelemetryPort
from spfx_doctor.domain.report import flatten, remove_superseded, template_commands
from spfx_doctor.domain.rule_sets import RuleSetResolver


@dataclass(frozen=True)
class ValidationResult:
    """The project snapshot and its findings, ready for any of the renderers."""
    project: Project
    findings: list[Finding] = field(default_factory=list)
    records: list[FindingToReport] = field(default_factory=list)

    def has_findings(self) -> bool:
        return bool(self.records)


class ValidateProjectUseCase:
    """
    Orchestrate one doctor run.

    Root lookup, load, version detection and rule resolution all happen
    before the first rule is visited. Rules then run one after another
    against the same snapshot; an exception from any of them aborts the
    run unchanged.
    """

    def __init__(
        self,
        project_gateway: ProjectGatewayProtocol,
        rule_set_resolver: RuleSetResolver,
        telemetry: TelemetryPort,
    ) -> None:
        self.project_gateway = project_gateway
        self.rule_set_resolver = rule_set_resolver
        self.telemetry = telemetry

    def execute(self, start_path: str, package_manager: PackageManager) -> ValidationResult:
        """Validate the project containing start_path."""
        root = self.project_gateway.find_project_root(start_path)
        if root is None:
            raise NoProjectRoot(start_path)

        self.telemetry.step("Collecting project...")
        project = self.project_gateway.load(root)
        self.telemetry.debug(f"Collected project at {root}: {', '.join(sorted(project.documents))}")

        project = project.with_version(self.project_gateway.detect_version(project))
        rules = self.rule_set_resolver.resolve(project.version, package_manager)
        self.telemetry.step(f"Project built using SPFx v{project.version}")
        self.telemetry.debug(f"Running {len(rules)} rules")

        findings: list[Finding] = []
        for rule in rules:
            rule.visit(project, findings)

        findings = remove_superseded(findings)
        records = template_commands(flatten(findings), package_manager)
        return ValidationResult(project=project, findings=findings, records=records)
