"""Output renderers: raw json, text script, markdown report and CodeTour tour."""

import json
from datetime import date
from pathlib import PurePath
from typing import TYPE_CHECKING, Callable

from spfx_doctor.domain.config import (
    DEFAULT_TOUR_PATH,
    OUTPUT_JSON,
    OUTPUT_MD,
    OUTPUT_TEXT,
    OUTPUT_TOUR,
    SUPPORTED_OUTPUTS,
)
from spfx_doctor.domain.entities import (
    FindingToReport,
    FindingTour,
    FindingTourStep,
    ResolutionType,
)
from spfx_doctor.domain.package_manager import PackageManager
from spfx_doctor.domain.protocols import ReporterProtocol
from spfx_doctor.domain.report import build_report_data

if TYPE_CHECKING:
    from spfx_doctor.domain.project import Project

NO_ISSUES_MESSAGE = "✅ spfx-doctor has found no issues in your project"
EOL = "\n"
# CodeTour renders step descriptions as markdown and expects CRLF line breaks
TOUR_EOL = "\r\n"


def project_title(project: "Project") -> str:
    """Solution name from package-solution.json, else the project folder name."""
    return project.solution_name or PurePath(project.path).name


class RawReporter(ReporterProtocol):
    """The flattened records, verbatim, as a JSON array."""

    def render(self, project: "Project", findings: list[FindingToReport], package_manager: PackageManager) -> str:
        return json.dumps([f.to_dict() for f in findings], indent=2, ensure_ascii=False)


class TextReporter(ReporterProtocol):
    """Only the consolidated command script, one command per line."""

    def render(self, project: "Project", findings: list[FindingToReport], package_manager: PackageManager) -> str:
        if not findings:
            return NO_ISSUES_MESSAGE

        report_data = build_report_data(findings, package_manager)
        lines = [
            "Execute in command line",
            "-----------------------",
            *report_data.package_manager_commands,
        ]
        return EOL.join(lines).strip()


class MarkdownReporter(ReporterProtocol):
    """One section per finding followed by the consolidated script."""

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def render_finding(self, finding: FindingToReport) -> str:
        resolution = ""
        if finding.resolution_type == ResolutionType.CMD:
            resolution = f"Execute the following command:{EOL}{EOL}```sh{EOL}{finding.resolution}{EOL}```{EOL}"
        location = finding.file
        if finding.position is not None:
            location += f":{finding.position.line}:{finding.position.character}"
        return "".join([
            f"### {finding.id} {finding.title} | {finding.severity}", EOL,
            EOL,
            finding.description, EOL,
            EOL,
            resolution,
            EOL,
            f"File: [{location}]({finding.file})", EOL,
            EOL,
        ])

    def render(self, project: "Project", findings: list[FindingToReport], package_manager: PackageManager) -> str:
        parts = [
            f"# Validate project {project_title(project)}", EOL,
            EOL,
            f"Date: {self._today().isoformat()}", EOL,
            EOL,
            "## Findings", EOL,
            EOL,
        ]

        if not findings:
            parts += [NO_ISSUES_MESSAGE, EOL]
            return "".join(parts).strip()

        report_data = build_report_data(findings, package_manager)
        parts += [
            "Following is the list of issues found in your project. "
            "[Summary](#Summary) of the recommended fixes is included at the end of the report.", EOL,
            EOL,
            "".join(self.render_finding(f) for f in findings),
            "## Summary", EOL,
            EOL,
            "### Execute script", EOL,
            EOL,
            "```sh", EOL,
            EOL.join(report_data.package_manager_commands), EOL,
            "```", EOL,
            EOL,
        ]
        return "".join(parts).strip()


class TourReporter(ReporterProtocol):
    """
    CodeTour walkthrough: one step per record plus a final clean-up step.

    Files are made relative to the project root the way CodeTour expects:
    no ./ segments and forward slashes only. Steps without a position open
    at line 1.
    """

    def __init__(self, tour_path: str = DEFAULT_TOUR_PATH) -> None:
        self.tour_path = tour_path

    @staticmethod
    def normalize_file(file: str) -> str:
        return file.replace("./", "").replace("\\", "/")

    @staticmethod
    def command_link(command: str) -> str:
        """Markdown link that sends command to the terminal; the argument is a JSON array."""
        return f"[`{command}`](command:codetour.sendTextToTerminal?{json.dumps([command], ensure_ascii=False)})"

    def build_step(self, finding: FindingToReport) -> FindingTourStep:
        resolution = ""
        if finding.resolution_type == ResolutionType.CMD:
            resolution = f"Execute the following command:{TOUR_EOL}{TOUR_EOL}{self.command_link(finding.resolution)}"
        severity = finding.severity.upper()
        line = finding.position.line if finding.position is not None and finding.position.line else 1
        return FindingTourStep(
            file=self.normalize_file(finding.file),
            title=f"{severity}: {finding.title} ({finding.id})",
            description=f"### {severity}{TOUR_EOL}{TOUR_EOL}{finding.description}{TOUR_EOL}{TOUR_EOL}{resolution}",
            line=line,
        )

    def build_tour(self, project: "Project", findings: list[FindingToReport]) -> FindingTour:
        steps = [self.build_step(f) for f in findings]
        steps.append(
            FindingTourStep(
                file=self.normalize_file(self.tour_path),
                title="RECOMMENDED: Delete tour",
                description=(
                    f"### THAT'S IT!!!{TOUR_EOL}"
                    "Once you have tested that your project has no more issues, you can delete the "
                    "`.tour` folder and its contents. Otherwise, you'll be prompted to launch this "
                    "CodeTour every time you open this project."
                ),
            )
        )
        return FindingTour(title=f"Validate project {project_title(project)}", steps=steps)

    def render(self, project: "Project", findings: list[FindingToReport], package_manager: PackageManager) -> str:
        return json.dumps(self.build_tour(project, findings).to_dict(), indent=2, ensure_ascii=False)


def create_reporter(output: str, tour_path: str = DEFAULT_TOUR_PATH) -> ReporterProtocol:
    """Reporter for one output mode. ValueError for an unknown mode."""
    if output == OUTPUT_JSON:
        return RawReporter()
    if output == OUTPUT_TEXT:
        return TextReporter()
    if output == OUTPUT_MD:
        return MarkdownReporter()
    if output == OUTPUT_TOUR:
        return TourReporter(tour_path)
    raise ValueError(f"{output} is not a supported output. Supported outputs are {', '.join(SUPPORTED_OUTPUTS)}")
