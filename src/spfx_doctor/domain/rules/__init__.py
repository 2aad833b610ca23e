"""Domain models for rules: the base Rule and its shared finding helpers."""

from typing import TYPE_CHECKING, Optional

from spfx_doctor.domain.entities import (
    Finding,
    Occurrence,
    Position,
    ResolutionType,
    Severity,
)

if TYPE_CHECKING:
    from spfx_doctor.domain.project import Project

__all__ = [
    "Rule",
]


class Rule:
    """
    The fundamental unit of project validation.

    A rule inspects the configuration surfaces it cares about and, when the
    project does not comply, appends exactly one Finding to the shared list.
    Rules never modify the project and keep no state between visits.

    Subclasses provide the descriptive attributes (id, title, description,
    severity, resolution, resolution_type, file) either as class attributes
    or properties, and implement visit().
    """

    id: str = ""
    title: str = ""
    description: str = ""
    severity: str = Severity.REQUIRED
    resolution: str = ""
    resolution_type: ResolutionType = ResolutionType.NONE
    file: str = ""

    @property
    def supersedes(self) -> list[str]:
        """Codes of findings this rule's finding makes redundant."""
        return []

    def visit(self, project: "Project", findings: list[Finding]) -> None:
        """Inspect project and append a Finding to findings on violation."""
        raise NotImplementedError

    def add_finding(self, findings: list[Finding]) -> None:
        """Record a violation located at the rule's file, without position."""
        self.add_finding_with_occurrences(
            findings, [Occurrence(file=self.file, resolution=self.resolution)])

    def add_finding_with_position(self, findings: list[Finding], position: Optional[Position]) -> None:
        self.add_finding_with_occurrences(
            findings,
            [Occurrence(file=self.file, resolution=self.resolution, position=position)],
        )

    def add_finding_with_occurrences(self, findings: list[Finding], occurrences: list[Occurrence]) -> None:
        # A finding without a concrete location is never emitted.
        if not occurrences:
            return
        findings.append(
            Finding(
                id=self.id,
                title=self.title,
                description=self.description,
                severity=self.severity,
                resolution_type=self.resolution_type,
                occurrences=list(occurrences),
                supersedes=list(self.supersedes),
            )
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"
