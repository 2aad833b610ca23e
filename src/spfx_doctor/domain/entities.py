from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ResolutionType(Enum):
    """How a finding is meant to be resolved."""
    CMD = "cmd"
    JSON = "json"
    NONE = ""


class Severity:
    """Severity tiers used by the rule catalog."""
    REQUIRED = "Required"
    RECOMMENDED = "Recommended"
    OPTIONAL = "Optional"


@dataclass(frozen=True)
class Position:
    """1-based line and character inside a configuration file."""
    line: int
    character: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Occurrence:
    """A single file (+ optional position) at which a rule was violated."""
    file: str
    resolution: str
    position: Optional[Position] = None


@dataclass(frozen=True)
class Finding:
    """
    Output of one rule evaluated against a project.

    Copies the rule's descriptive metadata. The id always equals the code
    of the rule that produced it. A finding is only ever created with at
    least one occurrence.
    """
    id: str
    title: str
    description: str
    severity: str
    resolution_type: ResolutionType
    occurrences: list[Occurrence] = field(default_factory=list)
    supersedes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FindingToReport:
    """Flattened, one-occurrence-per-record projection of a Finding."""
    id: str
    title: str
    description: str
    severity: str
    resolution: str
    resolution_type: ResolutionType
    file: str
    position: Optional[Position] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the raw (json) output."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "resolution": self.resolution,
            "resolutionType": self.resolution_type.value,
            "file": self.file,
            "position": self.position.to_dict() if self.position else None,
        }


@dataclass(frozen=True)
class ReportDataModification:
    """A structured JSON modification to apply to one file."""
    file: str
    description: str
    modification: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "description": self.description,
            "modification": self.modification,
        }


@dataclass(frozen=True)
class ReportData:
    """
    Aggregate derived from flattened findings.

    package_manager_commands holds one consolidated command per operation
    bucket (plus the dedupe step for npm). modification_per_file groups the
    JSON snippets of json-kind findings by the file they target.
    """
    package_manager_commands: list[str] = field(default_factory=list)
    modification_per_file: dict[str, list[ReportDataModification]] = field(default_factory=dict)


@dataclass(frozen=True)
class FindingTourStep:
    """One step of a CodeTour walkthrough."""
    file: str
    title: str
    description: str
    line: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        step: dict[str, Any] = {
            "file": self.file,
            "title": self.title,
            "description": self.description,
        }
        if self.line is not None:
            step["line"] = self.line
        return step


@dataclass(frozen=True)
class FindingTour:
    """CodeTour document: a title and an ordered list of steps."""
    title: str
    steps: list[FindingTourStep] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "steps": [s.to_dict() for s in self.steps],
        }
