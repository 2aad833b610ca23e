"""Rules that check properties inside JSON configuration documents."""

import json
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

from spfx_doctor.domain.entities import Finding, Position, ResolutionType, Severity
from spfx_doctor.domain.project import JsonDocument, PropertyPath, split_property_path
from spfx_doctor.domain.rules import Rule

if TYPE_CHECKING:
    from spfx_doctor.domain.project import Project

Expected = Union[Any, Callable[[Any], bool]]

_MISSING = object()


class JsonRule(Rule):
    """Base for rules that report positions inside a JSON document."""

    def get_position(self, document: Optional[JsonDocument], property_path: PropertyPath) -> Optional[Position]:
        if document is None:
            return None
        return document.locate(property_path)


def build_snippet(property_path: PropertyPath, value: Any) -> str:
    """Nest value under property_path: ('a.b', 1) -> '{"a": {"b": 1}}' (indented)."""
    nested: Any = value
    for segment in reversed(split_property_path(property_path)):
        nested = {segment: nested}
    return json.dumps(nested, indent=2)


class JsonPropertyRule(JsonRule):
    """
    Checks that a property inside one named document has the expected value.

    expected may be a scalar, a structural snippet (dict/list) compared for
    equality, or a predicate called with the current value. A violation is
    recorded when the property is absent, has a different type, or differs
    from expected. The occurrence points at the current location of the
    property (or its deepest existing parent).
    """

    def __init__(
        self,
        rule_id: str,
        document_key: str,
        file: str,
        property_path: Union[str, Sequence[str]],
        expected: Expected,
        title: str,
        description: str,
        severity: str = Severity.REQUIRED,
        resolution: Optional[str] = None,
        supersedes: Optional[list[str]] = None,
    ) -> None:
        if resolution is None and callable(expected):
            raise ValueError(f"{rule_id}: predicate rules need an explicit resolution")
        self.id = rule_id
        self.document_key = document_key
        self.file = file
        self.property_path = property_path
        self.expected = expected
        self.title = title
        self.description = description
        self.severity = severity
        self._supersedes = list(supersedes or [])
        if resolution is None:
            self.resolution = build_snippet(property_path, expected)
            self.resolution_type = ResolutionType.JSON
        else:
            self.resolution = resolution
            self.resolution_type = ResolutionType.NONE

    @property
    def supersedes(self) -> list[str]:
        return self._supersedes

    def is_satisfied(self, value: Any) -> bool:
        if value is _MISSING:
            return False
        if callable(self.expected):
            return bool(self.expected(value))
        # bool is an int subclass; compare exact types so True != 1
        if type(value) is not type(self.expected):
            return False
        return value == self.expected

    def visit(self, project: "Project", findings: list[Finding]) -> None:
        document = project.document(self.document_key)
        if document is None:
            return
        value = document.get(self.property_path, _MISSING)
        if self.is_satisfied(value):
            return
        self.add_finding_with_position(findings, self.get_position(document, self.property_path))
