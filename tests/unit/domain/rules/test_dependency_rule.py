"""Unit tests for DependencyRule."""

import unittest

from spfx_doctor.domain.entities import Finding, Position, ResolutionType, Severity
from spfx_doctor.domain.rules.dependency_rule import DependencyRule
from tests.doctor_test_utils import make_project


def _visit(rule: DependencyRule, package_json: dict) -> list[Finding]:
    findings: list[Finding] = []
    rule.visit(make_project("1.21.0", package_json=package_json), findings)
    return findings


class TestDependencyRule(unittest.TestCase):
    """Violation conditions and the finding it records."""

    def test_compliant_dependency_has_no_finding(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1")
        self.assertEqual(_visit(rule, {"dependencies": {"react": "17.0.1"}}), [])

    def test_wrong_version_is_reported_at_the_dependency(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1")
        findings = _visit(rule, {"dependencies": {"react": "16.13.1"}})

        self.assertEqual(len(findings), 1)
        finding = findings[0]
        self.assertEqual(finding.id, "FN001008")
        self.assertEqual(finding.title, "react")
        self.assertEqual(finding.severity, Severity.REQUIRED)
        self.assertEqual(finding.resolution_type, ResolutionType.CMD)
        self.assertEqual(finding.occurrences[0].resolution, "install react@17.0.1")
        self.assertEqual(finding.occurrences[0].position, Position(line=3, character=5))

    def test_range_satisfied_by_caret_entry(self) -> None:
        rule = DependencyRule("FN021004", "@microsoft/sp-core-library", ">=1.0.0")
        self.assertEqual(_visit(rule, {"dependencies": {"@microsoft/sp-core-library": "^1.21.0"}}), [])

    def test_missing_required_dependency_is_reported_at_section(self) -> None:
        rule = DependencyRule("FN002004", "gulp", "4.0.2", is_dev_dep=True)
        findings = _visit(rule, {"devDependencies": {"typescript": "5.3.3"}})

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].occurrences[0].resolution, "installDev gulp@4.0.2")
        self.assertEqual(findings[0].occurrences[0].position, Position(line=2, character=3))
        self.assertIn("dev dependency package gulp", findings[0].description)

    def test_missing_section_falls_back_to_document_start(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1")
        findings = _visit(rule, {"name": "app"})
        self.assertEqual(findings[0].occurrences[0].position, Position(line=1, character=1))

    def test_add_false_does_not_fire_on_absence(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1", add=False)
        self.assertEqual(_visit(rule, {"dependencies": {}}), [])

    def test_add_false_still_corrects_wrong_version(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1", add=False)
        self.assertEqual(len(_visit(rule, {"dependencies": {"react": "16.0.0"}})), 1)

    def test_optional_dependency_does_not_fire_on_absence(self) -> None:
        rule = DependencyRule("FN002024", "eslint", "8.57.1", is_dev_dep=True, is_optional=True)
        self.assertEqual(_visit(rule, {"devDependencies": {}}), [])
        self.assertEqual(rule.severity, Severity.OPTIONAL)

    def test_unjudgeable_entry_is_accepted(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1")
        self.assertEqual(_visit(rule, {"dependencies": {"react": "latest"}}), [])

    def test_range_resolution_is_quoted(self) -> None:
        rule = DependencyRule("FN002013", "@types/webpack-env", ">=1.12.1 <1.14.0", is_dev_dep=True)
        self.assertEqual(rule.resolution, 'installDev "@types/webpack-env@>=1.12.1 <1.14.0"')

    def test_no_package_json_is_skipped(self) -> None:
        rule = DependencyRule("FN001008", "react", "17.0.1")
        findings: list[Finding] = []
        rule.visit(make_project("1.21.0"), findings)
        self.assertEqual(findings, [])

    def test_supersedes_is_copied_to_finding(self) -> None:
        rule = DependencyRule("FN001001", "@microsoft/sp-core-library", "1.21.0", supersedes=["FN021004"])
        findings = _visit(rule, {"dependencies": {}})
        self.assertEqual(findings[0].supersedes, ["FN021004"])
