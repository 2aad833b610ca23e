"""Unit tests for JsonPropertyRule."""

import json

import pytest

from spfx_doctor.domain.entities import Finding, Position, ResolutionType, Severity
from spfx_doctor.domain.rules.json_rule import JsonPropertyRule, build_snippet
from tests.doctor_test_utils import make_project

EXTENDS = "./node_modules/@microsoft/rush-stack-compiler-5.3/includes/tsconfig-web.json"


def _extends_rule(expected: object = EXTENDS) -> JsonPropertyRule:
    return JsonPropertyRule(
        rule_id="FN012017",
        document_key="tsconfig_json",
        file="./tsconfig.json",
        property_path="extends",
        expected=expected,
        title="tsconfig.json extends property",
        description="Update tsconfig.json extends property",
    )


def _visit(rule: JsonPropertyRule, **documents: object) -> list[Finding]:
    findings: list[Finding] = []
    rule.visit(make_project("1.21.0", **documents), findings)
    return findings


class TestJsonPropertyRule:
    """Expected values, predicates and reported positions."""

    def test_matching_value(self) -> None:
        assert _visit(_extends_rule(), tsconfig_json={"extends": EXTENDS}) == []

    def test_different_value_points_at_property(self) -> None:
        findings = _visit(
            _extends_rule(),
            tsconfig_json={"compilerOptions": {}, "extends": "./old.json"},
        )
        assert len(findings) == 1
        assert findings[0].resolution_type == ResolutionType.JSON
        assert findings[0].occurrences[0].position == Position(line=3, character=3)
        assert json.loads(findings[0].occurrences[0].resolution) == {"extends": EXTENDS}

    def test_absent_property_points_at_document_start(self) -> None:
        findings = _visit(_extends_rule(), tsconfig_json={"compilerOptions": {}})
        assert findings[0].occurrences[0].position == Position(line=1, character=1)

    def test_type_mismatch_is_a_violation(self) -> None:
        rule = JsonPropertyRule(
            "FN000001", "package_json", "./package.json", "private", True, "private", "Set private")
        assert _visit(rule, package_json={"private": 1}) != []
        assert _visit(rule, package_json={"private": True}) == []

    def test_structural_snippet(self) -> None:
        expected = {"node": ">=22.14.0 < 23.0.0"}
        rule = JsonPropertyRule(
            "FN021003", "package_json", "./package.json", "engines", expected, "engines", "Update engines")
        assert _visit(rule, package_json={"engines": expected}) == []
        assert len(_visit(rule, package_json={"engines": {"node": ">=18"}})) == 1

    def test_predicate_with_resolution(self) -> None:
        rule = JsonPropertyRule(
            "FN010010", "yo_rc_json", "./.yo-rc.json", ["@microsoft/generator-sharepoint", "version"],
            lambda v: isinstance(v, str) and bool(v), "version", "Record version",
            severity=Severity.RECOMMENDED, resolution="Add the version",
        )
        assert rule.resolution_type == ResolutionType.NONE
        assert _visit(rule, yo_rc_json={"@microsoft/generator-sharepoint": {"version": "1.21.0"}}) == []
        findings = _visit(rule, yo_rc_json={"@microsoft/generator-sharepoint": {}})
        assert findings[0].occurrences[0].resolution == "Add the version"
        assert findings[0].occurrences[0].position == Position(line=2, character=3)

    def test_predicate_requires_resolution(self) -> None:
        with pytest.raises(ValueError):
            JsonPropertyRule("FN1", "package_json", "./package.json", "x", bool, "t", "d")

    def test_absent_document_is_skipped(self) -> None:
        assert _visit(_extends_rule()) == []


def test_build_snippet_nests_value() -> None:
    assert json.loads(build_snippet("engines.node", ">=22")) == {"engines": {"node": ">=22"}}
