"""Unit tests for the npm dedupe rule (FN017001)."""

from typing import Optional

from spfx_doctor.domain.entities import Finding, ResolutionType
from spfx_doctor.domain.rules.npm_dedupe import NpmDedupeRule
from tests.doctor_test_utils import make_project

PACKAGE_JSON = {"name": "app", "dependencies": {}}


def _visit(lock: Optional[dict]) -> list[Finding]:
    documents: dict = {"package_json": PACKAGE_JSON}
    if lock is not None:
        documents["package_lock_json"] = lock
    findings: list[Finding] = []
    NpmDedupeRule().visit(make_project("1.21.0", **documents), findings)
    return findings


def test_no_lock_file() -> None:
    assert _visit(None) == []


def test_clean_lock_file() -> None:
    lock = {"packages": {
        "": {"name": "app"},
        "node_modules/tslib": {"version": "2.6.2"},
        "node_modules/a/node_modules/tslib": {"version": "1.14.1"},
    }}
    assert _visit(lock) == []


def test_nested_copy_of_hoisted_version() -> None:
    lock = {"packages": {
        "node_modules/tslib": {"version": "2.6.2"},
        "node_modules/@scope/a/node_modules/tslib": {"version": "2.6.2"},
    }}
    findings = _visit(lock)
    assert len(findings) == 1
    assert findings[0].id == "FN017001"
    assert findings[0].resolution_type == ResolutionType.CMD
    assert findings[0].occurrences[0].resolution == "npm dedupe"


def test_extraneous_entry() -> None:
    lock = {"packages": {"node_modules/left-pad": {"version": "1.3.0", "extraneous": True}}}
    assert len(_visit(lock)) == 1


def test_find_redundant_entries_handles_scoped_names() -> None:
    packages = {
        "node_modules/@types/react": {"version": "17.0.45"},
        "node_modules/x/node_modules/@types/react": {"version": "17.0.45"},
    }
    assert NpmDedupeRule().find_redundant_entries(packages) == ["node_modules/x/node_modules/@types/react"]
