"""Unit tests for supersession, flattening, templating and report aggregation."""

from spfx_doctor.domain.entities import Finding, Occurrence, Position, ResolutionType, Severity
from spfx_doctor.domain.package_manager import PackageManager
from spfx_doctor.domain.report import (
    build_report_data,
    flatten,
    remove_superseded,
    template_commands,
)
from tests.doctor_test_utils import make_finding


def _ids(findings: list[Finding]) -> list[str]:
    return [f.id for f in findings]


class TestRemoveSuperseded:
    """Single pass, in list order, against the current list state."""

    def test_superseding_finding_after_superseded(self) -> None:
        findings = [make_finding("FN021004"), make_finding("FN001001", supersedes=["FN021004"])]
        assert _ids(remove_superseded(findings)) == ["FN001001"]

    def test_superseding_finding_before_superseded(self) -> None:
        findings = [make_finding("FN001001", supersedes=["FN021004"]), make_finding("FN021004")]
        assert _ids(remove_superseded(findings)) == ["FN001001"]

    def test_missing_superseded_code_is_ignored(self) -> None:
        findings = [make_finding("FN001001", supersedes=["FN021004"])]
        assert _ids(remove_superseded(findings)) == ["FN001001"]

    def test_only_first_match_is_removed(self) -> None:
        findings = [make_finding("B"), make_finding("B"), make_finding("A", supersedes=["B"])]
        assert _ids(remove_superseded(findings)) == ["B", "A"]

    def test_not_transitive(self) -> None:
        # A removes B before B is processed, so B never removes C.
        findings = [
            make_finding("A", supersedes=["B"]),
            make_finding("B", supersedes=["C"]),
            make_finding("C"),
        ]
        assert _ids(remove_superseded(findings)) == ["A", "C"]

    def test_order_sensitive_when_superseded_processed_first(self) -> None:
        # B is processed first and removes C; A then removes B.
        findings = [
            make_finding("B", supersedes=["C"]),
            make_finding("C"),
            make_finding("A", supersedes=["B"]),
        ]
        assert _ids(remove_superseded(findings)) == ["A"]

    def test_input_list_is_not_modified(self) -> None:
        findings = [make_finding("FN021004"), make_finding("FN001001", supersedes=["FN021004"])]
        remove_superseded(findings)
        assert len(findings) == 2


class TestFlatten:
    def test_one_record_per_occurrence(self) -> None:
        finding = Finding(
            id="FN021001",
            title="SharePoint Framework dependencies versions",
            description="d",
            severity=Severity.REQUIRED,
            resolution_type=ResolutionType.CMD,
            occurrences=[
                Occurrence("./package.json", "install @microsoft/sp-webpart-base@1.21.0", Position(4, 5)),
                Occurrence("./package.json", "installDev @microsoft/sp-build-web@1.21.0", Position(9, 5)),
            ],
        )
        records = flatten([finding])
        assert [r.resolution for r in records] == [
            "install @microsoft/sp-webpart-base@1.21.0",
            "installDev @microsoft/sp-build-web@1.21.0",
        ]
        assert records[1].position == Position(9, 5)
        assert all(r.id == "FN021001" for r in records)


class TestTemplateCommands:
    def test_rewrites_verbs_without_touching_input(self) -> None:
        records = flatten([make_finding("FN002004", "installDev gulp@4.0.2")])
        templated = template_commands(records, PackageManager.PNPM)
        assert templated[0].resolution == "pnpm i -DE gulp@4.0.2"
        assert records[0].resolution == "installDev gulp@4.0.2"


class TestBuildReportData:
    def test_two_dependency_additions_become_one_command(self) -> None:
        records = template_commands(
            flatten([make_finding("FN001008", "install react@17.0.1"), make_finding("FN001009", "install react-dom@17.0.1")]),
            PackageManager.NPM,
        )
        data = build_report_data(records, PackageManager.NPM)
        assert data.package_manager_commands == ["npm i -SE react@17.0.1 react-dom@17.0.1"]

    def test_dedupe_is_appended_last_for_npm(self) -> None:
        records = template_commands(
            flatten([make_finding("FN017001", "npm dedupe"), make_finding("FN002004", "installDev gulp@4.0.2")]),
            PackageManager.NPM,
        )
        data = build_report_data(records, PackageManager.NPM)
        assert data.package_manager_commands == ["npm i -DE gulp@4.0.2", "npm dedupe"]

    def test_dedupe_is_ignored_for_other_dialects(self) -> None:
        records = flatten([make_finding("FN017001", "npm dedupe")])
        assert build_report_data(records, PackageManager.YARN).package_manager_commands == []

    def test_json_modifications_grouped_per_file(self) -> None:
        records = flatten([
            make_finding("FN012017", '{\n  "extends": "x"\n}', resolution_type=ResolutionType.JSON, file="./tsconfig.json"),
            make_finding("FN021003", '{"engines": {"node": ">=22"}}', resolution_type=ResolutionType.JSON),
        ])
        data = build_report_data(records, PackageManager.NPM)
        assert set(data.modification_per_file) == {"./tsconfig.json", "./package.json"}
        assert data.modification_per_file["./tsconfig.json"][0].modification == {"extends": "x"}
        assert data.package_manager_commands == []
