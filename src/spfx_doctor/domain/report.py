"""
Post-processing of the findings a run produced.

remove_superseded -> flatten -> template_commands -> build_report_data.
Every step returns new values; the input lists are left as they were.
"""

import dataclasses
import json
import logging
from typing import Any

from spfx_doctor.domain.entities import (
    Finding,
    FindingToReport,
    ReportData,
    ReportDataModification,
    ResolutionType,
)
from spfx_doctor.domain.package_manager import (
    DEFAULT_PACKAGE_MANAGER,
    PackageBuckets,
    PackageManager,
    map_command,
    reduce_commands,
    template_resolution,
)

logger = logging.getLogger(__name__)

NPM_DEDUPE_ID = "FN017001"


def remove_superseded(findings: list[Finding]) -> list[Finding]:
    """
    Drop findings made redundant by another finding.

    Findings are processed in list order. A finding that is still present
    removes, for every code in its supersedes list, the first finding with
    that id. A finding removed earlier in the pass no longer removes
    anything, so supersession is not transitive.
    """
    remaining = list(findings)
    for finding in findings:
        if not finding.supersedes:
            continue
        if not any(f is finding for f in remaining):
            continue
        for code in finding.supersedes:
            for index, candidate in enumerate(remaining):
                if candidate.id == code:
                    logger.debug("%s supersedes %s", finding.id, code)
                    del remaining[index]
                    break
    return remaining


def flatten(findings: list[Finding]) -> list[FindingToReport]:
    """One record per occurrence, in finding then occurrence order."""
    return [
        FindingToReport(
            id=f.id,
            title=f.title,
            description=f.description,
            severity=f.severity,
            resolution=o.resolution,
            resolution_type=f.resolution_type,
            file=o.file,
            position=o.position,
        )
        for f in findings
        for o in f.occurrences
    ]


def template_commands(records: list[FindingToReport], package_manager: PackageManager) -> list[FindingToReport]:
    """Rewrite abstract verbs in resolutions to the dialect's command fragments."""
    return [
        dataclasses.replace(r, resolution=template_resolution(r.resolution, package_manager))
        for r in records
    ]


def _parse_modification(resolution: str) -> Any:
    try:
        return json.loads(resolution)
    except ValueError:
        return resolution


def build_report_data(records: list[FindingToReport], package_manager: PackageManager) -> ReportData:
    """
    Aggregate templated records into consolidated commands.

    Package operations are merged into one command per bucket. For npm, the
    dedupe resolution is appended as the final step when that finding is
    present. JSON resolutions are grouped per file.
    """
    buckets = PackageBuckets()
    modification_per_file: dict[str, list[ReportDataModification]] = {}

    for record in records:
        map_command(record.resolution, buckets, package_manager)
        if record.resolution_type == ResolutionType.JSON:
            modification_per_file.setdefault(record.file, []).append(
                ReportDataModification(
                    file=record.file,
                    description=record.description,
                    modification=_parse_modification(record.resolution),
                )
            )

    package_manager_commands = reduce_commands(buckets, package_manager)

    if package_manager == DEFAULT_PACKAGE_MANAGER:
        dedupe = next((r for r in records if r.id == NPM_DEDUPE_ID), None)
        if dedupe is not None:
            package_manager_commands.append(dedupe.resolution)

    return ReportData(
        package_manager_commands=package_manager_commands,
        modification_per_file=modification_per_file,
    )
