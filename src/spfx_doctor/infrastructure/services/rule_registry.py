"""RuleRegistryService: loads the rule registry and builds catalogued rules by code."""

from pathlib import Path
from typing import Any, Optional, cast

import yaml

from spfx_doctor.domain.entities import Severity
from spfx_doctor.domain.protocols import RuleFactoryProtocol
from spfx_doctor.domain.registry_types import RuleRegistryEntry
from spfx_doctor.domain.rules import Rule
from spfx_doctor.domain.rules.dependency_rule import DependencyRule
from spfx_doctor.domain.rules.json_rule import JsonPropertyRule

KIND_DEPENDENCY = "dependency"
KIND_JSON = "json"


class RuleRegistryService(RuleFactoryProtocol):
    """Loads rule_registry.yaml and builds DependencyRule / JsonPropertyRule instances from it."""

    def __init__(self, registry_path: Optional[str] = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self._registry = (
            cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
        )

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, code: str, kind: str) -> RuleRegistryEntry:
        """Registry entry for code. KeyError when unknown or registered with another kind."""
        entry = self._registry.get(code)
        if entry is None:
            raise KeyError(f"Rule {code} is not registered")
        if entry.get("kind") != kind:
            raise KeyError(f"Rule {code} is not a {kind} rule")
        return entry

    def dependency(
        self,
        code: str,
        package_version: str,
        add: bool = True,
        supersedes: Optional[list[str]] = None,
    ) -> Rule:
        entry = self.get_entry(code, KIND_DEPENDENCY)
        return DependencyRule(
            rule_id=code,
            package_name=entry["package"],
            package_version=package_version,
            is_dev_dep=bool(entry.get("dev", False)),
            is_optional=bool(entry.get("optional", False)),
            add=add,
            supersedes=supersedes,
        )

    def json_property(
        self,
        code: str,
        expected: Any,
        supersedes: Optional[list[str]] = None,
    ) -> Rule:
        entry = self.get_entry(code, KIND_JSON)
        return JsonPropertyRule(
            rule_id=code,
            document_key=entry["document"],
            file=entry["file"],
            property_path=entry["path"],
            expected=expected,
            title=entry["title"],
            description=entry["description"],
            severity=entry.get("severity", Severity.REQUIRED),
            resolution=entry.get("resolution"),
            supersedes=supersedes,
        )
