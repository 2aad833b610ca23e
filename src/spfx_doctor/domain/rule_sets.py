"""
Version catalog and the rule sets that apply to each SPFx version.

VERSION_RULE_SETS is an explicit table from version string to a factory
function. Every factory receives the rule factory (which knows the rule
registry) and the version, and returns the version-specific rules in the
order they should run.
"""

from typing import Any, Callable, Mapping, Optional, Sequence

from spfx_doctor.domain.errors import (
    RuleSetLoadFailure,
    UnsupportedVersion,
    VersionNotDetected,
)
from spfx_doctor.domain.package_manager import DEFAULT_PACKAGE_MANAGER, PackageManager
from spfx_doctor.domain.protocols import RuleFactoryProtocol
from spfx_doctor.domain.rules import Rule
from spfx_doctor.domain.rules.npm_dedupe import NpmDedupeRule
from spfx_doctor.domain.rules.package_rules import (
    NoDuplicateDepsRule,
    SpfxDepsMatchProjectVersionRule,
)

RuleSetFactory = Callable[[RuleFactoryProtocol, str], list[Rule]]

SUPPORTED_VERSIONS: tuple[str, ...] = (
    "1.0.0",
    "1.0.1",
    "1.0.2",
    "1.1.0",
    "1.1.1",
    "1.1.3",
    "1.2.0",
    "1.3.0",
    "1.3.1",
    "1.3.2",
    "1.3.4",
    "1.4.0",
    "1.4.1",
    "1.5.0",
    "1.5.1",
    "1.6.0",
    "1.7.0",
    "1.7.1",
    "1.8.0",
    "1.8.1",
    "1.8.2",
    "1.9.1",
    "1.10.0",
    "1.11.0",
    "1.12.0",
    "1.12.1",
    "1.13.0",
    "1.13.1",
    "1.14.0",
    "1.15.0",
    "1.15.2",
    "1.16.0",
    "1.16.1",
    "1.17.0",
    "1.17.1",
    "1.17.2",
    "1.17.3",
    "1.17.4",
    "1.18.0",
    "1.18.1",
    "1.18.2",
    "1.19.0",
    "1.20.0",
    "1.21.0",
    "1.21.1",
)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def generic_rules(f: RuleFactoryProtocol) -> list[Rule]:
    """Version-independent structural checks, always active."""
    return [
        f.dependency("FN021004", ">=1.0.0"),
        NoDuplicateDepsRule(),
        f.json_property("FN010010", _has_text),
    ]


def _common(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        f.dependency("FN001001", version, supersedes=["FN021004"]),
        SpfxDepsMatchProjectVersionRule(),
        f.json_property("FN010001", version, supersedes=["FN010010"]),
    ]


def _tsconfig_extends(f: RuleFactoryProtocol, compiler: str) -> Rule:
    return f.json_property(
        "FN012017",
        f"./node_modules/@microsoft/rush-stack-compiler-{compiler}/includes/tsconfig-web.json",
    )


def _react(
    f: RuleFactoryProtocol,
    react: str,
    types_react: Optional[str] = None,
    types_react_dom: Optional[str] = None,
) -> list[Rule]:
    rules = [
        f.dependency("FN001008", react),
        f.dependency("FN001009", react),
    ]
    if types_react:
        rules.append(f.dependency("FN002015", types_react))
    if types_react_dom:
        rules.append(f.dependency("FN002016", types_react_dom))
    return rules


def _spfx_1_0(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        f.dependency("FN002004", "~3.9.1"),
        f.dependency("FN002013", ">=1.12.1 <1.14.0"),
        *_common(f, version),
    ]


def _spfx_1_1_3(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "15", "0.14", "0.14"),
        f.dependency("FN002004", "~3.9.1"),
        f.dependency("FN002013", ">=1.12.1 <1.14.0"),
        *_common(f, version),
    ]


def _spfx_1_4(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "15.6.2", "15.6.6", "15.5.6"),
        f.dependency("FN002004", "~3.9.1"),
        f.dependency("FN002013", ">=1.12.1 <1.14.0"),
        *_common(f, version),
    ]


def _spfx_1_7(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "16.3.2", "16.4.2", "16.0.5"),
        f.dependency("FN002004", "~3.9.1"),
        f.dependency("FN002013", "1.13.1"),
        *_common(f, version),
    ]


def _spfx_1_8(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "16.7.0", "16.7.22", "16.0.5"),
        f.dependency("FN002004", "~3.9.1"),
        f.dependency("FN002013", "1.13.1"),
        f.dependency("FN002012", "^0.4.0"),
        _tsconfig_extends(f, "2.7"),
        *_common(f, version),
    ]


def _spfx_1_10(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "16.8.5", "16.8.8", "16.8.3"),
        f.dependency("FN002004", "~3.9.1"),
        f.dependency("FN002013", "1.13.1"),
        f.dependency("FN002014", "^0.7.0"),
        _tsconfig_extends(f, "2.9"),
        *_common(f, version),
    ]


def _spfx_1_12(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "16.9.0", "16.9.36", "16.9.8"),
        f.dependency("FN002004", "~4.0.2"),
        f.dependency("FN002013", "1.13.1"),
        f.dependency("FN002017", "^0.4.0"),
        _tsconfig_extends(f, "3.3"),
        *_common(f, version),
    ]


def _spfx_1_15(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "16.13.1", "16.9.51", "16.9.8"),
        f.dependency("FN002004", "~4.0.2"),
        f.dependency("FN002013", "1.13.1"),
        f.dependency("FN002018", "^0.2.3"),
        _tsconfig_extends(f, "3.7"),
        *_common(f, version),
    ]


def _spfx_1_17(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "17.0.1", "17.0.45", "17.0.17"),
        f.dependency("FN002004", "~4.0.2"),
        f.dependency("FN002013", "~1.15.2"),
        f.dependency("FN002019", "^0.4.47"),
        f.dependency("FN002024", "8.7.1"),
        _tsconfig_extends(f, "3.9"),
        *_common(f, version),
    ]


def _spfx_1_18(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "17.0.1", "17.0.45", "17.0.17"),
        f.dependency("FN002004", "~4.0.2"),
        f.dependency("FN002013", "~1.15.2"),
        f.dependency("FN002020", "^0.4.0"),
        f.dependency("FN002024", "8.7.1"),
        f.dependency("FN002022", "4.5.5"),
        _tsconfig_extends(f, "4.5"),
        f.json_property("FN021003", ">=16.13.0 <17.0.0"),
        *_common(f, version),
    ]


def _spfx_1_19(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "17.0.1", "17.0.45", "17.0.17"),
        f.dependency("FN002004", "4.0.2"),
        f.dependency("FN002013", "~1.15.2"),
        f.dependency("FN002021", "0.1.0"),
        f.dependency("FN002024", "8.57.0"),
        f.dependency("FN002022", "4.7.4"),
        _tsconfig_extends(f, "4.7"),
        f.json_property("FN021003", ">=18.17.1 <19.0.0"),
        *_common(f, version),
    ]


def _spfx_1_21(f: RuleFactoryProtocol, version: str) -> list[Rule]:
    return [
        *_react(f, "17.0.1", "17.0.45", "17.0.17"),
        f.dependency("FN002004", "4.0.2"),
        f.dependency("FN002013", "~1.15.2"),
        f.dependency("FN002029", "0.1.0"),
        f.dependency("FN002024", "8.57.1"),
        f.dependency("FN002022", "5.3.3"),
        _tsconfig_extends(f, "5.3"),
        f.json_property("FN021003", ">=22.14.0 < 23.0.0"),
        *_common(f, version),
    ]


def _table(groups: Sequence[tuple[Sequence[str], RuleSetFactory]]) -> dict[str, RuleSetFactory]:
    table: dict[str, RuleSetFactory] = {}
    for versions, factory in groups:
        for version in versions:
            table[version] = factory
    return table


VERSION_RULE_SETS: dict[str, RuleSetFactory] = _table([
    (("1.0.0", "1.0.1", "1.0.2", "1.1.0", "1.1.1"), _spfx_1_0),
    (("1.1.3", "1.2.0", "1.3.0", "1.3.1", "1.3.2", "1.3.4"), _spfx_1_1_3),
    (("1.4.0", "1.4.1", "1.5.0", "1.5.1", "1.6.0"), _spfx_1_4),
    (("1.7.0", "1.7.1"), _spfx_1_7),
    (("1.8.0", "1.8.1", "1.8.2", "1.9.1"), _spfx_1_8),
    (("1.10.0", "1.11.0"), _spfx_1_10),
    (("1.12.0", "1.12.1", "1.13.0", "1.13.1", "1.14.0"), _spfx_1_12),
    (("1.15.0", "1.15.2", "1.16.0", "1.16.1"), _spfx_1_15),
    (("1.17.0", "1.17.1", "1.17.2", "1.17.3", "1.17.4"), _spfx_1_17),
    (("1.18.0", "1.18.1", "1.18.2"), _spfx_1_18),
    (("1.19.0", "1.20.0"), _spfx_1_19),
    (("1.21.0", "1.21.1"), _spfx_1_21),
])


class RuleSetResolver:
    """Maps a detected project version to the ordered list of rules to run."""

    def __init__(
        self,
        rule_factory: RuleFactoryProtocol,
        rule_sets: Optional[Mapping[str, RuleSetFactory]] = None,
        supported_versions: Sequence[str] = SUPPORTED_VERSIONS,
    ) -> None:
        self._factory = rule_factory
        self._rule_sets = VERSION_RULE_SETS if rule_sets is None else rule_sets
        self._supported_versions = supported_versions

    @property
    def supported_versions(self) -> Sequence[str]:
        return self._supported_versions

    def resolve(self, version: Optional[str], package_manager: PackageManager) -> list[Rule]:
        """
        Generic rules + the version's rules (+ the dedupe rule for npm).

        Versions are matched exactly against the catalog; there is no range
        matching. Raises VersionNotDetected, UnsupportedVersion or
        RuleSetLoadFailure before any rule is built for an invalid input.
        """
        if not version:
            raise VersionNotDetected()
        if version not in self._supported_versions:
            raise UnsupportedVersion(version)

        rules = self.load_rules(version)

        if package_manager == DEFAULT_PACKAGE_MANAGER:
            rules.append(NpmDedupeRule())
        return rules

    def load_rules(self, version: str) -> list[Rule]:
        """Generic rules followed by the rules registered for version."""
        factory = self._rule_sets.get(version)
        if factory is None:
            raise RuleSetLoadFailure(f"No rule set available for SharePoint Framework v{version}")
        try:
            return [*generic_rules(self._factory), *factory(self._factory, version)]
        except (KeyError, ValueError) as e:
            raise RuleSetLoadFailure(str(e)) from e
