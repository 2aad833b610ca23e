"""npm-style version range helpers on top of semantic_version.NpmSpec."""

import re
from typing import Optional

from semantic_version import NpmSpec, Version

_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?(-[0-9A-Za-z.-]+)?")
# npm accepts "< 23.0.0"; NpmSpec wants the operator glued to the version.
_SPACED_OPERATOR_RE = re.compile(r"(<=|>=|<|>|=)\s+")
_NON_SEMVER_PREFIXES = ("file:", "link:", "workspace:", "npm:", "git", "http:", "https:", "github:")
_ZERO = Version("0.0.0")


def normalize_range(npm_range: str) -> str:
    return _SPACED_OPERATOR_RE.sub(r"\1", npm_range.strip())


def satisfies(version: Version, npm_range: str) -> bool:
    """True when version lies inside npm_range (exact versions are ranges too)."""
    return NpmSpec(normalize_range(npm_range)).match(version)


def min_version(entry: str) -> Optional[Version]:
    """
    Lowest version a package.json entry refers to.

    '^1.21.0' -> 1.21.0, '~3.9' -> 3.9.0, '>=1.12.1 <1.14.0' -> 1.12.1.
    Specs that open with an upper bound ('<2.0.0', '<=1.21.0') have no
    lower bound and yield 0.0.0. Returns None for tags, URLs,
    workspace/file references and other specifiers that do not name a
    version.
    """
    text = entry.strip()
    if not text or text.startswith(_NON_SEMVER_PREFIXES):
        return None
    if text.startswith("<"):
        return _ZERO
    match = _VERSION_RE.search(text)
    if match is None:
        return None
    major, minor, patch, prerelease = match.groups()
    version = f"{major}.{minor or 0}.{patch or 0}{prerelease or ''}"
    return Version(version)


def parse_version(text: str) -> Optional[Version]:
    """Strict-ish parse of a plain version like '1.21.0'; None when invalid."""
    try:
        return Version.coerce(text.strip())
    except ValueError:
        return None
