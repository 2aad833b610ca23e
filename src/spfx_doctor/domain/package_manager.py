"""Package-manager dialects: abstract verbs -> concrete command fragments."""

from dataclasses import dataclass, field
from enum import Enum


class PackageManager(Enum):
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"

    @classmethod
    def values(cls) -> list[str]:
        return [pm.value for pm in cls]


DEFAULT_PACKAGE_MANAGER = PackageManager.NPM

# Abstract verbs used in rule resolutions. Order matters: a dev verb contains
# its plain counterpart as a substring, so dev verbs are always checked first.
VERB_UNINSTALL_DEV = "uninstallDev"
VERB_INSTALL_DEV = "installDev"
VERB_UNINSTALL = "uninstall"
VERB_INSTALL = "install"
ORDERED_VERBS: tuple[str, ...] = (
    VERB_UNINSTALL_DEV,
    VERB_INSTALL_DEV,
    VERB_UNINSTALL,
    VERB_INSTALL,
)

_COMMANDS: dict[PackageManager, dict[str, str]] = {
    PackageManager.NPM: {
        VERB_INSTALL: "npm i -SE",
        VERB_INSTALL_DEV: "npm i -DE",
        VERB_UNINSTALL: "npm un -S",
        VERB_UNINSTALL_DEV: "npm un -D",
    },
    PackageManager.PNPM: {
        VERB_INSTALL: "pnpm i -E",
        VERB_INSTALL_DEV: "pnpm i -DE",
        VERB_UNINSTALL: "pnpm un",
        VERB_UNINSTALL_DEV: "pnpm un",
    },
    PackageManager.YARN: {
        VERB_INSTALL: "yarn add -E",
        VERB_INSTALL_DEV: "yarn add -DE",
        VERB_UNINSTALL: "yarn remove",
        VERB_UNINSTALL_DEV: "yarn remove",
    },
}


def get_command(verb: str, package_manager: PackageManager) -> str:
    """Concrete command fragment for an abstract verb, e.g. installDev -> 'npm i -DE'."""
    return _COMMANDS[package_manager][verb]


def template_resolution(resolution: str, package_manager: PackageManager) -> str:
    """
    Replace the leading abstract verb of a resolution with the dialect's command.

    Only the first matching verb (in ORDERED_VERBS order) is substituted; the
    rest of the text (package name, version) is left untouched. Resolutions
    that don't start with a verb are returned as-is.
    """
    for verb in ORDERED_VERBS:
        if resolution.startswith(verb):
            return resolution.replace(verb, get_command(verb, package_manager), 1)
    return resolution


@dataclass
class PackageBuckets:
    """Package specs collected per operation, in insertion order."""
    dep_install: list[str] = field(default_factory=list)
    dev_install: list[str] = field(default_factory=list)
    dep_uninstall: list[str] = field(default_factory=list)
    dev_uninstall: list[str] = field(default_factory=list)


def map_command(command: str, buckets: PackageBuckets, package_manager: PackageManager) -> bool:
    """
    Classify an already-templated command into its bucket.

    Returns True when the command was a package operation. Same ordering
    rule as template_resolution: dev variants first.
    """
    targets = (
        (VERB_UNINSTALL_DEV, buckets.dev_uninstall),
        (VERB_INSTALL_DEV, buckets.dev_install),
        (VERB_UNINSTALL, buckets.dep_uninstall),
        (VERB_INSTALL, buckets.dep_install),
    )
    for verb, bucket in targets:
        prefix = f"{get_command(verb, package_manager)} "
        if command.startswith(prefix):
            packages = command[len(prefix):].strip()
            if packages and packages not in bucket:
                bucket.append(packages)
            return True
    return False


def reduce_commands(buckets: PackageBuckets, package_manager: PackageManager) -> list[str]:
    """One consolidated command per non-empty bucket."""
    commands: list[str] = []
    ordered = (
        (VERB_INSTALL, buckets.dep_install),
        (VERB_INSTALL_DEV, buckets.dev_install),
        (VERB_UNINSTALL, buckets.dep_uninstall),
        (VERB_UNINSTALL_DEV, buckets.dev_uninstall),
    )
    for verb, packages in ordered:
        if packages:
            commands.append(f"{get_command(verb, package_manager)} {' '.join(packages)}")
    return commands
