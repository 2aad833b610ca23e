"""Typed command errors. Each fatal condition carries a stable exit code."""

from typing import Optional


class CommandError(Exception):
    """A fatal, user-facing error that aborts the doctor run."""

    code: int = 1

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NoProjectRoot(CommandError):
    code = 1

    def __init__(self, start_path: str) -> None:
        super().__init__(f"Couldn't find project root folder (searched from {start_path})")
        self.start_path = start_path


class VersionNotDetected(CommandError):
    code = 3

    def __init__(self) -> None:
        super().__init__(
            "Unable to determine the version of the current SharePoint Framework project")


class UnsupportedVersion(CommandError):
    code = 4

    def __init__(self, version: str) -> None:
        super().__init__(
            f"spfx-doctor doesn't support validating projects built using SharePoint Framework v{version}")
        self.version = version


class RuleSetLoadFailure(CommandError):
    """The rule set for a supported version could not be built."""
    code = 1


class JsonParseError(ValueError):
    """Malformed JSON(C) in a project configuration file."""

    def __init__(self, message: str, line: int, character: int, path: str = "") -> None:
        location = f"{path}:{line}:{character}" if path else f"{line}:{character}"
        super().__init__(f"{message} at {location}")
        self.line = line
        self.character = character
        self.path = path
