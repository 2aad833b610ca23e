"""Telemetry: progress and diagnostics on stderr, mirrored to the spfx_doctor logger."""

import logging

from rich.console import Console
from rich.markup import escape

from spfx_doctor.domain.protocols import TelemetryPort

LOGGER_NAME = "spfx_doctor"


class ProjectTelemetry(TelemetryPort):
    """
    Console + logger pair used by the CLI.

    Reports are printed to stdout by the CLI itself; everything that goes
    through telemetry lands on stderr so the report can be piped. Step
    messages are shown with verbose, debug messages with debug. Warnings
    and errors are always shown.
    """

    def __init__(
        self,
        name: str,
        color: str,
        welcome: str,
        verbose: bool = False,
        debug: bool = False,
    ) -> None:
        self.name = name
        self.color = color
        self.welcome = welcome
        self.verbose = verbose or debug
        self.debug_enabled = debug
        self.console = Console(stderr=True)
        self.logger = logging.getLogger(LOGGER_NAME)

    def configure(self, verbose: bool = False, debug: bool = False) -> None:
        """Switch verbosity after construction (CLI flags are parsed after wiring)."""
        self.verbose = verbose or debug
        self.debug_enabled = debug
        self.logger.setLevel(logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING)

    def handshake(self) -> None:
        self.logger.info("%s: %s", self.name, self.welcome)
        if self.verbose:
            self.console.print(f"[bold {self.color}]{self.name}[/] {self.welcome}")

    def step(self, message: str) -> None:
        self.logger.info(message)
        if self.verbose:
            self.console.print(f"[{self.color}]>[/] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self.logger.error(message)
        self.console.print(f"[bold red]Error:[/] {escape(message)}", highlight=False)

    def warning(self, message: str) -> None:
        self.logger.warning(message)
        self.console.print(f"[yellow]Warning:[/] {escape(message)}", highlight=False)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
        if self.debug_enabled:
            self.console.print(f"[dim]{escape(message)}[/]", highlight=False)
