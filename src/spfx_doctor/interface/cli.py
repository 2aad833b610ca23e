"""CLI entry points for spfx-doctor - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import typer

from spfx_doctor.domain.config import OUTPUT_TOUR, SUPPORTED_OUTPUTS, ConfigurationLoader
from spfx_doctor.domain.errors import CommandError
from spfx_doctor.domain.package_manager import PackageManager
from spfx_doctor.domain.protocols import (
    ArtifactStorageProtocol,
    ProjectGatewayProtocol,
    ReporterProtocol,
    TelemetryPort,
)
from spfx_doctor.domain.rule_sets import RuleSetResolver
from spfx_doctor.use_cases.validate_project import ValidateProjectUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    project_gateway: ProjectGatewayProtocol
    rule_set_resolver: RuleSetResolver
    # (output, tour_path) -> reporter
    reporter_factory: Callable[[str, str], ReporterProtocol]
    # project root -> storage scoped to it
    artifact_storage_factory: Callable[[str], ArtifactStorageProtocol]


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def validate_package_manager(value: Optional[str]) -> Optional[str]:
        if value is not None and value not in PackageManager.values():
            raise typer.BadParameter(
                f"{value} is not a supported package manager. "
                f"Supported package managers are {', '.join(PackageManager.values())}")
        return value

    @staticmethod
    def validate_output(value: Optional[str]) -> Optional[str]:
        if value is not None and value not in SUPPORTED_OUTPUTS:
            raise typer.BadParameter(
                f"{value} is not a supported output. "
                f"Supported outputs are {', '.join(SUPPORTED_OUTPUTS)}")
        return value

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="spfx-doctor",
            help="Validate a SharePoint Framework project and suggest how to fix what's wrong.",
            add_completion=False,
        )

        @app.command()
        def doctor(
            path: Optional[Path] = typer.Argument(None, help="Folder inside the project (default: current directory)"),  # noqa: B008, RUF100
            package_manager: Optional[str] = typer.Option(
                None, "--package-manager", "-p",
                help="Package manager used in the project: npm, pnpm or yarn (default: npm)",
                callback=CLIAppFactory.validate_package_manager,
            ),
            output: Optional[str] = typer.Option(
                None, "--output", "-o",
                help="Output: json, text, md or tour (default: json)",
                callback=CLIAppFactory.validate_output,
            ),
            verbose: bool = typer.Option(False, "--verbose", help="Show progress messages"),
            debug: bool = typer.Option(False, "--debug", help="Show progress and debug messages"),
        ) -> None:
            """Validate the project against the rules for its SharePoint Framework version."""
            deps.telemetry.configure(verbose=verbose, debug=debug)
            deps.telemetry.handshake()

            selected_pm = PackageManager(package_manager) if package_manager else deps.config_loader.package_manager
            selected_output = output or deps.config_loader.output
            tour_path = deps.config_loader.tour_path
            start_path = str(path) if path else str(Path.cwd())

            use_case = ValidateProjectUseCase(
                project_gateway=deps.project_gateway,
                rule_set_resolver=deps.rule_set_resolver,
                telemetry=deps.telemetry,
            )
            try:
                result = use_case.execute(start_path, selected_pm)
            except CommandError as e:
                deps.telemetry.error(e.message)
                raise typer.Exit(code=e.code) from e

            reporter = deps.reporter_factory(selected_output, tour_path)
            content = reporter.render(result.project, result.records, selected_pm)

            if selected_output == OUTPUT_TOUR:
                storage = deps.artifact_storage_factory(result.project.path)
                written = storage.write_artifact(tour_path, content)
                typer.echo(f"CodeTour written to {written}", err=True)
                return
            typer.echo(content)

        @app.command()
        def versions() -> None:
            """List the SharePoint Framework versions that can be validated."""
            for version in deps.rule_set_resolver.supported_versions:
                typer.echo(version)

        return app
