"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging

from spfx_doctor.infrastructure.di.container import DoctorContainer
from spfx_doctor.infrastructure.gateways.artifact_storage_gateway import LocalArtifactStorage
from spfx_doctor.infrastructure.reporters import create_reporter
from spfx_doctor.interface.cli import CLIAppFactory, CLIDependencies
from spfx_doctor.interface.telemetry import LOGGER_NAME


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    # telemetry already prints to the console; keep the logger from echoing it again
    logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

    container = DoctorContainer()
    filesystem = container.get_filesystem_gateway()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        project_gateway=container.get_project_gateway(),
        rule_set_resolver=container.get_rule_set_resolver(),
        reporter_factory=create_reporter,
        artifact_storage_factory=lambda root: LocalArtifactStorage(base_path=root, filesystem=filesystem),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
