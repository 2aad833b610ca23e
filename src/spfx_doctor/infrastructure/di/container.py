from typing import TYPE_CHECKING, Any, cast

from spfx_doctor.domain.config import ConfigurationLoader
from spfx_doctor.domain.rule_sets import RuleSetResolver
from spfx_doctor.infrastructure.config_file_loader import ConfigFileLoader
from spfx_doctor.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from spfx_doctor.infrastructure.gateways.json_gateway import JsonGateway
from spfx_doctor.infrastructure.gateways.project_gateway import ProjectGateway
from spfx_doctor.infrastructure.services.rule_registry import RuleRegistryService
from spfx_doctor.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from spfx_doctor.domain.protocols import (
        FileSystemProtocol,
        ProjectGatewayProtocol,
        TelemetryPort,
    )


class DoctorContainer:
    """Dependency Injection Container for spfx-doctor."""

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)

        telemetry = ProjectTelemetry(
            "SPFX-DOCTOR", "cyan", "Validating SharePoint Framework project")
        self.register_singleton("TelemetryPort", telemetry)

        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton(
            "ProjectGateway",
            ProjectGateway(filesystem=filesystem, telemetry=telemetry, json_gateway=JsonGateway()),
        )

        # Rule catalog: registry first, the resolver builds rules from it
        rule_registry = RuleRegistryService()
        self.register_singleton("RuleRegistryService", rule_registry)
        self.register_singleton("RuleSetResolver", RuleSetResolver(rule_registry))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_project_gateway(self) -> "ProjectGatewayProtocol":
        """Return the project loader / version detector."""
        return cast("ProjectGatewayProtocol", self.get("ProjectGateway"))

    def get_rule_registry(self) -> RuleRegistryService:
        """Return the rule registry service."""
        return cast(RuleRegistryService, self.get("RuleRegistryService"))

    def get_rule_set_resolver(self) -> RuleSetResolver:
        """Return the version -> rule set resolver."""
        return cast(RuleSetResolver, self.get("RuleSetResolver"))

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

