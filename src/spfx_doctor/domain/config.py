"""Doctor settings. Immutable value object created by Infrastructure."""

import logging
from typing import Optional

from spfx_doctor.domain.package_manager import DEFAULT_PACKAGE_MANAGER, PackageManager

OUTPUT_JSON = "json"
OUTPUT_TEXT = "text"
OUTPUT_MD = "md"
OUTPUT_TOUR = "tour"
SUPPORTED_OUTPUTS: tuple[str, ...] = (OUTPUT_JSON, OUTPUT_TEXT, OUTPUT_MD, OUTPUT_TOUR)

DEFAULT_OUTPUT = OUTPUT_JSON
DEFAULT_TOUR_PATH = ".tours/validation.tour"


class ConfigurationLoader:
    """
    Immutable configuration for doctor settings.

    Created from the dict returned by ConfigFileLoader.load_config_from_fs()
    at the composition root. Unknown values are reported with a warning and
    replaced by their defaults.
    """

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        self._config = dict(config_dict or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Validate configuration values."""
        package_manager = config.get("package_manager")
        if package_manager is not None and package_manager not in PackageManager.values():
            logging.warning(
                "Configuration Warning: '%s' is not a supported package manager. Using '%s'.",
                package_manager, DEFAULT_PACKAGE_MANAGER.value)
            config.pop("package_manager")

        output = config.get("output")
        if output is not None and output not in SUPPORTED_OUTPUTS:
            logging.warning(
                "Configuration Warning: '%s' is not a supported output. Using '%s'.",
                output, DEFAULT_OUTPUT)
            config.pop("output")

        tour_path = config.get("tour_path")
        if tour_path is not None and (not isinstance(tour_path, str) or not tour_path.strip()):
            logging.warning("Configuration Warning: 'tour_path' must be a non-empty string.")
            config.pop("tour_path")

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def package_manager(self) -> PackageManager:
        raw = self._config.get("package_manager")
        return PackageManager(raw) if isinstance(raw, str) else DEFAULT_PACKAGE_MANAGER

    @property
    def output(self) -> str:
        raw = self._config.get("output")
        return raw if isinstance(raw, str) else DEFAULT_OUTPUT

    @property
    def tour_path(self) -> str:
        raw = self._config.get("tour_path")
        return raw if isinstance(raw, str) else DEFAULT_TOUR_PATH
