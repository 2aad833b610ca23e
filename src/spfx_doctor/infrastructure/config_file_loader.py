"""Load [tool.spfx-doctor] from pyproject.toml or .spfx-doctor.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

TOOL_SECTION = "spfx-doctor"
DEDICATED_CONFIG_FILE = ".spfx-doctor.toml"


class ConfigFileLoader:
    """
    Loads doctor settings. Walks up from the start folder; the first folder
    with a .spfx-doctor.toml or a pyproject.toml carrying [tool.spfx-doctor] wins.
    """

    @staticmethod
    def read_toml(config_file: Path) -> dict[str, object]:
        with config_file.open("rb") as f:
            return toml_lib.load(f)

    @staticmethod
    def load_config_from_fs(start: Optional[str] = None) -> dict[str, object]:
        """Return the settings table, or an empty dict when none is found."""
        current_path = Path(start).resolve() if start else Path.cwd()
        while True:
            dedicated = current_path / DEDICATED_CONFIG_FILE
            if dedicated.exists():
                return ConfigFileLoader.read_toml(dedicated)

            pyproject = current_path / "pyproject.toml"
            if pyproject.exists():
                tool_section = ConfigFileLoader.read_toml(pyproject).get("tool", {}) or {}
                config_dict = tool_section.get(TOOL_SECTION) if isinstance(tool_section, dict) else None
                if isinstance(config_dict, dict) and config_dict:
                    return config_dict

            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent
