"""Layered TOML configuration for ticketcrew."""

from pathlib import Path
from typing import Any

import toml

from ticketcrew.config.defaults import PROJECT_CONFIG_FILENAME
from ticketcrew.config.schema import TicketCrewConfig, get_config_file


class ConfigManager:
    """Process-wide access to the merged configuration.

    Layers, lowest precedence first: built-in defaults, the user file
    (~/.config/ticketcrew/config.toml), the nearest .ticketcrew.toml at or
    above the working directory, then an explicit file passed to load_config.
    """

    _config: TicketCrewConfig | None = None

    @classmethod
    def get_config(cls) -> TicketCrewConfig:
        """Current configuration, loaded on first use."""
        if cls._config is None:
            cls._config = cls.load_config()
        return cls._config

    @classmethod
    def load_config(cls, path: Path | None = None) -> TicketCrewConfig:
        """Merge every configuration layer and validate the result."""
        merged: dict[str, Any] = TicketCrewConfig.default().model_dump()
        for layer in cls.config_files(path):
            merged = cls._deep_merge(merged, cls._read(layer))
        return TicketCrewConfig.model_validate(merged)

    @classmethod
    def config_files(cls, path: Path | None = None) -> list[Path]:
        """Existing config files that apply, in merge order."""
        candidates = [get_config_file(), cls._find_project_config(), path]
        return [candidate for candidate in candidates if candidate is not None and candidate.exists()]

    @classmethod
    def reload(cls, path: Path | None = None) -> TicketCrewConfig:
        """Discard the cached configuration and load it again."""
        cls._config = cls.load_config(path)
        return cls._config

    @classmethod
    def reset(cls) -> None:
        cls._config = None

    @classmethod
    def _read(cls, path: Path) -> dict[str, Any]:
        """Parse one TOML layer; [agents.<name>] tables are keyed by role value."""
        data = toml.load(path)
        agents = data.get("agents")
        if isinstance(agents, dict):
            data["agents"] = {
                name.strip().upper().replace("-", "_"): section for name, section in agents.items()
            }
        return data

    @classmethod
    def _find_project_config(cls) -> Path | None:
        """Closest project file walking up from cwd, not above the home directory."""
        home = Path.home()
        directory = Path.cwd()
        while True:
            candidate = directory / PROJECT_CONFIG_FILENAME
            if candidate.is_file():
                return candidate
            if directory == home or directory.parent == directory:
                return None
            directory = directory.parent

    @classmethod
    def _deep_merge(cls, base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
        """Tables merge key by key; any other value in ``layer`` replaces the base."""
        merged = dict(base)
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                value = cls._deep_merge(current, value)
            merged[key] = value
        return merged

    @classmethod
    def get_value(cls, key_path: str, default: Any = None) -> Any:
        """Look up a value by dotted path, e.g. "orchestration.hop_budget"."""
        node: Any = cls.get_config().model_dump()
        for key in key_path.split("."):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node
