"""
Pydantic Settings for helmrun configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsError

from .exceptions import ConfigFileError
from .models.config import ExecutionConfig, HelmConfig, LoggingConfig

CONFIG_FILE_NAME = ".helmrun.toml"


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .helmrun.toml by walking up from start_dir (or cwd).

    A pyproject.toml with a [tool.helmrun] table also counts.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
            except (tomllib.TOMLDecodeError, OSError):
                # Someone else's broken pyproject is not our config
                continue
            if "helmrun" in data.get("tool", {}):
                return pyproject

    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """
    Read a helmrun TOML config file.

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(
            f"Failed to parse config file: {e}", file_path=str(path)
        ) from e
    except OSError as e:
        raise ConfigFileError(
            f"Failed to read config file: {e}", file_path=str(path)
        ) from e

    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("helmrun", {})
    return data


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None
        self.resolved_path: Path | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        path = self._config_path or find_config_file(self._start_dir)
        self.resolved_path = path
        self._data = read_config_file(path) if path is not None else {}
        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        return self._load_toml().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class HelmRunSettings(BaseSettings):
    """helmrun configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (HELMRUN_<section>__<field>)
    3. TOML config file (.helmrun.toml or pyproject.toml [tool.helmrun])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "HELMRUN_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    helm: HelmConfig = Field(default_factory=HelmConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _config_file: str | None = PrivateAttr(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: pydantic-settings gives us no way to pass per-call arguments
        here, so load_settings() hands the TOML source over through a
        module-level variable.
        """
        toml_source = _current_toml_source or TomlConfigSource(settings_cls)
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        """Path of the TOML file the settings were read from, if any."""
        return self._config_file


# Module-level variable for passing to settings_customise_sources
_current_toml_source: TomlConfigSource | None = None


def load_settings(config_path: Path | None = None, start_dir: str | None = None) -> HelmRunSettings:
    """Load helmrun settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        HelmRunSettings instance with all sources merged

    Raises:
        ConfigFileError: If the config file cannot be parsed or a value
            (from the file or the environment) is invalid
    """
    global _current_toml_source

    toml_source = TomlConfigSource(HelmRunSettings, config_path, start_dir)
    _current_toml_source = toml_source
    try:
        settings = HelmRunSettings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        path = toml_source.resolved_path
        raise ConfigFileError(
            f"Invalid configuration: {problems}",
            file_path=str(path) if path is not None else None,
        ) from e
    except SettingsError as e:
        raise ConfigFileError(f"Invalid configuration: {e}") from e
    finally:
        _current_toml_source = None

    if toml_source.resolved_path is not None:
        settings._config_file = str(toml_source.resolved_path)
    return settings
