"""
Click context extension for helmrun CLI.

Provides HelmRunContext dataclass that holds helmrun-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..core.interfaces.runner import IRunner
from ..core.settings import HelmRunSettings, load_settings


@dataclass
class HelmRunContext:
    """Extended context passed through Click command chain.

    Attributes:
        settings: Loaded helmrun settings
        runner: Runner override; resolved from the container when unset
    """

    settings: HelmRunSettings
    runner: IRunner | None = field(default=None)

    @classmethod
    def create(
        cls,
        config_path: Path | None = None,
        verbose: bool = False,
        cwd: Path | None = None,
    ) -> HelmRunContext:
        """Create a HelmRunContext for the current environment.

        Loads settings and bootstraps the service container.

        Args:
            config_path: Explicit config file (searched from cwd otherwise)
            verbose: Force debug-level console logging
            cwd: Directory the config search starts from (defaults to Path.cwd())

        Returns:
            Configured HelmRunContext instance

        Raises:
            ConfigFileError: If the config file cannot be parsed or a setting is invalid
        """
        from ..core.bootstrap import bootstrap

        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(config_path=config_path, start_dir=str(cwd))
        if verbose:
            settings.logging.level = "debug"
            settings.logging.console = True

        bootstrap(settings)

        return cls(settings=settings)

    def get_runner(self) -> IRunner:
        """Return the runner override or the container's IRunner."""
        if self.runner is None:
            from ..core.container import resolve

            self.runner = resolve(IRunner)  # type: ignore[type-abstract]
        return self.runner
