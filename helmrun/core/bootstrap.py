"""
Application bootstrap for helmrun.

Initializes the DI container with the logger and the command runner.
This module should be called once at application startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.runner import IRunner

if TYPE_CHECKING:
    from .settings import HelmRunSettings

_initialized = False


def bootstrap(settings: HelmRunSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the helmrun application.

    Registers:
    - ILogger, configured from settings.logging
    - IRunner, a SubprocessRunner configured from settings.helm and
      settings.execution

    Args:
        settings: Loaded settings (loaded from the environment if omitted)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    if settings is None:
        from .settings import load_settings

        settings = load_settings()

    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: HelmRunSettings) -> None:
    """Register core application services."""
    from ..services.logging import HelmRunLogger
    from ..services.runners import SubprocessRunner

    def create_logger() -> ILogger:
        return HelmRunLogger.from_config(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]

    def create_runner() -> IRunner:
        return SubprocessRunner(
            helm_binary=settings.helm.binary,
            poll_interval=settings.execution.poll_interval,
            terminate_grace_period=settings.execution.terminate_grace_period,
        )

    container.register_singleton(IRunner, factory=create_runner)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
