"""
Core infrastructure for helmrun.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- ExecutionContext: cancellation/deadline token for command runs
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .context import ExecutionContext
from .exceptions import (
    ChartRequiredError,
    CommandFailedError,
    ConfigFileError,
    DurationFormatError,
    HelmCommandError,
    HelmRunConfigError,
    HelmRunException,
    HelmRunExecutionError,
    HelmRunValidationError,
    KeyValueFormatError,
    OptionError,
    OptionParseError,
    PostCommandError,
    PreCommandError,
    ReleaseRequiredError,
    ReleaseTestError,
    RollbackError,
    RunnerRequiredError,
)

__all__ = [
    "ChartRequiredError",
    "CommandFailedError",
    "ConfigFileError",
    "DurationFormatError",
    "ExecutionContext",
    "HelmCommandError",
    "HelmRunConfigError",
    "HelmRunException",
    "HelmRunExecutionError",
    "HelmRunValidationError",
    "KeyValueFormatError",
    "OptionError",
    "OptionParseError",
    "PostCommandError",
    "PreCommandError",
    "ReleaseRequiredError",
    "ReleaseTestError",
    "RollbackError",
    "RunnerRequiredError",
    "ServiceContainer",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
