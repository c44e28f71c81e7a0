"""
Custom exception hierarchy for helmrun.

Errors are grouped by the phase that raises them: option parsing and
settings (configuration), descriptor finalization (validation), and
running commands (execution).
"""

from __future__ import annotations


class HelmRunException(Exception):
    """
    Base exception for all helmrun errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (file paths, keys, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class HelmRunConfigError(HelmRunException):
    """Base class for configuration-related errors."""

    pass


class OptionError(HelmRunConfigError, ValueError):
    """
    Malformed input handed to a command option.

    Inherits from ValueError so that option failures can be caught the
    same way as pydantic and stdlib parsing failures.
    """

    pass


class KeyValueFormatError(OptionError):
    """A repository or values entry is not of the form key=value."""

    def __init__(self, value: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"not in key=value format: {value}", cause=cause)
        self.value = value


class DurationFormatError(OptionError):
    """A duration string could not be parsed."""

    def __init__(self, value: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"invalid duration: {value!r}", cause=cause)
        self.value = value


class OptionParseError(HelmRunConfigError):
    """An option failed while building a helm command."""

    exit_code: int = 2


class ConfigFileError(HelmRunConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors and unreadable files.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Validation Errors
# =============================================================================


class HelmRunValidationError(HelmRunException, ValueError):
    """
    Base class for descriptor validation errors.

    Raised once all options have been applied and the command is
    missing something it cannot run without.
    """

    exit_code: int = 2
    recoverable: bool = False


class ReleaseRequiredError(HelmRunValidationError):
    """No release name was set."""

    def __init__(self, message: str = "release name is required") -> None:
        super().__init__(message)


class ChartRequiredError(HelmRunValidationError):
    """Install/upgrade mode without a chart."""

    def __init__(self, message: str = "chart path is required") -> None:
        super().__init__(message)


class RunnerRequiredError(HelmRunValidationError):
    """No runner was injected."""

    def __init__(self, message: str = "runner is required") -> None:
        super().__init__(message)


# =============================================================================
# Execution Errors
# =============================================================================


class HelmRunExecutionError(HelmRunException):
    """Base class for execution-related errors."""

    pass


class CommandFailedError(HelmRunExecutionError):
    """
    A runner could not execute a command successfully.

    This is the failure contract of IRunner.run: non-zero exit, missing
    executable, cancellation and deadline expiry all surface as this type.

    Attributes:
        command: Logical executable that was run
        args_list: Its arguments (`args` is taken by BaseException)
        returncode: Child exit status, or None if it never exited normally

    The class-level `exit_code` stays the status helmrun itself exits with.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        args: list[str] | None = None,
        returncode: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause)
        self.command = command
        self.args_list = list(args or [])
        self.returncode = returncode


class PreCommandError(HelmRunExecutionError):
    """A pre-command failed; the main command was not run."""

    pass


class HelmCommandError(HelmRunExecutionError):
    """The main helm invocation failed."""

    pass


class PostCommandError(HelmRunExecutionError):
    """A post-command failed after a successful deploy."""

    pass


class ReleaseTestError(HelmRunExecutionError):
    """
    The post-deploy `helm test` step failed.

    Raised both when no rollback was requested and when the rollback
    after the failure succeeded.
    """

    recoverable: bool = False


class RollbackError(HelmRunExecutionError):
    """The rollback triggered by a failed test step itself failed."""

    recoverable: bool = False
