"""
SIGINT handling while helm commands run.

The first Ctrl-C cancels the shared ExecutionContext so the runner can stop
the current process cleanly; a second Ctrl-C exits immediately.
"""

import signal
import sys
from collections.abc import Callable
from signal import Handlers

from ...core.context import ExecutionContext
from ...core.interfaces.logger import ILogger


class ProcessSignalHandler:
    """
    Manages signal handling for child process execution.

    Usage:
        handler = ProcessSignalHandler(ctx)
        handler.install()
        try:
            helm_cmd.run(ctx)
        finally:
            handler.restore()
    """

    def __init__(
        self,
        ctx: ExecutionContext,
        on_abort: Callable[[], None] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize signal handler.

        Args:
            ctx: Context to cancel on the first interrupt
            on_abort: Callback when second Ctrl-C is received (abort)
            logger: Logger for internal diagnostics
        """
        self._ctx = ctx
        self._interrupt_count = 0
        self._on_abort = on_abort
        self._original_handler: Handlers | None = None
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def install(self) -> None:
        """Install signal handlers."""
        self.logger.debug("Installing SIGINT handler")
        self._original_handler = signal.signal(signal.SIGINT, self._handle_signal)  # type: ignore[assignment]

    def restore(self) -> None:
        """Restore original signal handlers."""
        if self._original_handler is not None:
            self.logger.debug("Restoring original SIGINT handler")
            signal.signal(signal.SIGINT, self._original_handler)
            self._original_handler = None

    def __enter__(self) -> "ProcessSignalHandler":
        self.install()
        return self

    def __exit__(self, *exc_info) -> None:
        self.restore()

    def is_interrupted(self) -> bool:
        """Check if execution was interrupted."""
        return self._interrupt_count > 0

    def get_interrupt_count(self) -> int:
        """Get number of times interrupted."""
        return self._interrupt_count

    def _handle_signal(self, signum: int, frame) -> None:
        """Handle SIGINT signal."""
        self._interrupt_count += 1
        self.logger.debug("SIGINT received: interrupt_count=%d", self._interrupt_count)

        if self._interrupt_count == 1:
            self.logger.warning("Interrupted, stopping current command (Ctrl-C again to abort)")
            self._ctx.cancel()
        else:
            self.logger.debug("Second interrupt, aborting immediately")
            if self._on_abort:
                self._on_abort()
            sys.exit(130)  # Standard exit code for SIGINT
