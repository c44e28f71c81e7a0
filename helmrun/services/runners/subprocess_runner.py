"""
Production runner: executes commands as child processes.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Mapping

from ...core.context import ExecutionContext
from ...core.exceptions import CommandFailedError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.runner import IRunner


class SubprocessRunner(IRunner):
    """
    Runs commands with subprocess.Popen, honoring the ExecutionContext.

    The child inherits stdout/stderr so helm's own output (including
    `helm test --logs`) reaches the terminal unchanged. While the child
    runs, the context is polled every `poll_interval` seconds; when it is
    cancelled or its deadline passes the child is terminated, then killed
    if it outlives `terminate_grace_period`.
    """

    def __init__(
        self,
        helm_binary: str = "helm",
        poll_interval: float = 0.1,
        terminate_grace_period: float = 5.0,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize runner.

        Args:
            helm_binary: Executable used for the logical command "helm"
            poll_interval: Seconds between context checks
            terminate_grace_period: Seconds to wait after SIGTERM before SIGKILL
            env: Environment for child processes (inherits ours if None)
            cwd: Working directory for child processes
            logger: Logger for internal diagnostics
        """
        self._helm_binary = helm_binary
        self._poll_interval = poll_interval
        self._terminate_grace_period = terminate_grace_period
        self._env = dict(env) if env is not None else None
        self._cwd = cwd
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def resolve_executable(self, command: str) -> str:
        return self._helm_binary if command == "helm" else command

    def run(self, ctx: ExecutionContext, command: str, *args: str) -> None:
        display = shlex.join([command, *args])

        if ctx.done:
            raise CommandFailedError(
                f"{display}: {self._stop_reason(ctx)}", command=command, args=list(args)
            )

        argv = [self.resolve_executable(command), *args]
        self.logger.debug("Running: %s", shlex.join(argv))
        try:
            proc = subprocess.Popen(argv, env=self._env, cwd=self._cwd)
        except OSError as e:
            raise CommandFailedError(
                f"{display}: {e.strerror or e}", command=command, args=list(args)
            ) from e

        self.logger.debug("Process started: pid=%d", proc.pid)
        exit_code = self._wait(ctx, proc, display, command, list(args))
        self.logger.debug("Process exited: code=%d", exit_code)

        if exit_code != 0:
            raise CommandFailedError(
                f"{display} exited with status {exit_code}",
                command=command,
                args=list(args),
                returncode=exit_code,
            )

    def _wait(
        self,
        ctx: ExecutionContext,
        proc: subprocess.Popen,
        display: str,
        command: str,
        args: list[str],
    ) -> int:
        while True:
            timeout = self._poll_interval
            remaining = ctx.remaining()
            if remaining is not None:
                timeout = min(timeout, remaining)
            try:
                return proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                pass

            if ctx.done:
                reason = self._stop_reason(ctx)
                self.logger.warning("Stopping %s (pid %d): %s", command, proc.pid, reason)
                self._stop(proc)
                raise CommandFailedError(f"{display}: {reason}", command=command, args=args)

    def _stop(self, proc: subprocess.Popen) -> None:
        proc.terminate()
        try:
            proc.wait(timeout=self._terminate_grace_period)
        except subprocess.TimeoutExpired:
            self.logger.debug("Process %d ignored SIGTERM, killing", proc.pid)
            proc.kill()
            proc.wait()

    @staticmethod
    def _stop_reason(ctx: ExecutionContext) -> str:
        return "cancelled" if ctx.cancelled else "deadline exceeded"
