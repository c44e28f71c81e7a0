"""
Helm command descriptor and its execution.

A HelmCommand is produced by new_helm_cmd() (see builder.py) and then run
exactly once. Running it sequences:

    pre-commands -> helm <args> -> [helm test -> [helm rollback]] -> post-commands

Every invocation goes through the injected IRunner with the same
ExecutionContext; the first failure ends the run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ...core.context import ExecutionContext
from ...core.di import get_logger
from ...core.exceptions import (
    CommandFailedError,
    HelmCommandError,
    PostCommandError,
    PreCommandError,
    ReleaseTestError,
    RollbackError,
    RunnerRequiredError,
)
from ...core.interfaces.runner import IRunner

HELM = "helm"
UPGRADE_TOKEN = "upgrade"


@dataclass
class HelmCommand:
    """
    Mutable command descriptor.

    Attributes:
        release: Target release name
        chart: Chart path or reference (install/upgrade mode only)
        args: Argv of the main helm invocation, without the executable
        pre_cmds: Commands run before the main invocation, in order
        post_cmds: Commands run after the main invocation, in order
        runner: Collaborator that executes every command
        test: Run `helm test --logs <release>` after deploying
        test_rollback: Roll the release back when the test fails
    """

    release: str = ""
    chart: str = ""
    args: list[str] = field(default_factory=list)
    pre_cmds: list[list[str]] = field(default_factory=list)
    post_cmds: list[list[str]] = field(default_factory=list)
    runner: IRunner | None = None
    test: bool = False
    test_rollback: bool = False

    @property
    def is_upgrade_mode(self) -> bool:
        return UPGRADE_TOKEN in self.args

    def main_command(self) -> list[str]:
        return [HELM, *self.args]

    def test_command(self) -> list[str]:
        return [HELM, "test", "--logs", self.release]

    def rollback_command(self) -> list[str]:
        return [HELM, "rollback", self.release]

    def plan(self) -> list[list[str]]:
        """
        List the commands a successful run would execute, in order.

        The rollback command is not included since it only runs after a
        failed test.
        """
        steps = [list(cmd) for cmd in self.pre_cmds]
        steps.append(self.main_command())
        if self.test:
            steps.append(self.test_command())
        steps.extend(list(cmd) for cmd in self.post_cmds)
        return steps

    def run(self, ctx: ExecutionContext) -> None:
        """
        Execute the command sequence.

        Args:
            ctx: Cancellation/deadline context passed to every runner call

        Raises:
            PreCommandError: A pre-command failed; nothing else ran
            HelmCommandError: The main helm command failed
            ReleaseTestError: The test step failed (whether or not a
                rollback was performed afterwards)
            RollbackError: The rollback after a failed test failed
            PostCommandError: A post-command failed
        """
        runner = self.runner
        if runner is None:
            raise RunnerRequiredError()

        for pre_cmd in self.pre_cmds:
            _run_step(runner, ctx, pre_cmd, wrap=lambda e: PreCommandError(f"precmd failed: {e}"))

        _run_step(
            runner, ctx, self.main_command(), wrap=lambda e: HelmCommandError(f"helm failed: {e}")
        )

        if self.test:
            self._run_test(runner, ctx)

        for post_cmd in self.post_cmds:
            _run_step(
                runner, ctx, post_cmd, wrap=lambda e: PostCommandError(f"postcmd failed: {e}")
            )

    def _run_test(self, runner: IRunner, ctx: ExecutionContext) -> None:
        """Run `helm test`, rolling back on failure when requested."""
        logger = get_logger()
        try:
            runner.run(ctx, *self.test_command())
        except CommandFailedError as test_err:
            logger.error("TEST FAILED: release %s: %s", self.release, test_err)
            if self.test_rollback:
                try:
                    runner.run(ctx, *self.rollback_command())
                except CommandFailedError as rollback_err:
                    logger.error(
                        "ROLLBACK FAILED: release %s: %s (test error: %s)",
                        self.release,
                        rollback_err,
                        test_err,
                    )
                    raise RollbackError(str(rollback_err)) from rollback_err
                logger.info(
                    "release %s rolled back after failed test: %s", self.release, test_err
                )
            # Reported as a failure even when the rollback succeeded
            raise ReleaseTestError(str(test_err)) from test_err


def _run_step(
    runner: IRunner,
    ctx: ExecutionContext,
    argv: list[str],
    wrap: Callable[[CommandFailedError], Exception],
) -> None:
    try:
        runner.run(ctx, argv[0], *argv[1:])
    except CommandFailedError as e:
        raise wrap(e) from e
