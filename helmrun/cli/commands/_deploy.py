"""
Shared option declarations and execution for upgrade and rollback.

Both commands accept the same flags for the main helm call, the test step
and custom pre/post commands; they differ only in mode and in the
chart-related options upgrade adds.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

import click

from ...core.context import ExecutionContext
from ...core.exceptions import DurationFormatError, HelmRunException
from ...services.helm import (
    HelmCommand,
    HelmModeOption,
    HelmOption,
    new_helm_cmd,
    with_cleanup_on_fail,
    with_dry_run,
    with_force,
    with_kube_config,
    with_namespace,
    with_post_command,
    with_pre_command,
    with_release,
    with_runner,
    with_test,
    with_test_rollback,
    with_timeout,
    with_wait,
)
from ...services.runners import ProcessSignalHandler
from ...utils.durations import parse_duration

if TYPE_CHECKING:
    from ..context import HelmRunContext

F = TypeVar("F", bound=Callable[..., Any])


def _duration_callback(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> timedelta | None:
    """Parse a Go-style duration option ("5m", "1h30m")."""
    if value is None:
        return None
    try:
        return parse_duration(value)
    except DurationFormatError as e:
        raise click.BadParameter(str(e)) from e


def _split_commands(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[list[str]]:
    """Split each --pre-command/--post-command string into an argv."""
    commands = []
    for entry in value:
        try:
            argv = shlex.split(entry)
        except ValueError as e:
            raise click.BadParameter(f"{entry!r}: {e}") from e
        if not argv:
            raise click.BadParameter("command must not be empty")
        commands.append(argv)
    return commands


_COMMON_OPTIONS = [
    click.option("-n", "--namespace", help="Kubernetes namespace (default from config)"),
    click.option("--kubeconfig", help="Path to kubeconfig (default from config)"),
    click.option("--wait", is_flag=True, help="Pass --wait to helm"),
    click.option("--force", is_flag=True, help="Pass --force to helm"),
    click.option("--cleanup-on-fail", is_flag=True, help="Pass --cleanup-on-fail to helm"),
    click.option("--dry-run", is_flag=True, help="Pass --dry-run to helm"),
    click.option(
        "--timeout",
        callback=_duration_callback,
        help="Helm operation timeout, e.g. 5m (default from config)",
    ),
    click.option("--test", "run_test", is_flag=True, help="Run `helm test --logs` afterwards"),
    click.option(
        "--test-rollback",
        is_flag=True,
        help="Roll the release back if the test step fails",
    ),
    click.option(
        "--pre-command",
        "pre_commands",
        multiple=True,
        callback=_split_commands,
        help="Command to run before helm (repeatable)",
    ),
    click.option(
        "--post-command",
        "post_commands",
        multiple=True,
        callback=_split_commands,
        help="Command to run after a successful deploy (repeatable)",
    ),
    click.option(
        "--deadline",
        callback=_duration_callback,
        help="Abort the whole run after this long (default from config)",
    ),
    click.option("--show-plan", is_flag=True, help="Print the commands and exit"),
]


def common_options(f: F) -> F:
    """Attach the options shared by upgrade and rollback."""
    for option in reversed(_COMMON_OPTIONS):
        f = option(f)
    return f


def leading_options(ctx: HelmRunContext, release: str, params: dict[str, Any]) -> list[HelmOption]:
    """Options that go before any mode-specific ones: identity and cluster access."""
    helm_settings = ctx.settings.helm
    namespace = params["namespace"] or helm_settings.namespace
    options = [
        with_release(release),
        with_kube_config(params["kubeconfig"] or helm_settings.kubeconfig),
    ]
    if namespace:
        options.append(with_namespace(namespace))
    return options


def trailing_options(ctx: HelmRunContext, params: dict[str, Any]) -> list[HelmOption]:
    """Options that go after mode-specific ones: flags, test step, custom commands."""
    timeout = params["timeout"]
    if timeout is None and ctx.settings.helm.timeout:
        timeout = parse_duration(ctx.settings.helm.timeout)

    options = [
        with_wait(params["wait"]),
        with_force(params["force"]),
        with_cleanup_on_fail(params["cleanup_on_fail"]),
        with_dry_run(params["dry_run"]),
    ]
    if timeout is not None:
        options.append(with_timeout(timeout))
    options.extend(
        [
            with_test(params["run_test"]),
            with_test_rollback(params["test_rollback"]),
        ]
    )
    options.extend(with_pre_command(*argv) for argv in params["pre_commands"])
    options.extend(with_post_command(*argv) for argv in params["post_commands"])
    options.append(with_runner(ctx.get_runner()))
    return options


def build_and_run(
    ctx: HelmRunContext,
    mode: HelmModeOption,
    options: list[HelmOption],
    params: dict[str, Any],
) -> None:
    """
    Build the helm command and either print its plan or run it.

    Raises:
        click.ClickException: On any helmrun error, with the error's exit code
    """
    try:
        helm_cmd = new_helm_cmd(mode, *options)
        if params["show_plan"]:
            _print_plan(helm_cmd)
            return
        _execute(ctx, helm_cmd, params["deadline"])
    except HelmRunException as e:
        exc = click.ClickException(str(e))
        exc.exit_code = e.exit_code
        raise exc from e


def _execute(ctx: HelmRunContext, helm_cmd: HelmCommand, deadline: timedelta | None) -> None:
    if deadline is None and ctx.settings.execution.deadline:
        deadline = parse_duration(ctx.settings.execution.deadline)

    exec_ctx = ExecutionContext.with_timeout(
        deadline.total_seconds() if deadline is not None else None
    )
    with ProcessSignalHandler(exec_ctx):
        helm_cmd.run(exec_ctx)


def _print_plan(helm_cmd: HelmCommand) -> None:
    for i, argv in enumerate(helm_cmd.plan(), 1):
        click.echo(f"{i:>3}. {shlex.join(argv)}")
    if helm_cmd.test and helm_cmd.test_rollback:
        click.echo(f"     on test failure: {shlex.join(helm_cmd.rollback_command())}")
