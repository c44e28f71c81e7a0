"""
Composable options for building a HelmCommand.

Each option is a callable that mutates the descriptor and raises on bad
input. Options are applied in the order the caller lists them, so later
options see what earlier ones set (with_lint, for instance, reads the
chart set by a preceding with_chart).

Usage:
    cmd = new_helm_cmd(
        with_install_upgrade_mode(),
        with_release("web"),
        with_chart("./charts/web"),
        with_namespace("prod"),
        with_wait(True),
        with_runner(runner),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import timedelta

from ...core.di import get_logger
from ...core.exceptions import KeyValueFormatError, OptionError
from ...core.interfaces.runner import IRunner
from ...utils.durations import format_duration
from .command import HELM, HelmCommand

HelmOption = Callable[[HelmCommand], None]
HelmModeOption = Callable[[HelmCommand], None]


def split_key_value(entry: str) -> tuple[str, str]:
    """
    Split "key=value" on the first '='.

    Raises:
        KeyValueFormatError: If there is no '=' in the entry
    """
    key, sep, value = entry.partition("=")
    if not sep:
        raise KeyValueFormatError(entry)
    return key, value


# -----------------------------------------------------------------------------
# Modes
# -----------------------------------------------------------------------------


def with_install_upgrade_mode() -> HelmModeOption:
    def apply(c: HelmCommand) -> None:
        c.args = ["upgrade", "--install", *c.args]

    return apply


def with_rollback_mode() -> HelmModeOption:
    def apply(c: HelmCommand) -> None:
        c.args = ["rollback", *c.args]

    return apply


# -----------------------------------------------------------------------------
# Identity
# -----------------------------------------------------------------------------


def with_release(release: str) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        c.release = release

    return apply


def with_chart(chart: str) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        c.chart = chart

    return apply


def with_runner(runner: IRunner) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        c.runner = runner

    return apply


# -----------------------------------------------------------------------------
# Flags
# -----------------------------------------------------------------------------


def with_namespace(namespace: str) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        c.args.extend(["-n", namespace])

    return apply


def _flag(name: str, enabled: bool) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        if enabled:
            c.args.append(name)

    return apply


def with_atomic(atomic: bool) -> HelmOption:
    return _flag("--atomic", atomic)


def with_wait(wait: bool) -> HelmOption:
    return _flag("--wait", wait)


def with_force(force: bool) -> HelmOption:
    return _flag("--force", force)


def with_cleanup_on_fail(cleanup: bool) -> HelmOption:
    return _flag("--cleanup-on-fail", cleanup)


def with_dry_run(dry: bool) -> HelmOption:
    return _flag("--dry-run", dry)


def with_timeout(timeout: timedelta | str) -> HelmOption:
    """
    Append `--timeout <duration>`.

    A timedelta is rendered as a Go duration string ("5m0s"); a string is
    assumed to be one already and passed through.
    """

    def apply(c: HelmCommand) -> None:
        value = format_duration(timeout) if isinstance(timeout, timedelta) else timeout
        c.args.extend(["--timeout", value])

    return apply


def with_values(values: Iterable[str]) -> HelmOption:
    """Append one `--set key=value` per entry."""

    def apply(c: HelmCommand) -> None:
        for v in values:
            key, value = split_key_value(v)
            c.args.extend(["--set", f"{key}={value}"])

    return apply


def with_values_string(values: Iterable[str]) -> HelmOption:
    """Append one `--set-string key=value` per entry."""

    def apply(c: HelmCommand) -> None:
        for v in values:
            key, value = split_key_value(v)
            c.args.extend(["--set-string", f"{key}={value}"])

    return apply


def with_values_yaml(file: str | None) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        if file:
            c.args.extend(["--values", file])

    return apply


def with_kube_config(config: str | None) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        if config:
            c.args.extend(["--kubeconfig", config])

    return apply


# -----------------------------------------------------------------------------
# Pre/post commands
# -----------------------------------------------------------------------------


def with_lint(lint: bool) -> HelmOption:
    """Lint the chart before deploying. Must come after with_chart()."""

    def apply(c: HelmCommand) -> None:
        if lint:
            c.pre_cmds.append([HELM, "lint", c.chart])

    return apply


def with_helm_repos(repos: Iterable[str]) -> HelmOption:
    """
    Register chart repositories before deploying.

    Each entry is "name=url". Adds one `helm repo add` per entry followed
    by a single `helm repo update`; an empty list adds nothing.
    """

    def apply(c: HelmCommand) -> None:
        entries = [split_key_value(repo) for repo in repos]
        if not entries:
            return
        logger = get_logger()
        for name, url in entries:
            logger.info("added repo: name=%r url=%r", name, url)
            c.pre_cmds.append([HELM, "repo", "add", name, url])
        c.pre_cmds.append([HELM, "repo", "update"])

    return apply


def with_build_dependencies(build: bool, chart: str) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        if build:
            c.pre_cmds.append([HELM, "dependency", "build", chart])

    return apply


def with_update_dependencies(update: bool, chart: str) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        if update:
            c.pre_cmds.append([HELM, "dependency", "update", chart])

    return apply


def with_pre_command(*command: str) -> HelmOption:
    """Run `command` (executable first) before the main helm command."""

    def apply(c: HelmCommand) -> None:
        if not command:
            raise OptionError("pre command must name an executable")
        c.pre_cmds.append(list(command))

    return apply


def with_post_command(*command: str) -> HelmOption:
    """Run `command` (executable first) after a successful deploy."""

    def apply(c: HelmCommand) -> None:
        if not command:
            raise OptionError("post command must name an executable")
        c.post_cmds.append(list(command))

    return apply


# -----------------------------------------------------------------------------
# Test step
# -----------------------------------------------------------------------------


def with_test(test: bool) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        c.test = test

    return apply


def with_test_rollback(rollback: bool) -> HelmOption:
    def apply(c: HelmCommand) -> None:
        c.test_rollback = rollback

    return apply
