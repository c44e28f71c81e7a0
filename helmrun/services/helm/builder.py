"""
Construction and validation of HelmCommand descriptors.
"""

from __future__ import annotations

from ...core.exceptions import (
    ChartRequiredError,
    OptionParseError,
    ReleaseRequiredError,
    RunnerRequiredError,
)
from .command import HelmCommand
from .options import HelmModeOption, HelmOption


def new_helm_cmd(mode: HelmModeOption, *options: HelmOption) -> HelmCommand:
    """
    Build a validated HelmCommand.

    The mode is applied first, then each option in order. Once all options
    have been applied the descriptor is validated and the positional
    arguments are appended: `<release>` in rollback mode,
    `<release> <chart>` in install/upgrade mode.

    Args:
        mode: with_install_upgrade_mode() or with_rollback_mode()
        *options: Options to apply, in order

    Returns:
        A descriptor ready to run

    Raises:
        OptionParseError: An option rejected its input
        ReleaseRequiredError: No release was set
        ChartRequiredError: Install/upgrade mode without a chart
        RunnerRequiredError: No runner was set
    """
    cmd = HelmCommand()
    mode(cmd)
    for option in options:
        try:
            option(cmd)
        except ValueError as e:
            raise OptionParseError(f"unable to parse option: {e}") from e

    upgrade_mode = cmd.is_upgrade_mode
    if not cmd.release:
        raise ReleaseRequiredError()
    if upgrade_mode and not cmd.chart:
        raise ChartRequiredError()
    if cmd.runner is None:
        raise RunnerRequiredError()

    if not upgrade_mode:
        # rollback mode takes no chart
        cmd.args.append(cmd.release)
        return cmd
    cmd.args.extend([cmd.release, cmd.chart])
    return cmd
