"""
Helm command building and execution.

new_helm_cmd() applies a mode and a list of options to produce a validated
HelmCommand; HelmCommand.run() executes it through the injected runner.
"""

from .builder import new_helm_cmd
from .command import HELM, HelmCommand
from .options import (
    HelmModeOption,
    HelmOption,
    split_key_value,
    with_atomic,
    with_build_dependencies,
    with_chart,
    with_cleanup_on_fail,
    with_dry_run,
    with_force,
    with_helm_repos,
    with_install_upgrade_mode,
    with_kube_config,
    with_lint,
    with_namespace,
    with_post_command,
    with_pre_command,
    with_release,
    with_rollback_mode,
    with_runner,
    with_test,
    with_test_rollback,
    with_timeout,
    with_update_dependencies,
    with_values,
    with_values_string,
    with_values_yaml,
    with_wait,
)

__all__ = [
    "HELM",
    "HelmCommand",
    "HelmModeOption",
    "HelmOption",
    "new_helm_cmd",
    "split_key_value",
    "with_atomic",
    "with_build_dependencies",
    "with_chart",
    "with_cleanup_on_fail",
    "with_dry_run",
    "with_force",
    "with_helm_repos",
    "with_install_upgrade_mode",
    "with_kube_config",
    "with_lint",
    "with_namespace",
    "with_post_command",
    "with_pre_command",
    "with_release",
    "with_rollback_mode",
    "with_runner",
    "with_test",
    "with_test_rollback",
    "with_timeout",
    "with_update_dependencies",
    "with_values",
    "with_values_string",
    "with_values_yaml",
    "with_wait",
]
