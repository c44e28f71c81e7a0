"""
Unit tests for HelmCommand options.

Each option is applied to a bare descriptor so its own contribution to
args, pre_cmds and post_cmds can be checked in isolation.
"""

from datetime import timedelta

import pytest

from helmrun.core.exceptions import KeyValueFormatError, OptionError
from helmrun.services.helm import (
    HelmCommand,
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


def apply(*options) -> HelmCommand:
    cmd = HelmCommand()
    for option in options:
        option(cmd)
    return cmd


class TestModes:
    """Mode selectors prepend their keywords."""

    def test_install_upgrade_mode(self):
        assert apply(with_install_upgrade_mode()).args == ["upgrade", "--install"]

    def test_rollback_mode(self):
        assert apply(with_rollback_mode()).args == ["rollback"]

    def test_mode_prepends_to_existing_args(self):
        cmd = HelmCommand(args=["--wait"])
        with_install_upgrade_mode()(cmd)
        assert cmd.args == ["upgrade", "--install", "--wait"]


class TestIdentityOptions:
    """Release, chart and runner options set fields without touching args."""

    def test_release_and_chart(self):
        cmd = apply(with_release("web"), with_chart("./charts/web"))
        assert cmd.release == "web"
        assert cmd.chart == "./charts/web"
        assert cmd.args == []

    def test_runner(self, recording_runner):
        cmd = apply(with_runner(recording_runner))
        assert cmd.runner is recording_runner


class TestFlagOptions:
    """Boolean flags append when enabled and are no-ops when disabled."""

    @pytest.mark.parametrize(
        ("factory", "flag"),
        [
            (with_atomic, "--atomic"),
            (with_wait, "--wait"),
            (with_force, "--force"),
            (with_cleanup_on_fail, "--cleanup-on-fail"),
            (with_dry_run, "--dry-run"),
        ],
    )
    def test_enabled_appends_flag(self, factory, flag):
        assert apply(factory(True)).args == [flag]

    @pytest.mark.parametrize(
        "factory", [with_atomic, with_wait, with_force, with_cleanup_on_fail, with_dry_run]
    )
    def test_disabled_appends_nothing(self, factory):
        assert apply(factory(False)).args == []

    def test_repeated_option_is_not_deduplicated(self):
        assert apply(with_wait(True), with_wait(True)).args == ["--wait", "--wait"]

    def test_namespace_always_appended(self):
        assert apply(with_namespace("prod")).args == ["-n", "prod"]

    def test_timeout_from_timedelta_uses_go_format(self):
        cmd = apply(with_timeout(timedelta(minutes=5)))
        assert cmd.args == ["--timeout", "5m0s"]

    def test_timeout_string_passed_through(self):
        assert apply(with_timeout("90s")).args == ["--timeout", "90s"]

    def test_values_yaml_only_when_set(self):
        assert apply(with_values_yaml("values.yaml")).args == ["--values", "values.yaml"]
        assert apply(with_values_yaml("")).args == []
        assert apply(with_values_yaml(None)).args == []

    def test_kubeconfig_only_when_set(self):
        assert apply(with_kube_config("/k/config")).args == ["--kubeconfig", "/k/config"]
        assert apply(with_kube_config("")).args == []


class TestValueOptions:
    """--set and --set-string parsing."""

    def test_values_one_set_per_entry(self):
        cmd = apply(with_values(["image.tag=v2", "replicas=3"]))
        assert cmd.args == ["--set", "image.tag=v2", "--set", "replicas=3"]

    def test_values_string(self):
        cmd = apply(with_values_string(["build=0042"]))
        assert cmd.args == ["--set-string", "build=0042"]

    def test_value_split_on_first_equals_only(self):
        cmd = apply(with_values(["annotation=a=b"]))
        assert cmd.args == ["--set", "annotation=a=b"]

    def test_empty_value_is_allowed(self):
        assert apply(with_values(["key="])).args == ["--set", "key="]

    @pytest.mark.parametrize("factory", [with_values, with_values_string])
    def test_missing_equals_raises(self, factory):
        with pytest.raises(KeyValueFormatError, match="not in key=value format: broken"):
            apply(factory(["broken"]))

    def test_split_key_value(self):
        assert split_key_value("a=b=c") == ("a", "b=c")


class TestPreCommandOptions:
    """Options that register commands to run before helm."""

    def test_lint_uses_chart_set_earlier(self):
        cmd = apply(with_chart("./charts/web"), with_lint(True))
        assert cmd.pre_cmds == [["helm", "lint", "./charts/web"]]

    def test_lint_disabled(self):
        assert apply(with_chart("./charts/web"), with_lint(False)).pre_cmds == []

    def test_repos_add_then_single_update(self):
        cmd = apply(with_helm_repos(["a=https://u1", "b=https://u2"]))
        assert cmd.pre_cmds == [
            ["helm", "repo", "add", "a", "https://u1"],
            ["helm", "repo", "add", "b", "https://u2"],
            ["helm", "repo", "update"],
        ]

    def test_empty_repo_list_adds_nothing(self):
        assert apply(with_helm_repos([])).pre_cmds == []

    def test_update_once_per_call(self):
        cmd = apply(with_helm_repos(["a=u1"]), with_helm_repos(["b=u2"]))
        assert cmd.pre_cmds == [
            ["helm", "repo", "add", "a", "u1"],
            ["helm", "repo", "update"],
            ["helm", "repo", "add", "b", "u2"],
            ["helm", "repo", "update"],
        ]

    def test_malformed_repo_adds_nothing(self):
        cmd = HelmCommand()
        with pytest.raises(KeyValueFormatError, match="not in key=value format: bad"):
            with_helm_repos(["good=https://u1", "bad"])(cmd)
        assert cmd.pre_cmds == []

    def test_dependencies(self):
        cmd = apply(
            with_update_dependencies(True, "./charts/web"),
            with_build_dependencies(True, "./charts/web"),
        )
        assert cmd.pre_cmds == [
            ["helm", "dependency", "update", "./charts/web"],
            ["helm", "dependency", "build", "./charts/web"],
        ]

    def test_dependencies_disabled(self):
        cmd = apply(
            with_update_dependencies(False, "./c"),
            with_build_dependencies(False, "./c"),
        )
        assert cmd.pre_cmds == []

    def test_custom_pre_and_post_commands(self):
        cmd = apply(
            with_pre_command("kubectl", "apply", "-f", "crds.yaml"),
            with_post_command("notify", "--channel", "deploys"),
            with_post_command("true"),
        )
        assert cmd.pre_cmds == [["kubectl", "apply", "-f", "crds.yaml"]]
        assert cmd.post_cmds == [["notify", "--channel", "deploys"], ["true"]]

    @pytest.mark.parametrize("factory", [with_pre_command, with_post_command])
    def test_empty_custom_command_rejected(self, factory):
        with pytest.raises(OptionError):
            apply(factory())


class TestTestOptions:
    def test_test_flags(self):
        cmd = apply(with_test(True), with_test_rollback(True))
        assert cmd.test is True
        assert cmd.test_rollback is True
        assert cmd.args == []
