"""
Unit tests for the upgrade and rollback CLI commands.

Commands are invoked with a HelmRunContext carrying a recording runner,
so the argv helm would receive can be checked without a cluster:
- Option mapping and ordering
- Defaults taken from settings
- Exit codes and error messages
- --show-plan through the top-level group
"""

import pytest
from click.testing import CliRunner

from helmrun.cli import cli
from helmrun.cli.commands.rollback import rollback
from helmrun.cli.commands.upgrade import upgrade
from helmrun.cli.context import HelmRunContext
from helmrun.core.models.config import HelmConfig
from helmrun.core.settings import HelmRunSettings

MAIN_PREFIX = ["helm", "upgrade", "--install"]


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_ctx(recording_runner):
    def make(**helm):
        return HelmRunContext(
            settings=HelmRunSettings(helm=HelmConfig(**helm)),
            runner=recording_runner,
        )

    return make


class TestUpgradeCommand:
    def test_minimal(self, runner, make_ctx, recording_runner):
        result = runner.invoke(upgrade, ["web", "./charts/web"], obj=make_ctx())
        assert result.exit_code == 0, result.output
        assert recording_runner.calls == [[*MAIN_PREFIX, "web", "./charts/web"]]

    def test_flags_mapped_in_order(self, runner, make_ctx, recording_runner):
        result = runner.invoke(
            upgrade,
            [
                "web",
                "./charts/web",
                "-n",
                "prod",
                "--wait",
                "--atomic",
                "--timeout",
                "5m",
                "--set",
                "image.tag=v2",
                "--set-string",
                "build=0042",
                "-f",
                "values-prod.yaml",
            ],
            obj=make_ctx(),
        )
        assert result.exit_code == 0, result.output
        assert recording_runner.calls == [
            [
                *MAIN_PREFIX,
                "-n",
                "prod",
                "--atomic",
                "--values",
                "values-prod.yaml",
                "--set",
                "image.tag=v2",
                "--set-string",
                "build=0042",
                "--wait",
                "--timeout",
                "5m0s",
                "web",
                "./charts/web",
            ]
        ]

    def test_pre_commands_before_helm(self, runner, make_ctx, recording_runner):
        result = runner.invoke(
            upgrade,
            [
                "web",
                "./charts/web",
                "--repo",
                "bitnami=https://charts.bitnami.com/bitnami",
                "--update-dependencies",
                "--lint",
                "--pre-command",
                "kubectl apply -f 'crds dir/'",
                "--post-command",
                "echo done",
            ],
            obj=make_ctx(),
        )
        assert result.exit_code == 0, result.output
        assert recording_runner.calls == [
            ["helm", "repo", "add", "bitnami", "https://charts.bitnami.com/bitnami"],
            ["helm", "repo", "update"],
            ["helm", "dependency", "update", "./charts/web"],
            ["helm", "lint", "./charts/web"],
            ["kubectl", "apply", "-f", "crds dir/"],
            [*MAIN_PREFIX, "web", "./charts/web"],
            ["echo", "done"],
        ]

    def test_settings_supply_defaults(self, runner, make_ctx, recording_runner):
        ctx = make_ctx(namespace="staging", timeout="10m", repos=["stable=https://s"])
        result = runner.invoke(upgrade, ["web", "./c"], obj=ctx)
        assert result.exit_code == 0, result.output
        assert recording_runner.calls[0] == ["helm", "repo", "add", "stable", "https://s"]
        assert recording_runner.calls[-1] == [
            *MAIN_PREFIX,
            "-n",
            "staging",
            "--timeout",
            "10m0s",
            "web",
            "./c",
        ]

    def test_command_line_overrides_settings(self, runner, make_ctx, recording_runner):
        ctx = make_ctx(namespace="staging", timeout="10m")
        result = runner.invoke(
            upgrade, ["web", "./c", "-n", "prod", "--timeout", "90s"], obj=ctx
        )
        assert result.exit_code == 0, result.output
        main = recording_runner.calls[-1]
        assert main[main.index("-n") + 1] == "prod"
        assert main[main.index("--timeout") + 1] == "1m30s"

    def test_test_and_rollback(self, runner, make_ctx, recording_runner):
        recording_runner.fail("helm", "test", "--logs", "web", message="pod web-test failed")
        result = runner.invoke(
            upgrade, ["web", "./c", "--test", "--test-rollback"], obj=make_ctx()
        )
        assert result.exit_code == 1
        assert "Error: pod web-test failed" in result.output
        assert recording_runner.calls[-1] == ["helm", "rollback", "web"]

    def test_helm_failure_exit_code(self, runner, make_ctx, recording_runner):
        recording_runner.fail(*MAIN_PREFIX, "web", "./c", message="UPGRADE FAILED")
        result = runner.invoke(upgrade, ["web", "./c"], obj=make_ctx())
        assert result.exit_code == 1
        assert "Error: helm failed: UPGRADE FAILED" in result.output

    def test_bad_set_value_is_usage_error(self, runner, make_ctx, recording_runner):
        result = runner.invoke(upgrade, ["web", "./c", "--set", "nope"], obj=make_ctx())
        assert result.exit_code == 2
        assert "unable to parse option: not in key=value format: nope" in result.output
        assert recording_runner.calls == []

    def test_bad_timeout_rejected_by_click(self, runner, make_ctx, recording_runner):
        result = runner.invoke(upgrade, ["web", "./c", "--timeout", "soon"], obj=make_ctx())
        assert result.exit_code == 2
        assert "invalid duration" in result.output
        assert recording_runner.calls == []

    @pytest.mark.parametrize("option", ["--timeout", "--deadline"])
    def test_overflowing_duration_rejected_by_click(
        self, runner, make_ctx, recording_runner, option
    ):
        result = runner.invoke(
            upgrade, ["web", "./c", option, "99999999999h", "--show-plan"], obj=make_ctx()
        )
        assert result.exit_code == 2
        assert "invalid duration: '99999999999h'" in result.output
        assert recording_runner.calls == []

    def test_empty_pre_command_rejected(self, runner, make_ctx):
        result = runner.invoke(upgrade, ["web", "./c", "--pre-command", "  "], obj=make_ctx())
        assert result.exit_code == 2
        assert "command must not be empty" in result.output

    def test_show_plan_runs_nothing(self, runner, make_ctx, recording_runner):
        result = runner.invoke(
            upgrade,
            ["web", "./c", "--lint", "--test", "--test-rollback", "--show-plan"],
            obj=make_ctx(),
        )
        assert result.exit_code == 0, result.output
        assert recording_runner.calls == []
        assert result.output.splitlines() == [
            "  1. helm lint ./c",
            "  2. helm upgrade --install web ./c",
            "  3. helm test --logs web",
            "     on test failure: helm rollback web",
        ]


class TestRollbackCommand:
    def test_rollback(self, runner, make_ctx, recording_runner):
        result = runner.invoke(rollback, ["web", "-n", "prod", "--wait"], obj=make_ctx())
        assert result.exit_code == 0, result.output
        assert recording_runner.calls == [["helm", "rollback", "-n", "prod", "--wait", "web"]]

    def test_rollback_has_no_chart_options(self, runner, make_ctx):
        result = runner.invoke(rollback, ["web", "--set", "a=b"], obj=make_ctx())
        assert result.exit_code == 2
        assert "No such option" in result.output

    def test_rollback_failure(self, runner, make_ctx, recording_runner):
        recording_runner.fail("helm", "rollback", "web", message="release: not found")
        result = runner.invoke(rollback, ["web"], obj=make_ctx())
        assert result.exit_code == 1
        assert "Error: helm failed: release: not found" in result.output


class TestGroup:
    def test_no_subcommand_prints_help(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "upgrade" in result.output
        assert "rollback" in result.output

    def test_show_plan_via_group(self, runner):
        result = runner.invoke(cli, ["upgrade", "web", "./c", "-n", "prod", "--show-plan"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "1. helm upgrade --install -n prod web ./c"

    def test_config_file_defaults(self, runner, tmp_path):
        config = tmp_path / "deploy.toml"
        config.write_text('[helm]\nnamespace = "from-config"\n')
        result = runner.invoke(
            cli, ["--config", str(config), "rollback", "web", "--show-plan"]
        )
        assert result.exit_code == 0, result.output
        assert "helm rollback -n from-config web" in result.output

    def test_broken_config_file(self, runner, tmp_path):
        config = tmp_path / "broken.toml"
        config.write_text("[helm\n")
        result = runner.invoke(cli, ["--config", str(config), "rollback", "web"])
        assert result.exit_code == 1
        assert "Failed to parse config file" in result.output

    @pytest.mark.parametrize(
        "config_text",
        ['[helm]\ntimeout = "five minutes"\n', '[logging]\nlevel = "loud"\n'],
    )
    def test_invalid_config_value(self, runner, tmp_path, config_text):
        (tmp_path / ".helmrun.toml").write_text(config_text)
        result = runner.invoke(cli, ["rollback", "web", "--show-plan"])
        assert result.exit_code == 1
        assert "Error: Invalid configuration:" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_invalid_env_value(self, runner, monkeypatch):
        monkeypatch.setenv("HELMRUN_HELM__TIMEOUT", "soon")
        result = runner.invoke(cli, ["rollback", "web", "--show-plan"])
        assert result.exit_code == 1
        assert "Error: Invalid configuration: helm.timeout" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "helmrun" in result.output
