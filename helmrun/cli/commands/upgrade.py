"""
Native Click implementation of the upgrade command.

Usage: helmrun upgrade [options] RELEASE CHART
"""

from __future__ import annotations

from typing import Any

import click

from ...services.helm import (
    with_atomic,
    with_build_dependencies,
    with_chart,
    with_helm_repos,
    with_install_upgrade_mode,
    with_lint,
    with_update_dependencies,
    with_values,
    with_values_string,
    with_values_yaml,
)
from ..context import HelmRunContext
from ._deploy import build_and_run, common_options, leading_options, trailing_options


@click.command("upgrade")
@click.argument("release")
@click.argument("chart")
@common_options
@click.option("--atomic", is_flag=True, help="Pass --atomic to helm")
@click.option("--lint", is_flag=True, help="Run `helm lint` on the chart first")
@click.option("--set", "values", multiple=True, metavar="KEY=VALUE", help="Set a value (repeatable)")
@click.option(
    "--set-string",
    "values_string",
    multiple=True,
    metavar="KEY=VALUE",
    help="Set a string value (repeatable)",
)
@click.option("-f", "--values", "values_yaml", help="Values YAML file")
@click.option(
    "--repo",
    "repos",
    multiple=True,
    metavar="NAME=URL",
    help="Add a chart repository first (repeatable, default from config)",
)
@click.option("--build-dependencies", is_flag=True, help="Run `helm dependency build` first")
@click.option("--update-dependencies", is_flag=True, help="Run `helm dependency update` first")
@click.pass_obj
def upgrade(ctx: HelmRunContext, release: str, chart: str, **params: Any) -> None:
    """Install or upgrade RELEASE from CHART.

    Runs `helm upgrade --install [flags] RELEASE CHART`, preceded by any
    repository, dependency, lint and custom pre-commands, and followed by
    the optional test step and custom post-commands.

    \b
    Examples:
        helmrun upgrade web ./charts/web -n prod --wait --timeout 5m
        helmrun upgrade web bitnami/nginx --repo bitnami=https://charts.bitnami.com/bitnami
        helmrun upgrade web ./charts/web --test --test-rollback
    """
    repos = list(params["repos"]) or ctx.settings.helm.repos

    options = leading_options(ctx, release, params)
    options.extend(
        [
            with_chart(chart),
            with_helm_repos(repos),
            with_update_dependencies(params["update_dependencies"], chart),
            with_build_dependencies(params["build_dependencies"], chart),
            with_lint(params["lint"]),
            with_atomic(params["atomic"]),
            with_values_yaml(params["values_yaml"]),
            with_values(params["values"]),
            with_values_string(params["values_string"]),
        ]
    )
    options.extend(trailing_options(ctx, params))

    build_and_run(ctx, with_install_upgrade_mode(), options, params)
