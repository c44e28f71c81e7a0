"""
Click-based CLI for helmrun.

Usage:
    from helmrun.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from ..core.exceptions import HelmRunException
from .context import HelmRunContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("helmrun")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="helmrun")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: nearest .helmrun.toml or pyproject.toml [tool.helmrun])",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """helmrun - run helm upgrade/rollback with pre/post steps

    Wraps a single helm release operation with optional chart linting,
    repository registration, dependency builds, custom commands, and a
    post-deploy `helm test` that can roll the release back on failure.

    \b
    Commands:
        helmrun upgrade RELEASE CHART   Install or upgrade a release
        helmrun rollback RELEASE        Roll a release back
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    try:
        ctx.obj = HelmRunContext.create(config_path=config_path, verbose=verbose)
    except HelmRunException as e:
        raise click.ClickException(str(e)) from e


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "HelmRunContext",
    "__version__",
    "cli",
    "register_commands",
]
