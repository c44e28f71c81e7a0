"""
Native Click implementation of the rollback command.

Usage: helmrun rollback [options] RELEASE
"""

from __future__ import annotations

from typing import Any

import click

from ...services.helm import with_rollback_mode
from ..context import HelmRunContext
from ._deploy import build_and_run, common_options, leading_options, trailing_options


@click.command("rollback")
@click.argument("release")
@common_options
@click.pass_obj
def rollback(ctx: HelmRunContext, release: str, **params: Any) -> None:
    """Roll RELEASE back to its previous revision.

    \b
    Examples:
        helmrun rollback web -n prod --wait
        helmrun rollback web --test
    """
    options = leading_options(ctx, release, params)
    options.extend(trailing_options(ctx, params))

    build_and_run(ctx, with_rollback_mode(), options, params)
