"""
helmrun - run helm upgrade/rollback with pre/post steps and test-driven rollback.

Library usage:
    from helmrun import ExecutionContext, new_helm_cmd
    from helmrun.services.helm import with_install_upgrade_mode, with_release, ...
"""

from .core.context import ExecutionContext
from .services.helm import HelmCommand, new_helm_cmd

__all__ = [
    "ExecutionContext",
    "HelmCommand",
    "new_helm_cmd",
]
