"""
Click command implementations for helmrun CLI.

Commands are registered with the main CLI group via the
register_commands() function in helmrun.cli.
"""

from .rollback import rollback
from .upgrade import upgrade

COMMANDS = [
    rollback,
    upgrade,
]

__all__ = [
    "COMMANDS",
    "rollback",
    "upgrade",
]
