"""
Runner interface: the collaborator that actually executes a command line.

The execution engine never spawns processes itself. Production code
injects a SubprocessRunner; tests inject a recording double.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..context import ExecutionContext


class IRunner(ABC):
    """Interface for command execution."""

    @abstractmethod
    def run(self, ctx: ExecutionContext, command: str, *args: str) -> None:
        """
        Execute a command and wait for it to finish.

        Args:
            ctx: Cancellation/deadline context the runner must honor
            command: Executable name (first argv element)
            *args: Remaining argv elements

        Raises:
            CommandFailedError: If the command could not be run, exited
                non-zero, was cancelled, or ran past the deadline
        """
        pass
