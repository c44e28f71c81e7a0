"""
Shared pytest fixtures for helmrun tests.

This module provides:
- RecordingRunner: an IRunner double that records invocations and fails
  on demand, so commands can be exercised without spawning helm
- recording_runner: a fresh RecordingRunner per test
- isolated state: container reset and HELMRUN_* variables cleared
"""

from __future__ import annotations

import os

import pytest

from helmrun.core.bootstrap import reset
from helmrun.core.context import ExecutionContext
from helmrun.core.exceptions import CommandFailedError
from helmrun.core.interfaces.runner import IRunner


class RecordingRunner(IRunner):
    """Runner double: records every argv, fails those registered with fail()."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.contexts: list[ExecutionContext] = []
        self._failures: dict[tuple[str, ...], str] = {}

    def fail(self, *argv: str, message: str = "exit status 1") -> None:
        """Make the exact argv fail with `message`."""
        self._failures[argv] = message

    def run(self, ctx: ExecutionContext, command: str, *args: str) -> None:
        argv = [command, *args]
        self.calls.append(argv)
        self.contexts.append(ctx)
        message = self._failures.get(tuple(argv))
        if message is not None:
            raise CommandFailedError(message, command=command, args=list(args), returncode=1)


@pytest.fixture
def recording_runner() -> RecordingRunner:
    """Provide a fresh RecordingRunner."""
    return RecordingRunner()


@pytest.fixture(autouse=True)
def _isolate_helmrun(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """
    Keep tests independent of the developer's environment.

    Clears HELMRUN_* variables, runs from an empty directory so no config
    file is discovered, and resets the service container afterwards.
    """
    for name in list(os.environ):
        if name.startswith("HELMRUN_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset()
    yield
    reset()
