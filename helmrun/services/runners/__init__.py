"""
Command runners and process signal handling.
"""

from .signal_handler import ProcessSignalHandler
from .subprocess_runner import SubprocessRunner

__all__ = [
    "ProcessSignalHandler",
    "SubprocessRunner",
]
