"""
Interface definitions for helmrun's collaborators.
"""

from .logger import ILogger
from .runner import IRunner

__all__ = [
    "ILogger",
    "IRunner",
]
