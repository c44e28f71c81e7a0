"""
Pydantic models for helmrun configuration.
"""

from .base import HelmRunBaseModel
from .config import ConfigBaseModel, ExecutionConfig, HelmConfig, LoggingConfig

__all__ = [
    "ConfigBaseModel",
    "ExecutionConfig",
    "HelmConfig",
    "HelmRunBaseModel",
    "LoggingConfig",
]
