"""
Base Pydantic models for helmrun.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HelmRunBaseModel(BaseModel):
    """Base model for all helmrun Pydantic models.

    Configuration:
        - strict: Strict type coercion (no implicit conversions)
        - validate_assignment: Validate on attribute assignment
        - extra: Reject unknown fields
        - populate_by_name: Allow field aliases
        - use_enum_values: Serialize enums as values
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )
