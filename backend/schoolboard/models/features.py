"""Feature flag models."""

from typing import Dict

from pydantic import BaseModel, Field


class FeatureFlagUpsert(BaseModel):
    """Global toggle with optional per-school overrides."""
    name: str = Field(min_length=1)
    description: str = ""
    enabled: bool
    enabled_for_schools: Dict[str, bool] = {}  # {school_id: enabled}
    default_enabled: bool = False
