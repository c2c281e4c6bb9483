"""Pydantic schema for the sensor configuration file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SensorConfiguration(BaseModel):
    """Identity, operating range and alert thresholds for one sensor."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, allow_inf_nan=False)

    name: str = Field(..., description="Display name of the sensor.")
    location: str = Field(..., description="Room or rack the sensor is mounted in.")
    min_value: float = Field(..., alias="minValue")
    max_value: float = Field(..., alias="maxValue")
    min_threshold: float = Field(..., alias="minThreshold")
    max_threshold: float = Field(..., alias="maxThreshold")

    @field_validator("name", "location")
    @classmethod
    def require_text(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate:
            raise ValueError("must not be empty")
        return candidate

    @model_validator(mode="after")
    def check_ranges(self) -> "SensorConfiguration":
        if self.min_value >= self.max_value:
            raise ValueError(
                f"minValue ({self.min_value}) must be less than maxValue ({self.max_value})"
            )
        if self.min_threshold >= self.max_threshold:
            raise ValueError(
                f"minThreshold ({self.min_threshold}) must be less than "
                f"maxThreshold ({self.max_threshold})"
            )
        return self
