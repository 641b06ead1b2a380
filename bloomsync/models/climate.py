from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class ClimateRecord(BaseModel):
    """One year of simulated climate and bloom-timing history."""

    id: Optional[int] = Field(
        default=None,
        description="Auto-incremented record id, given by system.",
        validation_alias=AliasChoices("id", "_id"),
    )
    year: int = Field(description="Calendar year of the observation.")
    avg_temp: float = Field(description="Average temperature in °C.")
    peak_bloom_day: int = Field(description="Day of year the crop flowering peaks.")
    pollinator_peak_day: int = Field(
        description="Day of year pollinator activity peaks."
    )


class OverlapBand(str, Enum):
    """Quick-glance reading of the synchrony index."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ClimateSummary(BaseModel):
    """Headline numbers for the climate and bloom analysis view."""

    record_count: int = Field(description="Number of years in the history.")
    latest_year: Optional[int] = Field(
        default=None, description="Most recent year in the history."
    )
    overlap_index: int = Field(
        ge=0, le=100, description="Synchrony index of the most recent year."
    )
    overlap_band: OverlapBand
    avg_temp_shift: float = Field(
        description="Change in average temperature from first to last year, °C."
    )
    bloom_shift_days: int = Field(
        description="Change in peak bloom day from first to last year; negative is earlier."
    )
