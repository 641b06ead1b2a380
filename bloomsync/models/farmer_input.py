from datetime import date, datetime
from enum import Enum
from numbers import Real

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CropCategory(str, Enum):
    """How the crop gets pollinated."""

    POLLINATOR_DEPENDENT = "pollinator-dependent"
    SELF_POLLINATING = "self-pollinating"


class FarmerInputCreate(BaseModel):
    """Crop and sowing details as submitted by a farmer."""

    model_config = ConfigDict(str_strip_whitespace=True)

    crop_name: str = Field(min_length=1, description="Name of the crop sown.")
    location_name: str = Field(min_length=1, description="Village, town or district.")
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    sowing_date: date = Field(description="Sowing date, ISO formatted.")
    crop_category: CropCategory = Field(default=CropCategory.POLLINATOR_DEPENDENT)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _require_number(cls, value):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError("must be a number")
        return value

    @field_validator("sowing_date", mode="before")
    @classmethod
    def _require_iso_date(cls, value):
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValueError("must be an ISO date string")
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError("must be an ISO date string (YYYY-MM-DD)") from None


class FarmerInput(FarmerInputCreate):
    """A stored submission."""

    id: int = Field(
        description="Auto-incremented submission id, given by system.",
        validation_alias=AliasChoices("id", "_id"),
    )
    created_at: datetime = Field(description="Server time the submission was stored.")


class FarmerInputCreated(BaseModel):
    id: int
