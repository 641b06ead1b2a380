from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    ENGLISH = "en"
    TELUGU = "te"


LANGUAGE_NAMES: Dict[Language, str] = {
    Language.ENGLISH: "English",
    Language.TELUGU: "Telugu",
}


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


# Labels the model is told to use for riskScore, per response language.
RISK_LABELS: Dict[Language, Dict[RiskLevel, str]] = {
    Language.ENGLISH: {
        RiskLevel.LOW: "Low",
        RiskLevel.MODERATE: "Moderate",
        RiskLevel.HIGH: "High",
    },
    Language.TELUGU: {
        RiskLevel.LOW: "తక్కువ",
        RiskLevel.MODERATE: "మధ్యస్థం",
        RiskLevel.HIGH: "ఎక్కువ",
    },
}


class AdvisoryState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED_FALLBACK = "failed_fallback"


class AdvisoryResult(BaseModel):
    """Pollination mismatch risk as judged by the AI advisor."""

    model_config = ConfigDict(populate_by_name=True)

    risk_score: str = Field(
        alias="riskScore",
        min_length=1,
        description="Low, Moderate or High, in the requested language.",
    )
    explanation: str = Field(description="Short explanation of the mismatch risk.")
    recommendations: List[str] = Field(
        min_length=3,
        max_length=4,
        description="Actionable steps for the farmer.",
    )


class AdvisoryOutcome(BaseModel):
    state: AdvisoryState
    result: AdvisoryResult

    @property
    def is_fallback(self) -> bool:
        return self.state == AdvisoryState.FAILED_FALLBACK


class AdvisoryRequest(BaseModel):
    submission_id: int = Field(description="Id of a stored farmer submission.")
    language: Language = Field(default=Language.ENGLISH)
