import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from bloomsync.core.config import settings
from bloomsync.core.errors import AdvisoryServiceError
from bloomsync.core.genai_client import get_json_chat_model
from bloomsync.models.advisory import (
    LANGUAGE_NAMES,
    RISK_LABELS,
    AdvisoryOutcome,
    AdvisoryResult,
    AdvisoryState,
    Language,
    RiskLevel,
)
from bloomsync.models.climate import ClimateRecord
from bloomsync.models.farmer_input import FarmerInputCreate
from bloomsync.prompts.pollination_risk_prompt import (
    POLLINATION_RISK_SYSTEM_PROMPT,
    POLLINATION_RISK_USER_PROMPT,
)

logger = logging.getLogger(__name__)

FALLBACK_RESULTS: Dict[Language, AdvisoryResult] = {
    Language.ENGLISH: AdvisoryResult(
        risk_score=RISK_LABELS[Language.ENGLISH][RiskLevel.MODERATE],
        explanation=(
            "Error connecting to AI advisor. Based on historical data, "
            "a moderate shift is expected."
        ),
        recommendations=[
            "Monitor local weather patterns",
            "Consider early sowing",
            "Consult local agriculture experts",
        ],
    ),
    Language.TELUGU: AdvisoryResult(
        risk_score=RISK_LABELS[Language.TELUGU][RiskLevel.MODERATE],
        explanation=(
            "AI సలహాదారుని కనెక్ట్ చేయడంలో లోపం. చారిత్రక డేటా ఆధారంగా, "
            "మధ్యస్థ మార్పు అంచనా వేయబడింది."
        ),
        recommendations=[
            "స్థానిక వాతావరణ నమూనాలను పర్యవేక్షించండి",
            "ముందస్తు విత్తడం గురించి ఆలోచించండి",
            "స్థానిక వ్యవసాయ నిపుణులను సంప్రదించండి",
        ],
    ),
}


def fallback_result(language: Language) -> AdvisoryResult:
    return FALLBACK_RESULTS[Language(language)].model_copy(deep=True)


def build_messages(
    submission: FarmerInputCreate,
    climate_history: Sequence[ClimateRecord],
    language: Language,
) -> List[BaseMessage]:
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", "{system_prompt}"),
            ("human", POLLINATION_RISK_USER_PROMPT),
        ]
    )
    history = [record.model_dump(mode="json", exclude={"id"}) for record in climate_history]
    return prompt.format_messages(
        system_prompt=POLLINATION_RISK_SYSTEM_PROMPT,
        crop_name=submission.crop_name,
        crop_category=submission.crop_category.value,
        sowing_date=submission.sowing_date.isoformat(),
        location_name=submission.location_name,
        year_count=len(history),
        climate_history=json.dumps(history),
        risk_labels=", ".join(RISK_LABELS[language].values()),
        language_name=LANGUAGE_NAMES[language],
    )


def _message_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    raise AdvisoryServiceError(f"Unsupported response content: {type(content).__name__}")


def parse_advisory_response(content: Any) -> AdvisoryResult:
    """
    Parse the model reply into an AdvisoryResult.

    Only the shape is checked; the risk label and wording are passed through
    as the model wrote them.
    """
    text = _message_text(content)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise AdvisoryServiceError(f"Advisor reply is not JSON: {e}") from e
    try:
        result = AdvisoryResult.model_validate(payload)
    except ValidationError as e:
        raise AdvisoryServiceError(f"Advisor reply has the wrong shape: {e}") from e
    return result


class RiskAdvisoryClient:
    """
    Asks the generation model for a pollination mismatch risk assessment.

    ``assess`` never raises: one attempt is made and any failure turns into
    the fixed fallback result for the requested language.
    """

    def __init__(
        self,
        chat_model: Optional[BaseChatModel] = None,
        *,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._chat_model = chat_model
        self.model_name = model_name or settings.ADVISORY_MODEL
        self.timeout = timeout if timeout is not None else settings.ADVISORY_TIMEOUT_SECONDS

    def _get_chat_model(self) -> BaseChatModel:
        if self._chat_model is None:
            self._chat_model = get_json_chat_model(
                model=self.model_name, timeout=self.timeout
            )
        return self._chat_model

    async def _request(self, messages: List[BaseMessage]) -> AdvisoryResult:
        try:
            response = await asyncio.wait_for(
                self._get_chat_model().ainvoke(messages), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AdvisoryServiceError(
                f"Advisor did not answer within {self.timeout}s"
            ) from e
        except Exception as e:
            raise AdvisoryServiceError(f"Advisor request failed: {e}") from e
        return parse_advisory_response(response.content)

    async def assess(
        self,
        submission: FarmerInputCreate,
        climate_history: Sequence[ClimateRecord],
        language: Language = Language.ENGLISH,
    ) -> AdvisoryOutcome:
        try:
            language = Language(language)
        except ValueError:
            logger.warning("Unsupported advisory language %r, using English", language)
            language = Language.ENGLISH
        state = AdvisoryState.IDLE
        try:
            messages = build_messages(submission, climate_history, language)
            state = AdvisoryState.REQUESTING
            result = await self._request(messages)
        except AdvisoryServiceError as e:
            logger.warning(
                "Falling back to canned advisory for %s (%s): %s",
                submission.crop_name,
                language.value,
                e,
            )
        except Exception:
            logger.exception(
                "Unexpected advisory failure for %s (%s), state=%s",
                submission.crop_name,
                language.value,
                state.value,
            )
        else:
            return AdvisoryOutcome(state=AdvisoryState.SUCCEEDED, result=result)
        return AdvisoryOutcome(
            state=AdvisoryState.FAILED_FALLBACK, result=fallback_result(language)
        )
