from langchain_google_genai import (
    ChatGoogleGenerativeAI,
    HarmBlockThreshold,
    HarmCategory,
)

from .config import settings

DEFAULT_SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
}


def get_chat_model(model: str, **kwargs) -> ChatGoogleGenerativeAI:
    if "google_api_key" not in kwargs and "api_key" not in kwargs:
        kwargs["google_api_key"] = settings.GEMINI_API_KEY
    if "safety_settings" not in kwargs:
        kwargs["safety_settings"] = DEFAULT_SAFETY_SETTINGS
    return ChatGoogleGenerativeAI(model=model, **kwargs)


def get_json_chat_model(model: str, timeout: float, **kwargs) -> ChatGoogleGenerativeAI:
    """Chat model that answers with a bare JSON document and never retries."""
    kwargs.setdefault("response_mime_type", "application/json")
    kwargs.setdefault("max_retries", 0)
    return get_chat_model(model=model, timeout=timeout, **kwargs)
