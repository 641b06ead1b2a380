import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    MONGO_URI: str = os.environ.get("MONGO_URI", "")
    MONGO_DIRECT_URI: str = os.environ.get("MONGO_DIRECT_URI", "")
    MONGO_DB_NAME: str = "bloomsync"
    ADVISORY_MODEL: str = "gemini-2.5-flash"
    ADVISORY_TIMEOUT_SECONDS: float = 10.0
    CLIMATE_BASE_YEAR: int = 2006
    CLIMATE_SEED: Optional[int] = None
    LOG_LEVEL: str = "INFO"


settings = Settings()
