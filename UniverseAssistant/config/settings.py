# config/settings.py
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # Universe defaults
    DEFAULT_UNIVERSE_NAME: str = "Univers"
    UNNAMED_UNIVERSE_NAME: str = "Univers sans nom"

    # Upper bounds on the (untrusted) universe document
    MAX_CLASSES: int = 500
    MAX_OBJECTS_PER_CLASS: int = 2000
    MAX_OBJECTS: int = 20000  # across all classes
    MAX_TABLES: int = 2000
    MAX_JOINS: int = 5000
    MAX_STRING_LENGTH: int = 4000

    # Matching
    MAX_QUESTION_LENGTH: int = 1000
    MAX_QUESTION_TOKENS: int = 64
    MAX_MATCHES_PER_CATEGORY: Optional[int] = None  # None = no cap

    # Answer
    ANSWER_TOP_NAMES: int = 3

    model_config = SettingsConfigDict(env_prefix="UNIVERSE_", env_file=".env", extra="ignore")

settings = Settings()
