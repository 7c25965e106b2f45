from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from app.store.schema import TableSchema

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# must match the front-end's list of learning skills
DEFAULT_LEARNING_SKILLS = [
    "Responsibility",
    "Organization",
    "Independent Work",
    "Collaboration",
    "Initiative",
    "Self-Regulation",
]


class Settings(BaseSettings):
    APP_TITLE: str = "Report Card API"
    DATABASE_URL: str = f"sqlite:///{BASE_DIR}/report_cards.db"

    # Table layout
    TABLE_NAME: str = "Grades"
    LEARNING_SKILLS: Annotated[list[str], NoDecode] = DEFAULT_LEARNING_SKILLS
    COMMENT_MAX_LENGTH: int = 500

    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LEARNING_SKILLS", "CORS_ORIGINS", mode="before")
    @classmethod
    def _split_commas(cls, v):
        # "a, b ,c" -> ["a", "b", "c"]
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    def table_schema(self) -> TableSchema:
        return TableSchema(table_name=self.TABLE_NAME, skills=tuple(self.LEARNING_SKILLS))


@lru_cache
def get_settings() -> Settings:
    return Settings()
