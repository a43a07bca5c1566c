from pathlib import Path
from typing import List, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    project_name: str = "Philosophy Paper Search"
    log_level: str = "INFO"

    openai_api_key: Optional[SecretStr] = Field(default=None, description="OpenAI API key for answer synthesis")
    llm_model: str = "gpt-4o-mini"

    semantic_scholar_api_key: Optional[SecretStr] = Field(
        default=None,
        description="Semantic Scholar API key (optional, raises rate limits)"
    )
    core_api_key: Optional[SecretStr] = Field(
        default=None,
        description="CORE API key (required for the CORE source)"
    )

    # Priority order: earlier sources win when titles collide during merge
    enabled_sources: List[str] = Field(
        default_factory=lambda: ["semantic-scholar", "crossref", "core"],
        description="Source tags to query, in merge priority order"
    )
    source_timeout_seconds: float = Field(default=10.0, gt=0, le=60)
    default_result_limit: int = Field(default=5, ge=1, le=50)
    duplicate_title_threshold: float = Field(default=0.8, ge=0.0, le=1.0)

    # API contact email used in User-Agent headers for polite API access
    api_contact_email: str = Field(
        default="contact@philsearch.example.org",
        description="Email for API contact/User-Agent (update with your real email)"
    )

    @property
    def API_CONTACT_EMAIL(self) -> str:
        return self.api_contact_email

    @property
    def OPENAI_API_KEY(self) -> Optional[str]:
        if self.openai_api_key:
            return self.openai_api_key.get_secret_value()
        return None

    @property
    def SEMANTIC_SCHOLAR_API_KEY(self) -> Optional[str]:
        if self.semantic_scholar_api_key:
            return self.semantic_scholar_api_key.get_secret_value()
        return None

    @property
    def CORE_API_KEY(self) -> Optional[str]:
        if self.core_api_key:
            return self.core_api_key.get_secret_value()
        return None

    @property
    def PROJECT_NAME(self) -> str:
        return self.project_name

    @property
    def LLM_MODEL(self) -> str:
        return self.llm_model

    @property
    def SOURCE_TIMEOUT_SECONDS(self) -> float:
        return self.source_timeout_seconds

    @property
    def ENABLED_SOURCES(self) -> List[str]:
        return list(self.enabled_sources)


settings = Settings()
