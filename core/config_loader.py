import yaml
import os
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator

from core.quota.tracker import DEFAULT_LIMITS, WINDOW_SECONDS


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///applytrack.db"
    echo: bool = False


class ReasoningConfig(BaseModel):
    """OpenAI-compatible reasoning service used for score adjustment."""
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.0
    max_tokens: int = 1500
    request_timeout_seconds: float = 20.0
    # One bounded retry for transient failures only (timeouts, 5xx)
    max_transient_retries: int = 1

    @field_validator("request_timeout_seconds")
    @classmethod
    def _timeout_in_range(cls, value: float) -> float:
        if not 10.0 <= value <= 30.0:
            raise ValueError("request_timeout_seconds must be between 10 and 30")
        return value

    @field_validator("max_transient_retries")
    @classmethod
    def _retries_bounded(cls, value: int) -> int:
        if not 0 <= value <= 1:
            raise ValueError("max_transient_retries must be 0 or 1")
        return value


class QuotaConfig(BaseModel):
    """Hourly call budgets per operation type."""
    limits: Dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_LIMITS))
    window_seconds: int = WINDOW_SECONDS

    @field_validator("limits")
    @classmethod
    def _merge_defaults(cls, value: Dict[str, int]) -> Dict[str, int]:
        merged = dict(DEFAULT_LIMITS)
        merged.update(value or {})
        for op, limit in merged.items():
            if limit < 0:
                raise ValueError(f"Quota limit for {op} must be >= 0")
        return merged


class ScoringConfig(BaseModel):
    # Descriptions shorter than this are rejected before scoring
    min_description_chars: int = 50
    # Description text sent to the reasoning service is truncated to this
    description_char_limit: int = 3000


class UsageConfig(BaseModel):
    # When disabled, usage entries are kept in memory only
    enabled: bool = True


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    reasoning: ReasoningConfig = Field(default_factory=ReasoningConfig)
    quota: QuotaConfig = Field(default_factory=QuotaConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    usage: UsageConfig = Field(default_factory=UsageConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another cwd), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        # Empty sections ("reasoning:" with nothing under it) load as None
        data = {k: v for k, v in data.items() if v is not None}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data['database'] = data.get('database') or {}
        data['database']['url'] = env_db_url

    # Allow env var overrides for the reasoning service
    reasoning = data.get('reasoning') or {}
    data['reasoning'] = reasoning
    env_base_url = os.environ.get("REASONING_BASE_URL")
    if env_base_url:
        reasoning['base_url'] = env_base_url
    env_api_key = os.environ.get("REASONING_API_KEY")
    if env_api_key:
        reasoning['api_key'] = env_api_key
    elif not reasoning.get('api_key') and os.environ.get("OPENAI_API_KEY"):
        reasoning['api_key'] = os.environ["OPENAI_API_KEY"]
    env_model = os.environ.get("REASONING_MODEL")
    if env_model:
        reasoning['model'] = env_model

    return AppConfig(**data)
