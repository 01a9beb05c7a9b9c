"""Configuration schema with Pydantic for type safety and validation."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = "MarkovTextFetcher/1.0 (+markov-text)"


class LogLevel(str, Enum):
    """Logging level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GeneratorConfig(BaseModel):
    """Markov chain and generation settings."""

    order: int = Field(default=1, ge=1, le=2, description="Words per chain state")
    max_words: int = Field(
        default=100, ge=0, description="Maximum number of words to generate"
    )
    seed: Optional[int] = Field(
        default=None, description="Fixed random seed for reproducible output"
    )


class FetchConfig(BaseModel):
    """HTTP corpus fetch settings."""

    timeout_sec: float = Field(default=10.0, gt=0.0, le=300.0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    allow_redirects: bool = Field(default=True)

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("user_agent must not be blank")
        return value


class AppConfig(BaseModel):
    """Complete application configuration schema."""

    log_level: LogLevel = Field(default=LogLevel.WARNING)
    event_log_file: Optional[str] = Field(
        default=None, description="JSON-lines file recording each generation run"
    )
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    model_config = ConfigDict(
        use_enum_values=True,
        validate_assignment=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return self.model_dump(mode="python", exclude_none=True)
