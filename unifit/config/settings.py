from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")
    log_json: bool = Field(
        default=False,
        validation_alias="LOG_JSON",
        description="Write the log file as serialized JSON records",
    )
    advisory_model: str = Field(
        default="gpt-4o-mini",
        validation_alias="ADVISORY_MODEL",
        description="OpenAI model used by every advisor agent",
    )
    llm_timeout_seconds: float = Field(
        default=20.0,
        validation_alias="LLM_TIMEOUT_SECONDS",
        description="Upper bound for a single advisor call before it counts as failed",
    )
    tick_interval_seconds: float = Field(
        default=1.0,
        validation_alias="TICK_INTERVAL_SECONDS",
        description="Cadence of the activity session tick",
    )
    weather_condition: str = Field(
        default="Sunny 25°C",
        validation_alias="WEATHER_CONDITION",
        description="Weather condition passed to the hydration advisor",
    )
    default_calories_target: int = Field(default=2400, validation_alias="DEFAULT_CALORIES_TARGET")
    default_water_target_ml: int = Field(default=2500, validation_alias="DEFAULT_WATER_TARGET_ML")
    default_steps_target: int = Field(default=10000, validation_alias="DEFAULT_STEPS_TARGET")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("tick_interval_seconds", "llm_timeout_seconds")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"interval must be positive, got {value}")
        return value

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        """Warn when advisors will only ever produce fallbacks.

        Empty keys are allowed for local development and tests.
        """
        if not value:
            logger.warning(
                "OPENAI_API_KEY is not set. Advisor calls will fail and every advisory "
                "will use its fallback payload."
            )
        return value


settings = Settings()
