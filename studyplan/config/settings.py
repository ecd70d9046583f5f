from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CANDIDATE_NAME = "JULIET ONYINYE O"


class Settings(BaseSettings):
    owner_id: str = Field(
        default="owner",
        validation_alias="SCHEDULE_OWNER_ID",
        description="Identity that creates, and therefore owns, the schedule served by the API",
    )
    candidate_name: str = Field(
        default=DEFAULT_CANDIDATE_NAME,
        validation_alias="SCHEDULE_CANDIDATE_NAME",
        description="Candidate label seeded into a new schedule",
    )
    api_url: str = Field(
        default="http://127.0.0.1:8000",  # Default for local dev; CLI target
        validation_alias="SCHEDULE_API_URL",
    )
    server_host: str = Field(default="127.0.0.1", validation_alias="SERVER_HOST")
    server_port: int = Field(default=8000, validation_alias="SERVER_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

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

    @field_validator("owner_id")
    @classmethod
    def validate_owner_id(cls, value: str) -> str:
        """Owner identity must be non-blank; authorization compares against it."""
        if not value.strip():
            raise ValueError("SCHEDULE_OWNER_ID must not be blank")
        return value

    @field_validator("candidate_name")
    @classmethod
    def validate_candidate_name(cls, value: str) -> str:
        if not value.strip():
            logger.warning(f"SCHEDULE_CANDIDATE_NAME is blank. Defaulting to '{DEFAULT_CANDIDATE_NAME}'.")
            return DEFAULT_CANDIDATE_NAME
        return value


settings = Settings()
