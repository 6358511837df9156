from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from typing import Optional
from pydantic_settings import BaseSettings

DEFAULT_DIALOGUE_API_URL = "https://general-runtime.voiceflow.com"
DEFAULT_AIRTABLE_API_URL = "https://api.airtable.com/v0"

# Project root (parent of flowrelay/) - used so .env is found regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Explicitly load .env into os.environ so it works in tests and subprocesses
load_dotenv(_PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    app_name: str = "flowrelay"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    port: int = Field(default=8000, json_schema_extra={"env": "PORT"})

    # Telegram
    telegram_enabled: bool = Field(
        default=False, json_schema_extra={"env": "TELEGRAM_ENABLED"}
    )
    telegram_bot_token: Optional[str] = Field(
        default=None, json_schema_extra={"env": "TELEGRAM_BOT_TOKEN"}
    )
    telegram_mode: str = Field(
        default="polling", json_schema_extra={"env": "TELEGRAM_MODE"}
    )  # polling | webhook
    telegram_webhook_url: Optional[str] = Field(
        default=None, json_schema_extra={"env": "TELEGRAM_WEBHOOK_URL"}
    )
    telegram_webhook_secret: Optional[str] = Field(
        default=None, json_schema_extra={"env": "TELEGRAM_WEBHOOK_SECRET"}
    )

    # Dialogue engine (Voiceflow general runtime)
    dialogue_api_url: str = Field(
        default=DEFAULT_DIALOGUE_API_URL,
        json_schema_extra={"env": "DIALOGUE_API_URL"},
    )
    dialogue_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DIALOGUE_API_KEY", "VOICEFLOW_API_KEY"),
    )
    dialogue_version_id: str = Field(
        default="production", json_schema_extra={"env": "DIALOGUE_VERSION_ID"}
    )
    dialogue_timeout_seconds: Optional[float] = Field(
        default=None, json_schema_extra={"env": "DIALOGUE_TIMEOUT_SECONDS"}
    )

    # Speech to text
    openai_api_key: Optional[str] = Field(
        default=None, json_schema_extra={"env": "OPENAI_API_KEY"}
    )
    transcription_model: str = Field(
        default="whisper-1", json_schema_extra={"env": "TRANSCRIPTION_MODEL"}
    )

    # Reminders (Airtable)
    reminders_enabled: bool = Field(
        default=False, json_schema_extra={"env": "REMINDERS_ENABLED"}
    )
    airtable_api_url: str = Field(
        default=DEFAULT_AIRTABLE_API_URL,
        json_schema_extra={"env": "AIRTABLE_API_URL"},
    )
    airtable_api_key: Optional[str] = Field(
        default=None, json_schema_extra={"env": "AIRTABLE_API_KEY"}
    )
    airtable_base_id: Optional[str] = Field(
        default=None, json_schema_extra={"env": "AIRTABLE_BASE_ID"}
    )
    airtable_table: str = Field(
        default="Reminders", json_schema_extra={"env": "AIRTABLE_TABLE"}
    )
    notification_chat_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NOTIFICATION_CHAT_ID", "MY_CHAT_ID"),
    )
    reminder_poll_interval_seconds: float = Field(
        default=30.0,
        gt=0,
        json_schema_extra={"env": "REMINDER_POLL_INTERVAL_SECONDS"},
    )

    @property
    def is_production(self) -> bool:
        """Check if the current environment is production."""
        return self.environment.lower() == "production"

    @property
    def is_test(self) -> bool:
        """Check if the current environment is test."""
        return self.environment.lower() == "test"

    @property
    def reminders_configured(self) -> bool:
        """Reminders need a store, credentials and a destination chat."""
        return bool(
            self.reminders_enabled
            and self.airtable_api_key
            and self.airtable_base_id
            and self.notification_chat_id
        )

    class ConfigDict:
        env_file = str(_PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        extra = "allow"  # Allow extra environment variables


def get_settings() -> Settings:
    """Get application settings with required environment variables."""
    return Settings()
