import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = "changeme"


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 5000
    secret_key: str = "lowest-unique-secret"
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    # Inclusive choice range, fixed for the life of the process
    min_number: int = 1
    max_number: int = 30
    max_name_length: int = 24
    reconnect_enabled: bool = True
    auto_settle: bool = False
    count_disconnected_seats: bool = False
    async_mode: str = "eventlet"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        frozen=True,
    )

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value):
        return value.strip().upper()

    @model_validator(mode="after")
    def check_ranges(self):
        if self.min_number > self.max_number:
            raise ValueError(
                f"MIN_NUMBER ({self.min_number}) must not exceed MAX_NUMBER ({self.max_number})"
            )
        if self.max_name_length <= 0:
            raise ValueError("MAX_NAME_LENGTH must be positive")
        if self.admin_password == DEFAULT_ADMIN_PASSWORD:
            logger.warning("ADMIN_PASSWORD is not set, using the default password")
        return self
