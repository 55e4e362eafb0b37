from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./brev.db"
    CREATE_SCHEMA_ON_STARTUP: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3333

    # Short codes
    SHORT_CODE_LENGTH: int = Field(6, ge=6, le=8)

    # Report export
    EXPORT_TARGET: Literal["local", "s3"] = "local"
    EXPORT_KEY_PREFIX: str = ""
    EXPORT_URL_EXPIRES_IN: int = Field(600, gt=0)

    # Object storage (only read when EXPORT_TARGET is "s3")
    AWS_BUCKET_NAME: Optional[str] = None
    AWS_REGION: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_ENDPOINT_URL: Optional[str] = None

    # Frontend
    FRONTEND_BACKEND_URL: str = ""  # empty means same origin
    FRONTEND_DIR: Optional[str] = None  # defaults to frontend/ in the source tree

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @model_validator(mode="after")
    def check_export_target(self) -> "Settings":
        if self.EXPORT_TARGET == "s3" and not self.AWS_BUCKET_NAME:
            raise ValueError("AWS_BUCKET_NAME must be set when EXPORT_TARGET is 's3'")
        return self


settings = Settings()
