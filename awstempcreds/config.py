from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    aws_region: str = Field(..., description="Region of the STS endpoint, e.g. us-east-1")
    aws_role_arn: str = Field(..., description="ARN of the role to assume")
    # STS accepts DurationSeconds between 15 minutes and 12 hours.
    aws_role_duration_seconds: int = Field(
        3600, ge=900, le=43200, description="Validity requested on every AssumeRole call"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


def get_settings() -> Settings:
    return Settings()
