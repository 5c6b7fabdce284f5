from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class TemporaryCredentials(BaseModel):
    """Credential triple handed to callers."""

    access_key_id: str
    secret_access_key: str = Field(..., repr=False)
    session_token: str = Field(..., repr=False)

    model_config = ConfigDict(frozen=True)


class AssumedRoleCredentials(BaseModel):
    """Credentials as returned by STS AssumeRole.

    ``expiration`` is informational only; refresh scheduling relies on the
    duration that was requested, not on this value.
    """

    access_key_id: str
    secret_access_key: str = Field(..., repr=False)
    session_token: str = Field(..., repr=False)
    expiration: Optional[datetime] = Field(
        default=None, description="Expiry reported by STS, if any"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_sts_response(cls, response: Dict[str, Any]) -> "AssumedRoleCredentials":
        """Build from a boto3 ``assume_role`` response. Raises KeyError if the
        ``Credentials`` block or one of its keys is missing."""
        creds = response["Credentials"]
        return cls(
            access_key_id=creds["AccessKeyId"],
            secret_access_key=creds["SecretAccessKey"],
            session_token=creds["SessionToken"],
            expiration=creds.get("Expiration"),
        )

    def to_temporary_credentials(self) -> TemporaryCredentials:
        return TemporaryCredentials(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token,
        )
