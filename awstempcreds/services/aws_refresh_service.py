""" AWS Refresh Service: caches temporary STS role credentials and rolls them over before expiry. """
import logging
import socket
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from awstempcreds.config import Settings
from awstempcreds.exceptions import RoleAssumptionFailed
from awstempcreds.models.credentials import AssumedRoleCredentials, TemporaryCredentials
from awstempcreds.utils.sts_client_factory import get_sts_client

logger = logging.getLogger(__name__)

# Refresh this long before the requested duration runs out.
SAFETY_MARGIN = timedelta(minutes=5)

SESSION_NAME_PREFIX = "temp"
UNKNOWN_HOSTNAME = "unknown"
# STS limit for RoleSessionName.
MAX_SESSION_NAME_LENGTH = 64


def build_session_name(hostname_provider: Callable[[], str], now: float) -> str:
    """Return ``temp-<host>-<unix seconds>``.

    A failing or empty hostname lookup falls back to ``unknown``; it only
    affects traceability and never blocks a refresh. The host part is cut so
    the name fits the STS length limit.
    """
    try:
        hostname = hostname_provider()
    except OSError as e:
        logger.warning(f"Could not determine hostname, using '{UNKNOWN_HOSTNAME}': {e}")
        hostname = UNKNOWN_HOSTNAME
    if not hostname:
        hostname = UNKNOWN_HOSTNAME

    timestamp = str(int(now))
    room = MAX_SESSION_NAME_LENGTH - len(SESSION_NAME_PREFIX) - len(timestamp) - 2
    return f"{SESSION_NAME_PREFIX}-{hostname[:room]}-{timestamp}"


class CredentialCache:
    """
    Holds temporary credentials for one role and refreshes them lazily.

    The first call to ``get_credentials`` always assumes the role. After a
    successful refresh the credentials are served from memory until
    ``duration - SAFETY_MARGIN`` has passed. A failed refresh leaves the
    schedule where it was, so the next call tries again straight away.

    Not safe for concurrent use: callers sharing one instance across threads
    must serialize calls to ``get_credentials`` themselves.
    """

    def __init__(
        self,
        region: str,
        role_arn: str,
        duration: Union[timedelta, int],
        *,
        sts_client_factory: Optional[Callable[[str], object]] = None,
        clock: Callable[[], float] = time.time,
        hostname_provider: Callable[[], str] = socket.gethostname,
    ):
        if not isinstance(duration, timedelta):
            duration = timedelta(seconds=duration)
        if duration <= SAFETY_MARGIN:
            raise ValueError(
                f"duration must be longer than the {SAFETY_MARGIN} safety margin, got {duration}"
            )

        self._region = region
        self._role_arn = role_arn
        self._duration = duration
        self._sts_client_factory = sts_client_factory or get_sts_client
        self._clock = clock
        self._hostname_provider = hostname_provider

        self._sts_client = None
        self._role: Optional[AssumedRoleCredentials] = None
        # None until the first successful refresh, so the first access always fetches.
        self._next_refresh_at: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "CredentialCache":
        return cls(
            region=settings.aws_region,
            role_arn=settings.aws_role_arn,
            duration=timedelta(seconds=settings.aws_role_duration_seconds),
            **kwargs,
        )

    @property
    def region(self) -> str:
        return self._region

    @property
    def role_arn(self) -> str:
        return self._role_arn

    @property
    def duration(self) -> timedelta:
        return self._duration

    @property
    def next_refresh_at(self) -> Optional[float]:
        """Unix time after which the next access refreshes, or None before the first success."""
        return self._next_refresh_at

    @property
    def has_credentials(self) -> bool:
        return self._role is not None

    @property
    def cached_credentials(self) -> Optional[AssumedRoleCredentials]:
        """Last successfully assumed role credentials, without triggering a refresh."""
        return self._role

    def _client(self):
        if self._sts_client is None:
            self._sts_client = self._sts_client_factory(self._region)
        return self._sts_client

    def refresh(self) -> None:
        """Assume the role once and replace the cached credentials.

        Raises RoleAssumptionFailed and keeps the previous credentials if STS
        fails. Does not change the refresh schedule.
        """
        session_name = build_session_name(self._hostname_provider, self._clock())
        try:
            response = self._client().assume_role(
                RoleArn=self._role_arn,
                RoleSessionName=session_name,
                DurationSeconds=int(self._duration.total_seconds()),
            )
            role = AssumedRoleCredentials.from_sts_response(response)
        except (ClientError, BotoCoreError, KeyError, ValidationError) as e:
            raise RoleAssumptionFailed(self._role_arn, e) from e

        self._role = role
        logger.info(f"Assumed role {self._role_arn} as session {session_name}")

    def get_credentials(self) -> TemporaryCredentials:
        """Return the cached credentials, refreshing first if they are due."""
        now = self._clock()
        if self._next_refresh_at is None or now > self._next_refresh_at:
            try:
                self.refresh()
            except RoleAssumptionFailed as e:
                # Schedule stays put so the next call retries.
                logger.error(f"Failed to refresh credentials for {self._role_arn}: {e.cause}")
                raise

            self._next_refresh_at = now + (self._duration - SAFETY_MARGIN).total_seconds()
            logger.info(
                "Next credential refresh scheduled for "
                f"{datetime.fromtimestamp(self._next_refresh_at, tz=timezone.utc).isoformat()}"
            )
        else:
            logger.debug(f"Using cached credentials for {self._role_arn}")

        return self._role.to_temporary_credentials()
