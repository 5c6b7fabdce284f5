""" Runtime Credential Store: process-wide credential cache configured from Settings. """
import logging
from datetime import timedelta
from typing import Optional

from awstempcreds.config import Settings, get_settings
from awstempcreds.models.credentials import TemporaryCredentials
from .aws_refresh_service import CredentialCache

logger = logging.getLogger(__name__)

_cache: Optional[CredentialCache] = None


def _matches(cache: CredentialCache, settings: Settings) -> bool:
    return (
        cache.region == settings.aws_region
        and cache.role_arn == settings.aws_role_arn
        and cache.duration == timedelta(seconds=settings.aws_role_duration_seconds)
    )


def get_credential_cache(settings: Optional[Settings] = None) -> CredentialCache:
    """
    Return the shared cache, creating it from ``settings`` (or the environment) on first use.

    Once the cache exists, ``settings`` is ignored; a warning is logged if it
    describes a different region, role or duration. Call
    ``reset_credential_cache`` first to switch configuration.
    """
    global _cache
    if _cache is None:
        _cache = CredentialCache.from_settings(settings or get_settings())
    elif settings is not None and not _matches(_cache, settings):
        logger.warning(
            f"Ignoring settings for role {settings.aws_role_arn} in {settings.aws_region}; "
            f"shared credential cache is already configured for {_cache.role_arn} in {_cache.region}"
        )
    return _cache


def get_aws_credentials(settings: Optional[Settings] = None) -> TemporaryCredentials:
    return get_credential_cache(settings).get_credentials()


def reset_credential_cache() -> None:
    global _cache
    _cache = None
