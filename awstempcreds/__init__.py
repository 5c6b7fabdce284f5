"""
Temporary AWS credentials obtained by assuming an IAM role, cached in memory
and refreshed shortly before they expire.
"""

from .exceptions import RoleAssumptionFailed, TempCredentialsError
from .models.credentials import AssumedRoleCredentials, TemporaryCredentials
from .services.aws_refresh_service import SAFETY_MARGIN, CredentialCache

__version__ = "0.1.0"

__all__ = (
    "AssumedRoleCredentials",
    "CredentialCache",
    "RoleAssumptionFailed",
    "SAFETY_MARGIN",
    "TempCredentialsError",
    "TemporaryCredentials",
)
