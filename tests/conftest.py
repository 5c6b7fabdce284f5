import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from awstempcreds.services import runtime_credentials
from awstempcreds.services.aws_refresh_service import CredentialCache

ROLE_ARN = "arn:aws:iam::123456789012:role/test-role"
REGION = "us-east-1"
START_TIME = 1_700_000_000.0


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_sts_response(access_key="ASIAEXAMPLEKEY000001", secret_key="secret-1", token="token-1"):
    """Build an AssumeRole response shaped like the one boto3 returns."""
    return {
        "Credentials": {
            "AccessKeyId": access_key,
            "SecretAccessKey": secret_key,
            "SessionToken": token,
            "Expiration": datetime(2030, 1, 1, tzinfo=timezone.utc),
        },
        "AssumedRoleUser": {
            "AssumedRoleId": "AROAEXAMPLEID:temp-test-host-1700000000",
            "Arn": "arn:aws:sts::123456789012:assumed-role/test-role/temp-test-host-1700000000",
        },
    }


@pytest.fixture(autouse=True)
def reset_runtime_cache():
    """Make sure the process-wide cache never leaks between tests."""
    runtime_credentials.reset_credential_cache()
    yield
    runtime_credentials.reset_credential_cache()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_sts_client():
    """STS client whose assume_role succeeds with the first test triple."""
    client = MagicMock()
    client.assume_role.return_value = make_sts_response()
    return client


@pytest.fixture
def cache(mock_sts_client, clock):
    """Cache with a one hour duration wired to the mock client and fake clock."""
    return CredentialCache(
        REGION,
        ROLE_ARN,
        timedelta(hours=1),
        sts_client_factory=lambda region: mock_sts_client,
        clock=clock,
        hostname_provider=lambda: "test-host",
    )
