class TempCredentialsError(Exception):
    """Base class for errors raised while obtaining temporary credentials."""


class RoleAssumptionFailed(TempCredentialsError):
    """The STS AssumeRole call was rejected or could not complete."""

    def __init__(self, role_arn: str, cause: Exception):
        self.role_arn = role_arn
        self.cause = cause
        super().__init__(f"Failed to assume role {role_arn}: {cause}")
