"""Error types raised while resolving secrets."""
from typing import Optional


class SecretResolutionError(Exception):
    """Base class for every failure surfaced by a resolution run."""
    pass


class ConfigError(SecretResolutionError):
    """Request descriptor is missing a required field or is malformed."""
    pass


class FetchError(SecretResolutionError):
    """A call to the secret store failed."""

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key


class NotFoundError(SecretResolutionError):
    """No stored key produced a value for a logical key."""

    def __init__(self, key: str, project_id: str, cause: Optional[FetchError] = None):
        if cause is not None:
            detail = str(cause)
        else:
            detail = f"key '{key}' was not found"
        super().__init__(
            f"error getting '{key}' secret in Google project '{project_id}'. {detail}"
        )
        self.key = key
        self.project_id = project_id
        self.cause = cause


class ParseError(SecretResolutionError):
    """An env block value could not be parsed."""

    def __init__(self, key: str, detail: str):
        super().__init__(f"error unmarshalling secret '{key}': {detail}")
        self.key = key
        self.detail = detail
