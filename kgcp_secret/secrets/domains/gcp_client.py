"""GCP Secret Manager client wrapper."""
import os
import logging
from typing import FrozenSet, Optional
from google.cloud import secretmanager

from .errors import FetchError

logger = logging.getLogger(__name__)


def sanitize_key_name(name: str) -> str:
    """Secret ids may not contain '.' or '/', both become '_'."""
    return name.replace(".", "_").replace("/", "_")


def get_project_id(configured: Optional[str] = None) -> Optional[str]:
    """
    Pick the GCP project to read secrets from.

    Priority order:
    1. Project ID given in the request descriptor
    2. GCP_PROJECT environment variable

    Returns:
        Project ID string, or None if neither is set
    """
    if configured:
        return configured

    gcp_project_env = os.getenv("GCP_PROJECT")
    if gcp_project_env:
        logger.debug(f"Using GCP_PROJECT from environment: {gcp_project_env}")
        return gcp_project_env

    return None


class GCPSecretClient:
    """Wrapper around GCP Secret Manager client."""

    def __init__(self, client: Optional[secretmanager.SecretManagerServiceClient] = None):
        self._client = client

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def list_keys(self, project_id: str) -> FrozenSet[str]:
        """
        List the ids of all secrets in a project.

        Args:
            project_id: GCP project ID

        Returns:
            Secret ids (last segment of ``projects/<id>/secrets/<name>``)

        Raises:
            FetchError: If the listing call fails
        """
        parent = f"projects/{project_id}"
        try:
            names = [secret.name for secret in self.client.list_secrets(request={"parent": parent})]
        except Exception as e:
            raise FetchError(f"failed to list secrets in {parent}: {e}") from e

        keys = frozenset(name.split("/")[3] for name in names)
        logger.debug(f"Found {len(keys)} secrets in {parent}")
        return keys

    def fetch(self, project_id: str, key: str) -> str:
        """
        Fetch the latest version of a secret.

        Args:
            key: Secret name, sanitized before the call
            project_id: GCP project ID

        Returns:
            Secret payload; bytes that are not UTF-8 are kept as surrogates

        Raises:
            FetchError: If the access call fails
        """
        name = f"projects/{project_id}/secrets/{sanitize_key_name(key)}/versions/latest"
        try:
            response = self.client.access_secret_version(request={"name": name})
        except Exception as e:
            raise FetchError(f"trouble retrieving secret: {name}: {e}", key=key) from e
        return response.payload.data.decode("utf-8", "surrogateescape")
