"""Capabilities a secret store must offer to the resolver."""
from typing import FrozenSet, Protocol


class SecretStore(Protocol):
    """
    Inventory listing plus value fetching for one remote store.

    Implementations raise FetchError when the backend call fails. The GCP
    implementation lives in gcp_client; tests substitute an in-memory one.
    """

    def list_keys(self, project_id: str) -> FrozenSet[str]:
        """Return the names of every secret stored in ``project_id``."""
        ...

    def fetch(self, project_id: str, key: str) -> str:
        """Return the latest value stored under ``key``."""
        ...
