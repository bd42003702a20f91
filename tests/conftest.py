"""Shared fixtures: an in-memory secret store standing in for GCP."""
from typing import Dict, FrozenSet, List, Optional, Tuple

import pytest

from kgcp_secret.secrets.domains.errors import FetchError
from kgcp_secret.secrets.domains.models import ResolutionRequest

PROJECT_ID = "cf-2tier-uhd-test-d7"


class InMemorySecretStore:
    """SecretStore backed by a dict, recording every fetch."""

    def __init__(self, values: Dict[str, str], failing: Optional[Dict[str, str]] = None):
        self.values = dict(values)
        self.failing = dict(failing or {})
        self.fetched: List[Tuple[str, str]] = []
        self.list_calls = 0

    def list_keys(self, project_id: str) -> FrozenSet[str]:
        self.list_calls += 1
        return frozenset(self.values) | frozenset(self.failing)

    def fetch(self, project_id: str, key: str) -> str:
        self.fetched.append((project_id, key))
        if key in self.failing:
            raise FetchError(self.failing[key], key=key)
        if key not in self.values:
            raise FetchError("no value found for key", key=key)
        return self.values[key]


@pytest.fixture
def make_store():
    """Factory for in-memory stores."""
    return InMemorySecretStore


@pytest.fixture
def make_request():
    """Factory for requests with the defaults used across the suites."""
    def _make(name="my-secret", keys=("secret1",), **kwargs):
        kwargs.setdefault("project_id", PROJECT_ID)
        kwargs.setdefault("disable_name_suffix_hash", True)
        return ResolutionRequest(name=name, keys=tuple(keys), **kwargs)
    return _make
