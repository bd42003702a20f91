"""Workflow that turns a request descriptor into a Kubernetes Secret."""
import dataclasses
import logging
from typing import AbstractSet, Dict, Optional

import yaml

from ..domains.config_loader import load_request
from ..domains.errors import ConfigError
from ..domains.gcp_client import GCPSecretClient, get_project_id
from ..domains.models import (
    BEHAVIOR_ANNOTATION,
    NEEDS_HASH_ANNOTATION,
    OutputRecord,
    ResolutionRequest,
)
from ..domains.resolver import Fetcher, resolve
from ..domains.store import SecretStore
from ..domains.transformer import transform

logger = logging.getLogger(__name__)


def build_data(
    request: ResolutionRequest,
    inventory: AbstractSet[str],
    fetch: Fetcher,
) -> Dict[str, str]:
    """
    Resolve and encode every requested key, in request order.

    The first key that fails to resolve or parse aborts the whole run.
    When several keys produce the same output key the later one wins.
    """
    data: Dict[str, str] = {}
    for key in request.keys:
        value = resolve(key, request, inventory, fetch)
        for output_key, encoded in transform(key, value, request.shape):
            if output_key in data:
                logger.debug(f"Output key '{output_key}' from '{key}' replaces an earlier entry")
            data[output_key] = encoded
    return data


def build_annotations(request: ResolutionRequest) -> Dict[str, str]:
    """User annotations plus the kustomize policy annotations, which take precedence."""
    annotations = dict(request.annotations)
    if not request.disable_name_suffix_hash:
        annotations[NEEDS_HASH_ANNOTATION] = "true"
    if request.behavior:
        annotations[BEHAVIOR_ANNOTATION] = request.behavior
    return annotations


def assemble(request: ResolutionRequest, store: SecretStore) -> OutputRecord:
    """
    Build the Secret for ``request`` from the values held in ``store``.

    The store's inventory is listed once; every key is then resolved
    against that snapshot.

    Raises:
        FetchError: If listing the inventory fails
        NotFoundError: If a key has no usable stored value
        ParseError: If an env block value is malformed
    """
    project_id = request.project_id
    inventory = store.list_keys(project_id)
    logger.debug(f"Resolving {len(request.keys)} keys against {len(inventory)} stored secrets in '{project_id}'")

    def fetch(key: str) -> str:
        return store.fetch(project_id, key)

    data = build_data(request, inventory, fetch)

    return OutputRecord(
        name=request.name,
        namespace=request.namespace,
        labels=dict(request.labels),
        annotations=build_annotations(request),
        data=data,
        type=request.type,
    )


def render_manifest(record: OutputRecord) -> str:
    """Serialize the Secret as a YAML document."""
    return yaml.safe_dump(record.to_manifest(), sort_keys=False, default_flow_style=False)


def process_file(path: str, store: Optional[SecretStore] = None) -> str:
    """
    Load a descriptor from ``path`` and return the rendered Secret.

    Args:
        path: YAML request descriptor
        store: Secret store to read from (GCP Secret Manager if not provided)

    Raises:
        SecretResolutionError: On any configuration, lookup or parse failure
    """
    request = load_request(path)

    project_id = get_project_id(request.project_id)
    if not project_id:
        raise ConfigError(
            "GCP project not set. Add gcpProjectID to the input file or set the GCP_PROJECT environment variable"
        )
    request = dataclasses.replace(request, project_id=project_id)

    if store is None:
        store = GCPSecretClient()

    return render_manifest(assemble(request, store))
