"""Loader for the secret request descriptor."""
import os
import logging
from typing import Any, Dict, Mapping, Tuple
import yaml

from .errors import ConfigError
from .models import ResolutionRequest, ValueShape

logger = logging.getLogger(__name__)

__all__ = ["ConfigError", "load_request", "parse_request"]


def _string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _string_map(section: Mapping[str, Any], field: str, source: str) -> Dict[str, str]:
    value = section.get(field)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'metadata.{field}' in {source} must be a mapping")
    return {str(k): _string(v) for k, v in value.items()}


def _keys(document: Mapping[str, Any], source: str) -> Tuple[str, ...]:
    keys = document.get("keys")
    if keys is None:
        return ()
    if not isinstance(keys, list) or any(isinstance(k, (list, dict)) for k in keys):
        raise ConfigError(f"'keys' in {source} must be a list of strings")
    return tuple(_string(k) for k in keys)


def _flag(document: Mapping[str, Any], field: str, source: str) -> bool:
    value = document.get(field)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"'{field}' in {source} must be true or false, got {value!r}")
    return value


def parse_request(document: Any, source: str = "<input>") -> ResolutionRequest:
    """
    Build a ResolutionRequest from a parsed descriptor.

    Expected shape:
        metadata:
          name: my-secret          # required
          namespace: my-namespace
          stage: prod
          dc: be-gcw1
          environment: ""          # overrides stage when set
          tag: ""                  # overrides dc when set
          labels: {}
          annotations: {}
        gcpProjectID: my-project
        disableNameSuffixHash: false
        type: Opaque
        behavior: replace
        dataType: envvar           # or plain / envblock
        keys: [KEY1, KEY2]

    Raises:
        ConfigError: If the document is empty, malformed or lacks metadata.name
    """
    if not document:
        raise ConfigError(f"Input file {source} is empty")
    if not isinstance(document, dict):
        raise ConfigError(f"Input file {source} must contain a mapping")

    metadata = document.get("metadata")
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ConfigError(f"'metadata' in {source} must be a mapping")

    name = _string(metadata.get("name"))
    if not name:
        raise ConfigError("input must contain metadata.name value")

    try:
        shape = ValueShape.from_data_type(_string(document.get("dataType")))
    except ValueError as e:
        raise ConfigError(f"Invalid 'dataType' in {source}: {e}")

    return ResolutionRequest(
        name=name,
        namespace=_string(metadata.get("namespace")),
        stage=_string(metadata.get("stage")),
        dc=_string(metadata.get("dc")),
        environment=_string(metadata.get("environment")),
        tag=_string(metadata.get("tag")),
        keys=_keys(document, source),
        shape=shape,
        project_id=_string(document.get("gcpProjectID")),
        labels=_string_map(metadata, "labels", source),
        annotations=_string_map(metadata, "annotations", source),
        disable_name_suffix_hash=_flag(document, "disableNameSuffixHash", source),
        behavior=_string(document.get("behavior")),
        type=_string(document.get("type")),
    )


def load_request(path: str) -> ResolutionRequest:
    """
    Load and validate a request descriptor from a YAML file.

    Raises:
        ConfigError: If the file is missing, unreadable, invalid YAML or incomplete
    """
    if not os.path.exists(path):
        raise ConfigError(f"Input file not found at: {path}")

    try:
        with open(path, 'r') as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML input at {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read input file at {path}: {e}")

    request = parse_request(document, source=path)
    logger.debug(f"Loaded request for secret '{request.name}' with {len(request.keys)} keys from {path}")
    return request
