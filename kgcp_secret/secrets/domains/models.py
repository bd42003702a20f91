"""Domain models for secret resolution."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

NEEDS_HASH_ANNOTATION = "kustomize.config.k8s.io/needs-hash"
BEHAVIOR_ANNOTATION = "kustomize.config.k8s.io/behavior"


class ValueShape(str, Enum):
    """How a resolved raw value is turned into output entries."""
    PLAIN = "plain"
    ENVBLOCK = "envblock"

    @classmethod
    def from_data_type(cls, data_type: Optional[str]) -> "ValueShape":
        """Map the descriptor's ``dataType`` field to a shape.

        ``envvar`` is the legacy spelling of ``envblock``.

        Raises:
            ValueError: If the value names no known shape
        """
        if not data_type or data_type == cls.PLAIN.value:
            return cls.PLAIN
        if data_type in ("envvar", cls.ENVBLOCK.value):
            return cls.ENVBLOCK
        raise ValueError(f"unsupported dataType '{data_type}'")


@dataclass(frozen=True)
class ResolutionRequest:
    """Everything one resolution run needs to know about the wanted secret."""
    name: str
    namespace: str = ""
    stage: str = ""
    dc: str = ""
    environment: str = ""
    tag: str = ""
    keys: Tuple[str, ...] = ()
    shape: ValueShape = ValueShape.PLAIN
    project_id: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    disable_name_suffix_hash: bool = False
    behavior: str = ""
    type: str = ""


@dataclass(frozen=True)
class OutputRecord:
    """Assembled Kubernetes Secret."""
    name: str
    namespace: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    data: Dict[str, str] = field(default_factory=dict)
    type: str = ""

    def to_manifest(self) -> Dict[str, object]:
        """Return the Secret as plain mappings, empty optional fields omitted."""
        metadata: Dict[str, object] = {"name": self.name}
        if self.namespace:
            metadata["namespace"] = self.namespace
        if self.labels:
            metadata["labels"] = dict(sorted(self.labels.items()))
        if self.annotations:
            metadata["annotations"] = dict(sorted(self.annotations.items()))

        manifest: Dict[str, object] = {
            "apiVersion": "v1",
            "kind": "Secret",
            "metadata": metadata,
            "data": dict(sorted(self.data.items())),
        }
        if self.type:
            manifest["type"] = self.type
        return manifest
