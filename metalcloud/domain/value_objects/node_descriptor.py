"""
Node Descriptor Value Object

Architectural Intent:
- Immutable view of a cluster node before it is matched to a device
- name and provider_id are independent lookup keys; either may be empty
- Emptiness is checked by the resolver, which knows which key each operation needs
- from_node_object() reads a Kubernetes Node manifest (metadata/spec/annotations)
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

# Annotation the kubelet sets when started with --node-ip
PROVIDED_NODE_IP_ANNOTATION = "alpha.kubernetes.io/provided-node-ip"


@dataclass(frozen=True)
class NodeDescriptor:
    """
    Value Object describing a node as the orchestrator sees it.
    """
    name: str = ""
    provider_id: str = ""
    override_address: Optional[str] = None

    def __post_init__(self) -> None:
        if self.override_address == "":
            object.__setattr__(self, "override_address", None)

    def __str__(self) -> str:
        return self.provider_id or self.name or "<unnamed node>"

    @staticmethod
    def from_node_object(obj: Mapping[str, Any]) -> "NodeDescriptor":
        """
        Build a descriptor from a Node manifest such as
        ``{"metadata": {"name": ..., "annotations": {...}}, "spec": {"providerID": ...}}``.
        Missing sections are treated as empty.
        """
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        annotations = metadata.get("annotations") or {}

        return NodeDescriptor(
            name=metadata.get("name") or "",
            provider_id=spec.get("providerID") or "",
            override_address=annotations.get(PROVIDED_NODE_IP_ANNOTATION),
        )
