from .gate import (
    AUTH_ENABLED,
    NOT_A_REPLICA_SET,
    VERSION_TOO_OLD,
    VERSION_UNKNOWN,
    GateDecision,
    SuitePrecondition,
    evaluate_gate,
)
from .topology import TopologyKind, classify_topology

__all__ = [
    "AUTH_ENABLED",
    "NOT_A_REPLICA_SET",
    "VERSION_TOO_OLD",
    "VERSION_UNKNOWN",
    "GateDecision",
    "SuitePrecondition",
    "TopologyKind",
    "classify_topology",
    "evaluate_gate",
]
