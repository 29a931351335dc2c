"""
Topology classification of a connected deployment handle.

Reads the topology pymongo already discovered while connecting; it never
issues a command of its own.
"""

from enum import Enum

from loguru import logger


class TopologyKind(str, Enum):
    """Cluster shape of a deployment handle."""
    STANDALONE = "standalone"
    REPLICA_SET = "replica_set"
    SHARDED = "sharded"
    UNKNOWN = "unknown"


# pymongo TopologyDescription.topology_type_name -> TopologyKind.
# ReplicaSetNoPrimary stays UNKNOWN until a primary is elected.
_TOPOLOGY_TYPE_NAMES = {
    "Single": TopologyKind.STANDALONE,
    "ReplicaSetWithPrimary": TopologyKind.REPLICA_SET,
    "Sharded": TopologyKind.SHARDED,
}


def classify_topology(handle) -> TopologyKind:
    """
    Report the TopologyKind of a handle.

    Args:
        handle: Deployment handle exposing topology_description

    Returns:
        The classified kind; UNKNOWN when discovery has not converged
    """
    description = getattr(handle, "topology_description", None)
    type_name = getattr(description, "topology_type_name", None)
    kind = _TOPOLOGY_TYPE_NAMES.get(type_name, TopologyKind.UNKNOWN)
    logger.debug(f"Topology type {type_name!r} classified as {kind.value}")
    return kind
