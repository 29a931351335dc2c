"""
================================================================================
Gate Evaluator
================================================================================

Maps probed deployment state and a suite's declared preconditions to a
run/skip decision.

Policy (first applicable reason wins, order fixed for reproducible logs):
    1. version probing failed             -> skip "version unknown"
    2. server older than minimum_version  -> skip "server version too old"
    3. replica set required, not present  -> skip "not a replica set"
    4. auth excluded, auth enabled        -> skip "auth enabled"
    5. otherwise                          -> run

A precondition that declares nothing runs without consulting the
deployment at all.

================================================================================
"""

from dataclasses import dataclass
from typing import Optional, Union

from example_gate.gating.topology import TopologyKind
from example_gate.version_checker import ServerVersion

VERSION_UNKNOWN = "version unknown"
VERSION_TOO_OLD = "server version too old"
NOT_A_REPLICA_SET = "not a replica set"
AUTH_ENABLED = "auth enabled"


@dataclass(frozen=True)
class SuitePrecondition:
    """
    Capabilities a suite needs from the deployment.

    Attributes:
        minimum_version: Oldest server version the suite supports
        requires_replica_set: Suite needs a replica set (transactions, change streams)
        excludes_auth: Suite cannot run against an authenticated deployment
    """
    minimum_version: Optional[Union[ServerVersion, str]] = None
    requires_replica_set: bool = False
    excludes_auth: bool = False

    def __post_init__(self):
        # Parse eagerly so a bad literal fails where the suite is declared
        if isinstance(self.minimum_version, str):
            object.__setattr__(self, "minimum_version", ServerVersion.parse(self.minimum_version))

    @property
    def unconstrained(self) -> bool:
        return (
            self.minimum_version is None
            and not self.requires_replica_set
            and not self.excludes_auth
        )

    def describe(self) -> str:
        parts = []
        if self.minimum_version is not None:
            parts.append(f">={self.minimum_version}")
        if self.requires_replica_set:
            parts.append("replica set")
        if self.excludes_auth:
            parts.append("no auth")
        return ", ".join(parts) or "none"


@dataclass(frozen=True)
class GateDecision:
    run: bool
    reason: Optional[str] = None

    @classmethod
    def proceed(cls) -> "GateDecision":
        return cls(run=True)

    @classmethod
    def skip(cls, reason: str) -> "GateDecision":
        return cls(run=False, reason=reason)


def evaluate_gate(
    precondition: SuitePrecondition,
    server_version: Optional[ServerVersion],
    topology: TopologyKind,
    auth_enabled: bool
) -> GateDecision:
    """
    Decide whether a suite runs against the probed deployment.

    Args:
        precondition: The suite's declared requirements
        server_version: Probed version, or None if probing failed
        topology: Classified topology of the handle
        auth_enabled: Auth mode of the deployment, from RunSettings

    Returns:
        GateDecision with the first applicable skip reason, or run
    """
    if precondition.unconstrained:
        return GateDecision.proceed()

    if server_version is None:
        return GateDecision.skip(VERSION_UNKNOWN)

    if (
        precondition.minimum_version is not None
        and server_version.compare(precondition.minimum_version) < 0
    ):
        return GateDecision.skip(VERSION_TOO_OLD)

    if precondition.requires_replica_set and topology is not TopologyKind.REPLICA_SET:
        return GateDecision.skip(NOT_A_REPLICA_SET)

    if precondition.excludes_auth and auth_enabled:
        return GateDecision.skip(AUTH_ENABLED)

    return GateDecision.proceed()
