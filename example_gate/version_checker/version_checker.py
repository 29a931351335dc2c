"""
================================================================================
Version Checker Tool
================================================================================

This module provides utilities for detecting and comparing the version of
the MongoDB deployment under test, so example suites that need newer server
features are only run against deployments that have them.

Features:
- Dotted version parsing ("5.0.3") with strict numeric components
- Component-wise comparison with zero padding ("5.0" == "5.0.0")
- Server version probing through the serverStatus command

================================================================================
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Tuple, Union

from loguru import logger
from pymongo.errors import PyMongoError

from example_gate.errors import MalformedVersion, ProbeFailure


# ================================================================================
# Version Models
# ================================================================================

class VersionOrdering(IntEnum):
    """Result of version comparison; compares and negates like -1/0/1."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


_COMPONENT = re.compile(r"^[0-9]+$")
# Numeric core of a server-reported version, e.g. "7.0.0" in "7.0.0-rc2"
_SERVER_VERSION_CORE = re.compile(r"^([0-9.]+)(?:[-+].*)?$")


@dataclass(frozen=True)
class ServerVersion:
    """
    An ordered sequence of non-negative integer version components.

    Attributes:
        components: Parsed components, e.g. (5, 0, 3) for "5.0.3"
    """
    components: Tuple[int, ...]

    @classmethod
    def parse(cls, version_string: str) -> "ServerVersion":
        """
        Parse a dotted version string.

        Args:
            version_string: Version string (e.g., "5.0", "4.4.12")

        Returns:
            ServerVersion instance

        Raises:
            MalformedVersion: If any component is not an unsigned integer
        """
        if not isinstance(version_string, str) or not version_string:
            raise MalformedVersion(f"Invalid version string: {version_string!r}")

        parts = version_string.split(".")
        for part in parts:
            if not _COMPONENT.match(part):
                raise MalformedVersion(
                    f"Invalid version string: {version_string!r} "
                    f"(component {part!r} is not an unsigned integer)"
                )
        return cls(tuple(int(part) for part in parts))

    @classmethod
    def from_server_string(cls, version_string: str) -> "ServerVersion":
        """
        Parse a version as reported by the server.

        Pre-release and build suffixes ("7.0.0-rc2") are dropped; the dotted
        core is parsed strictly.
        """
        match = _SERVER_VERSION_CORE.match(version_string or "")
        return cls.parse(match.group(1) if match else version_string)

    def compare(self, other: "ServerVersion") -> VersionOrdering:
        width = max(len(self.components), len(other.components))
        left = self.components + (0,) * (width - len(self.components))
        right = other.components + (0,) * (width - len(other.components))
        for a, b in zip(left, right):
            if a != b:
                return VersionOrdering.LESS if a < b else VersionOrdering.GREATER
        return VersionOrdering.EQUAL

    def at_least(self, other: Union["ServerVersion", str]) -> bool:
        """Check whether this version is greater than or equal to other."""
        return self.compare(_coerce(other)) >= 0

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)

    # Padded equality: "5.0" and "5.0.0" are the same version
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ServerVersion):
            return NotImplemented
        return self.compare(other) == VersionOrdering.EQUAL

    def __hash__(self) -> int:
        trimmed = list(self.components)
        while len(trimmed) > 1 and trimmed[-1] == 0:
            trimmed.pop()
        return hash(tuple(trimmed))

    def __lt__(self, other: "ServerVersion") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "ServerVersion") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "ServerVersion") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "ServerVersion") -> bool:
        return self.compare(other) >= 0


def _coerce(version: Union[ServerVersion, str]) -> ServerVersion:
    if isinstance(version, ServerVersion):
        return version
    return ServerVersion.parse(version)


def compare_versions(
    version1: Union[ServerVersion, str],
    version2: Union[ServerVersion, str]
) -> VersionOrdering:
    """
    Compare two version strings component by component.

    "10.0" is greater than "9.0"; "5.0" equals "5.0.0".

    Args:
        version1: First version string
        version2: Second version string

    Returns:
        Ordering of version1 relative to version2

    Raises:
        MalformedVersion: If either string has a non-numeric component
    """
    return _coerce(version1).compare(_coerce(version2))


# ================================================================================
# Version Prober
# ================================================================================

def probe_version(handle) -> str:
    """
    Read the raw version string of the deployment behind a handle.

    Issues serverStatus against the admin database. Every call is a fresh
    round trip; nothing is cached.

    Args:
        handle: Connected deployment handle exposing admin_command()

    Returns:
        The "version" field of the serverStatus reply

    Raises:
        ProbeFailure: If the command fails or the reply has no version
    """
    try:
        status = handle.admin_command("serverStatus")
    except PyMongoError as e:
        raise ProbeFailure(f"serverStatus failed: {e}") from e

    version = status.get("version") if hasattr(status, "get") else None
    if not isinstance(version, str):
        raise ProbeFailure("serverStatus reply has no version field")

    logger.debug(f"Deployment reports server version {version}")
    return version


def probe_server_version(handle) -> ServerVersion:
    """
    Probe and parse the server version.

    Raises:
        ProbeFailure: If the version cannot be determined
        MalformedVersion: If the reported version cannot be parsed
    """
    return ServerVersion.from_server_string(probe_version(handle))
