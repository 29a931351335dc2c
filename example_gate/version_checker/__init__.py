from .version_checker import (
    ServerVersion,
    VersionOrdering,
    compare_versions,
    probe_server_version,
    probe_version,
)

__all__ = [
    "ServerVersion",
    "VersionOrdering",
    "compare_versions",
    "probe_server_version",
    "probe_version",
]
