"""
================================================================================
MongoDB Deployment Handle
================================================================================

This module wraps a pymongo client pointed at the deployment under test.

Key Features:
    - Context manager for safe connection handling
    - Replica-set-capable variant (topology override) for suites that need
      transactions or change streams
    - Idempotent release, so the runner can disconnect on every exit path
    - Credential masking in log output

Usage:
    from example_gate.mongo_tools import ConnectionDescriptor, DeploymentHandle

    descriptor = ConnectionDescriptor(uri="mongodb://localhost:27017")
    with DeploymentHandle(descriptor) as handle:
        db = handle.get_database("documentation_examples")

Author: Automation Team
License: MIT
================================================================================
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from example_gate.common import RunSettings, init_logger, mask_uri
from example_gate.errors import ConnectionFailure


# Initialize logger
init_logger()


# ============================================================
# Data Models
# ============================================================

@dataclass(frozen=True)
class ConnectionDescriptor:
    """
    Everything needed to open a client to the deployment under test.
    """
    uri: str
    database: str = "documentation_examples"
    replica_set: Optional[str] = None
    server_selection_timeout_ms: int = 30000

    @classmethod
    def from_settings(cls, settings: RunSettings) -> "ConnectionDescriptor":
        return cls(
            uri=settings.mongodb_uri,
            database=settings.database,
            replica_set=settings.replica_set,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
        )


# ============================================================
# Deployment Handle
# ============================================================

class DeploymentHandle:
    """
    MongoDB client wrapper owned by exactly one test function.

    The client object is created unconnected in the constructor so it can be
    released from the owning thread even if connect() is still blocked on a
    worker thread.
    """

    def __init__(
        self,
        descriptor: ConnectionDescriptor,
        discover_replica_set: bool = False
    ):
        """
        Initializes the handle.

        Args:
            descriptor: Connection descriptor of the deployment.
            discover_replica_set: Force topology discovery instead of a direct
                connection, and pin the configured replica set name.
        """
        self.descriptor = descriptor
        self.discover_replica_set = discover_replica_set
        self._connected = False
        self._released = False

        try:
            self._client = MongoClient(descriptor.uri, connect=False, **self._client_options())
        except PyMongoError as e:
            raise ConnectionFailure(
                f"Invalid connection to {mask_uri(descriptor.uri)}: {e}"
            ) from e

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "serverSelectionTimeoutMS": self.descriptor.server_selection_timeout_ms,
        }
        if self.discover_replica_set:
            options["directConnection"] = False
            if self.descriptor.replica_set:
                options["replicaSet"] = self.descriptor.replica_set
        return options

    @property
    def uri(self) -> str:
        return self.descriptor.uri

    @property
    def client(self) -> MongoClient:
        return self._client

    @property
    def released(self) -> bool:
        return self._released

    @property
    def topology_description(self):
        """Cluster metadata discovered so far; reading it does no I/O."""
        return self._client.topology_description

    def connect(self) -> "DeploymentHandle":
        """
        Completes server discovery by pinging the deployment.

        Returns:
            Self for method chaining.

        Raises:
            ConnectionFailure: If the deployment cannot be reached.
        """
        if self._released:
            raise ConnectionFailure("Deployment handle was already released")
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB {mask_uri(self.uri)}: {e}")
            raise ConnectionFailure(str(e)) from e

        self._connected = True
        kind = "replica-set-capable" if self.discover_replica_set else "general"
        logger.info(f"Connected {kind} handle to MongoDB: {mask_uri(self.uri)}")
        return self

    def disconnect(self) -> None:
        """
        Closes the client. Calling it again is a no-op.
        """
        if self._released:
            return
        self._released = True
        self._client.close()
        self._connected = False
        logger.debug(f"Disconnected from MongoDB: {mask_uri(self.uri)}")

    def get_database(self, name: str = None):
        """
        Gets a database instance.

        Args:
            name: Database name. Uses the descriptor's database if not provided.

        Returns:
            pymongo.database.Database instance.
        """
        return self._client[name or self.descriptor.database]

    def admin_command(self, command: str, **kwargs) -> Dict[str, Any]:
        """
        Runs a command against the admin database.
        """
        return self._client.admin.command(command, **kwargs)

    def __enter__(self) -> "DeploymentHandle":
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()


def open_deployment(settings: RunSettings, replica_set: bool = False) -> DeploymentHandle:
    """
    Builds an unconnected handle appropriate for a suite.

    Args:
        settings: Run settings holding the connection string.
        replica_set: Request the replica-set-capable variant.
    """
    return DeploymentHandle(
        ConnectionDescriptor.from_settings(settings),
        discover_replica_set=replica_set,
    )
