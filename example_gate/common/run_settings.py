"""
Run settings resolved once per process.

The gate evaluator and the suite runner receive a RunSettings instance
instead of reading the environment themselves, so they stay pure and can
be tested without touching os.environ.
"""

from dataclasses import dataclass
from typing import Any, Optional

from example_gate.common.global_config import get_config
from example_gate.errors import ConfigurationError

DEFAULT_DEADLINE_SECONDS = 30.0
DEFAULT_DATABASE = "documentation_examples"

_TRUTHY = ("auth", "true", "1", "yes", "on")


def _parse_auth(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class RunSettings:
    """
    Immutable view of the configuration the example gate needs.

    Attributes:
        mongodb_uri: Connection string of the deployment under test
        database: Default database handed to DATABASE suites
        replica_set: Replica set name used by replica-set-capable handles
        auth_enabled: Whether the deployment runs with authentication
        deadline_seconds: Ceiling for every bounded test function
        server_selection_timeout_ms: Driver server selection timeout
    """
    mongodb_uri: str = "mongodb://localhost:27017"
    database: str = DEFAULT_DATABASE
    replica_set: Optional[str] = None
    auth_enabled: bool = False
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS
    server_selection_timeout_ms: int = 30000

    def __post_init__(self):
        if self.deadline_seconds <= 0:
            raise ConfigurationError(
                f"deadline_seconds must be positive, got {self.deadline_seconds}"
            )

    @classmethod
    def from_config(cls) -> "RunSettings":
        """
        Build settings from the layered configuration.

        AUTH=auth (or any truthy value) marks the deployment as
        authenticated, matching the convention of the driver CI matrix.
        """
        try:
            deadline = float(get_config("runner.deadline_seconds", DEFAULT_DEADLINE_SECONDS))
            selection_timeout = int(get_config("mongodb.server_selection_timeout_ms", 30000))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid numeric runner setting: {e}") from e

        return cls(
            mongodb_uri=str(get_config("mongodb.uri", "mongodb://localhost:27017")),
            database=str(get_config("mongodb.database", DEFAULT_DATABASE)),
            replica_set=get_config("mongodb.replica_set"),
            auth_enabled=_parse_auth(get_config("mongodb.auth", "noauth")),
            deadline_seconds=deadline,
            server_selection_timeout_ms=selection_timeout,
        )
