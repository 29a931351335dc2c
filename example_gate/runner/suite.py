"""
Example suite records and their outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from example_gate.gating import SuitePrecondition, TopologyKind
from example_gate.version_checker import ServerVersion


class SuiteTarget(str, Enum):
    """What a suite's runnable is called with."""
    LOCAL = "local"              # no arguments, no deployment contacted
    DATABASE = "database"        # a pymongo Database
    DEPLOYMENT = "deployment"    # the DeploymentHandle itself


class SuiteState(str, Enum):
    CONNECTING = "connecting"
    PROBING = "probing"
    GATING = "gating"
    EXECUTING = "executing"
    SKIPPED = "skipped"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES = (SuiteState.SKIPPED, SuiteState.COMPLETED, SuiteState.FAILED)


@dataclass(frozen=True)
class ExampleSuite:
    """
    One documentation example exercised as a test unit.

    Attributes:
        name: Stable identifier, used as the pytest id
        runnable: The example itself
        precondition: Deployment capabilities the example needs
        target: How the runnable is invoked
        database: Database for DATABASE suites; defaults to the configured one
    """
    name: str
    runnable: Callable
    precondition: SuitePrecondition = field(default_factory=SuitePrecondition)
    target: SuiteTarget = SuiteTarget.DATABASE
    database: Optional[str] = None


@dataclass
class SuiteOutcome:
    """
    Terminal record of one test function.

    Attributes:
        suite_name: Name of the suite that ran
        state: Current (finally terminal) state
        transitions: Every state entered, in order
        reason: Skip reason, if skipped
        error: The original error, if failed
        server_version: Probed version, None if not probed or probe failed
        topology: Classified topology of the handle
    """
    suite_name: str
    state: Optional[SuiteState] = None
    transitions: List[SuiteState] = field(default_factory=list)
    reason: Optional[str] = None
    error: Optional[BaseException] = None
    server_version: Optional[ServerVersion] = None
    topology: TopologyKind = TopologyKind.UNKNOWN

    def advance(self, state: SuiteState) -> None:
        if self.terminal:
            raise RuntimeError(f"{self.suite_name} is already {self.state.value}")
        self.state = state
        self.transitions.append(state)

    @property
    def terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def skipped(self) -> bool:
        return self.state is SuiteState.SKIPPED

    @property
    def failed(self) -> bool:
        return self.state is SuiteState.FAILED

    def reraise(self) -> None:
        """Raise the original error of a failed outcome; no-op otherwise."""
        if self.failed and self.error is not None:
            raise self.error
