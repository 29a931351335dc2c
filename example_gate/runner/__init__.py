"""
================================================================================
Example Suite Runner
================================================================================

Modules:
    - deadline: BoundedExecution, the per test function deadline
    - suite: ExampleSuite records and SuiteOutcome state tracking
    - suite_runner: SuiteRunner, the connect/probe/gate/execute loop

================================================================================
"""

from .deadline import DEFAULT_DEADLINE_SECONDS, BoundedExecution
from .suite import ExampleSuite, SuiteOutcome, SuiteState, SuiteTarget
from .suite_runner import SuiteRunner

__all__ = [
    "DEFAULT_DEADLINE_SECONDS",
    "BoundedExecution",
    "ExampleSuite",
    "SuiteOutcome",
    "SuiteRunner",
    "SuiteState",
    "SuiteTarget",
]
