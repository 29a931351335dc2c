"""
================================================================================
Suite Runner
================================================================================

Orchestrates one test function per documentation example suite:

    CONNECTING -> PROBING -> GATING -> EXECUTING -> COMPLETED | FAILED
                                   -> SKIPPED

- Handle acquisition failure goes straight to FAILED.
- A failed version probe is carried into GATING as "version unknown".
- Suite errors and deadline expiry are FAILED, never retried.
- The deployment handle is released exactly once on every terminal state.

LOCAL suites contact no deployment and go GATING -> EXECUTING directly.

Author: Automation Team
License: MIT
================================================================================
"""

from collections import Counter
from functools import partial
from typing import Callable, Iterable, List, Optional

import allure
from loguru import logger

from example_gate.common import RunSettings
from example_gate.errors import ProbeFailure
from example_gate.gating import classify_topology, evaluate_gate
from example_gate.mongo_tools import DeploymentHandle, open_deployment
from example_gate.report_tools.allure_utils import attach_outcome
from example_gate.runner.deadline import BoundedExecution
from example_gate.runner.suite import ExampleSuite, SuiteOutcome, SuiteState, SuiteTarget
from example_gate.version_checker import ServerVersion, probe_server_version


class SuiteRunner:
    """
    Runs example suites against the configured deployment.

    Each call to run() owns its own deployment handle and deadline, so
    separate runs share no mutable state.
    """

    def __init__(
        self,
        settings: RunSettings,
        connector: Optional[Callable[..., DeploymentHandle]] = None
    ):
        """
        Args:
            settings: Resolved run settings (auth flag, deadline, connection)
            connector: Builds an unconnected handle; called with
                replica_set=True for suites that need a replica set.
                Defaults to open_deployment.
        """
        self.settings = settings
        self._connector = connector or partial(open_deployment, settings)

    def run(self, suite: ExampleSuite) -> SuiteOutcome:
        """
        Run a single suite as one test function.

        Returns:
            The terminal SuiteOutcome. Failures are recorded, not raised;
            call outcome.reraise() to surface the original error.
        """
        outcome = SuiteOutcome(suite_name=suite.name)
        logger.info(f"Running {suite.name} (preconditions: {suite.precondition.describe()})")

        with allure.step(f"Documentation example: {suite.name}"):
            with BoundedExecution(self.settings.deadline_seconds, description=suite.name) as bound:
                if suite.target is SuiteTarget.LOCAL:
                    self._run_local(bound, suite, outcome)
                else:
                    self._run_against_deployment(bound, suite, outcome)

        attach_outcome(outcome)
        return outcome

    def run_all(self, suites: Iterable[ExampleSuite]) -> List[SuiteOutcome]:
        """
        Run suites sequentially in the given order.
        """
        outcomes = [self.run(suite) for suite in suites]
        counts = Counter(outcome.state.value for outcome in outcomes)
        logger.info(
            f"Ran {len(outcomes)} suites: "
            f"{counts.get('completed', 0)} completed, "
            f"{counts.get('skipped', 0)} skipped, "
            f"{counts.get('failed', 0)} failed"
        )
        return outcomes

    # ------------------------------------------------------------------

    def _run_local(self, bound: BoundedExecution, suite: ExampleSuite, outcome: SuiteOutcome) -> None:
        outcome.advance(SuiteState.GATING)
        try:
            self._execute(bound, suite, outcome)
        except Exception as e:
            self._fail(outcome, e)

    def _run_against_deployment(
        self,
        bound: BoundedExecution,
        suite: ExampleSuite,
        outcome: SuiteOutcome
    ) -> None:
        outcome.advance(SuiteState.CONNECTING)
        handle = None
        try:
            handle = bound.call(self._connector, replica_set=suite.precondition.requires_replica_set)
            bound.call(handle.connect)

            outcome.advance(SuiteState.PROBING)
            outcome.server_version = self._probe(bound, suite, handle)
            outcome.topology = classify_topology(handle)

            outcome.advance(SuiteState.GATING)
            decision = evaluate_gate(
                suite.precondition,
                outcome.server_version,
                outcome.topology,
                self.settings.auth_enabled,
            )
            if not decision.run:
                self._skip(outcome, decision.reason)
                return

            self._execute(bound, suite, outcome, handle)
        except Exception as e:
            self._fail(outcome, e)
        finally:
            if handle is not None:
                handle.disconnect()

    def _probe(
        self,
        bound: BoundedExecution,
        suite: ExampleSuite,
        handle: DeploymentHandle
    ) -> Optional[ServerVersion]:
        try:
            version = bound.call(probe_server_version, handle)
        except ProbeFailure as e:
            logger.warning(f"{suite.name}: could not determine server version: {e}")
            return None
        logger.debug(f"{suite.name}: server version {version}")
        return version

    def _execute(
        self,
        bound: BoundedExecution,
        suite: ExampleSuite,
        outcome: SuiteOutcome,
        handle: Optional[DeploymentHandle] = None
    ) -> None:
        outcome.advance(SuiteState.EXECUTING)

        if suite.target is SuiteTarget.DATABASE:
            args = (handle.get_database(suite.database or self.settings.database),)
        elif suite.target is SuiteTarget.DEPLOYMENT:
            args = (handle,)
        else:
            args = ()

        bound.call(suite.runnable, *args)
        outcome.advance(SuiteState.COMPLETED)
        logger.info(f"{suite.name} completed")

    @staticmethod
    def _skip(outcome: SuiteOutcome, reason: str) -> None:
        outcome.advance(SuiteState.SKIPPED)
        outcome.reason = reason
        logger.info(f"Skipping {outcome.suite_name}: {reason}")

    @staticmethod
    def _fail(outcome: SuiteOutcome, error: Exception) -> None:
        stage = outcome.state.value if outcome.state else "startup"
        outcome.advance(SuiteState.FAILED)
        outcome.error = error
        logger.error(f"{outcome.suite_name} failed while {stage}: {type(error).__name__}: {error}")
