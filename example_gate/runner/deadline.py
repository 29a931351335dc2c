# ================================================================================
# Bounded Execution
# ================================================================================
#
# Deadline enforcement for one test function. Every blocking step of a test
# function (handle acquisition, version probing, suite execution) goes
# through BoundedExecution.call so a hung deployment cannot stall the run.
#
# Key Features:
#   - One monotonic deadline per test function
#   - pymongo client-side operation timeout bound to the remaining budget,
#     so the driver cancels in-flight operations when the deadline passes
#   - Caller gives up at the deadline even if the callable ignores it
#   - Worker resources reclaimed when the with block exits
#
# Usage:
#   with BoundedExecution(30, description="transaction_examples") as bound:
#       handle = bound.call(handle.connect)
#       version = bound.call(probe_server_version, handle)
#
# ================================================================================

import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, TypeVar

import pymongo
from loguru import logger
from pymongo.errors import PyMongoError

from example_gate.errors import DeadlineExceeded


T = TypeVar('T')

DEFAULT_DEADLINE_SECONDS = 30.0


def _is_driver_timeout(error: Optional[BaseException]) -> bool:
    """True if error, or anything it was raised from, is a pymongo timeout."""
    while error is not None:
        if isinstance(error, PyMongoError) and error.timeout:
            return True
        error = error.__cause__
    return False


class BoundedExecution:
    """
    Time-bounded context for a single test function.

    The bound starts when the with block is entered and covers every call
    made through it. Once expired, every further call fails immediately.
    """

    def __init__(
        self,
        seconds: float = DEFAULT_DEADLINE_SECONDS,
        description: str = "test function"
    ):
        """
        Args:
            seconds: Total budget for the test function
            description: Name used in log lines and error messages
        """
        if seconds <= 0:
            raise ValueError(f"Deadline must be positive, got {seconds}")
        self.seconds = float(seconds)
        self.description = description
        self._deadline: Optional[float] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._expired = False

    def __enter__(self) -> "BoundedExecution":
        self._deadline = time.monotonic() + self.seconds
        self._expired = False
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=f"bounded-{self.description}",
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        executor, self._executor = self._executor, None
        if executor is not None:
            # A timed-out worker is abandoned, not joined
            executor.shutdown(wait=False, cancel_futures=True)

    @property
    def remaining(self) -> float:
        """Seconds left before the deadline."""
        if self._deadline is None:
            return self.seconds
        return max(0.0, self._deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self._expired or (self._deadline is not None and self.remaining <= 0)

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Run fn within the remaining budget.

        Returns:
            Whatever fn returns

        Raises:
            DeadlineExceeded: If fn does not finish before the deadline
            Exception: Anything fn raises, unaltered
        """
        if self._executor is None:
            raise RuntimeError("BoundedExecution.call used outside of its with block")

        budget = self.remaining
        if self._expired or budget <= 0:
            self._expired = True
            raise self._exceeded(fn)

        future = self._executor.submit(self._invoke, budget, fn, args, kwargs)
        done, _ = wait([future], timeout=budget)

        if not done:
            future.cancel()
            self._expired = True
            raise self._exceeded(fn)

        error = future.exception()
        if error is None:
            return future.result()

        if _is_driver_timeout(error) and self.remaining <= 0:
            self._expired = True
            raise self._exceeded(fn) from error

        raise error

    @staticmethod
    def _invoke(budget: float, fn: Callable[..., T], args, kwargs) -> T:
        with pymongo.timeout(budget):
            return fn(*args, **kwargs)

    def _exceeded(self, fn: Callable) -> DeadlineExceeded:
        name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", repr(fn))
        message = f"{self.description}: {name} exceeded the {self.seconds:g}s deadline"
        logger.error(message)
        return DeadlineExceeded(message)
