"""
================================================================================
Documentation Example Suites
================================================================================

The explicit, ordered registry of documentation example suites and the
deployment capabilities each one needs.

    Suite                        Target       Min version  Replica set  No auth
    ---------------------------  -----------  -----------  -----------  -------
    crud_examples                database     -            -            -
    versioned_api_clients        local        -            -            -
    versioned_api_strict_count   deployment   5.0          -            yes
    aggregation_examples         database     3.6          -            -
    transaction_examples         deployment   4.0          yes          -
    change_stream_examples       database     3.6          yes          -

================================================================================
"""

from typing import List

from example_gate.gating import SuitePrecondition
from example_gate.runner import ExampleSuite, SuiteTarget

from . import examples


def build_suites() -> List[ExampleSuite]:
    """
    Build the suite registry.

    Returns:
        Suites in the order they are collected and run
    """
    return [
        ExampleSuite(
            name="crud_examples",
            runnable=examples.crud_examples,
            database="documentation_examples",
        ),
        ExampleSuite(
            name="versioned_api_clients",
            runnable=examples.versioned_api_examples,
            target=SuiteTarget.LOCAL,
        ),
        ExampleSuite(
            name="versioned_api_strict_count",
            runnable=examples.versioned_api_strict_count_example,
            precondition=SuitePrecondition(minimum_version="5.0", excludes_auth=True),
            target=SuiteTarget.DEPLOYMENT,
        ),
        ExampleSuite(
            name="aggregation_examples",
            runnable=examples.aggregation_examples,
            precondition=SuitePrecondition(minimum_version="3.6"),
        ),
        ExampleSuite(
            name="transaction_examples",
            runnable=examples.transaction_examples,
            precondition=SuitePrecondition(minimum_version="4.0", requires_replica_set=True),
            target=SuiteTarget.DEPLOYMENT,
        ),
        ExampleSuite(
            name="change_stream_examples",
            runnable=examples.change_stream_examples,
            precondition=SuitePrecondition(minimum_version="3.6", requires_replica_set=True),
            database="changestream_examples",
        ),
    ]
