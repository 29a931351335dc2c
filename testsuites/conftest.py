"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project-wide markers, initializes logging and labels unit
tests.

================================================================================
"""

import pytest

from example_gate import __version__
from example_gate.common import init_logger


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    init_logger()

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - core gating and runner behavior"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "integration: Needs a live MongoDB deployment (--run-integration)"
    )
    config.addinivalue_line(
        "markers", "unit: Runs without any deployment"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "gating: Version, topology and auth gating"
    )
    config.addinivalue_line(
        "markers", "replica_set: Suites that need a replica set"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-add the 'unit' marker to tests in the unit directory.
    """
    for item in items:
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        f"MongoDB Documentation Example Gate {__version__}",
        "=" * 60,
        "",
    ]
