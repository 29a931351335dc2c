"""
Repository-level pytest configuration.

  - The --run-integration switch; integration tests need a live deployment
    and are collected but skipped without it
  - Deployment defaults (localhost, no auth) come from config/config.yaml;
    override them with MONGODB_URI and AUTH
"""

from __future__ import annotations

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run documentation examples against the deployment at MONGODB_URI",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="needs --run-integration and a live deployment")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip_integration)
