"""
================================================================================
Documentation Examples Pytest Configuration
================================================================================

Fixtures:
    - run_settings: settings resolved once from config files and environment
    - suite_runner: SuiteRunner bound to those settings

================================================================================
"""

import pytest
from loguru import logger

from example_gate.common import RunSettings, mask_uri
from example_gate.runner import SuiteRunner


@pytest.fixture(scope="session")
def run_settings() -> RunSettings:
    """
    Resolve run settings.

    Session-scoped so configuration and environment are read exactly once.
    """
    settings = RunSettings.from_config()
    logger.info(
        f"Deployment: {mask_uri(settings.mongodb_uri)} "
        f"(auth={'on' if settings.auth_enabled else 'off'}, "
        f"deadline={settings.deadline_seconds:g}s)"
    )
    return settings


@pytest.fixture(scope="session")
def suite_runner(run_settings: RunSettings) -> SuiteRunner:
    return SuiteRunner(run_settings)
