"""
================================================================================
Example Gate
================================================================================

Runs MongoDB documentation examples against a live deployment, but only
when the deployment can support them.

Modules:
    - common: Shared configuration, run settings and logging utilities
    - mongo_tools: Deployment handles (pymongo clients) for the target deployment
    - version_checker: Server version probing and dotted version comparison
    - gating: Topology classification and the run/skip gate
    - runner: Deadline-bounded suite runner
    - report_tools: Allure attachments and report generation

Example:
    from example_gate.common import RunSettings
    from example_gate.runner import SuiteRunner

    runner = SuiteRunner(RunSettings.from_config())
    outcome = runner.run(suite)
    if outcome.skipped:
        print(outcome.reason)
    outcome.reraise()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "mongo_tools",
    "version_checker",
    "gating",
    "runner",
    "report_tools",
]
