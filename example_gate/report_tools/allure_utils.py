"""
================================================================================
Allure Report Utilities
================================================================================

This module attaches example gate outcomes to Allure test reports and
generates the HTML report after a run.

Features:
- JSON/text attachment helpers
- Suite outcome attachment (gate decision, server version, topology)
- Result summary and report generation

================================================================================
"""

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def outcome_to_dict(outcome) -> Dict[str, Any]:
    """Serializable view of a SuiteOutcome."""
    return {
        "suite": outcome.suite_name,
        "state": outcome.state.value if outcome.state else None,
        "transitions": [state.value for state in outcome.transitions],
        "server_version": str(outcome.server_version) if outcome.server_version else None,
        "topology": outcome.topology.value,
        "skip_reason": outcome.reason,
        "error": f"{type(outcome.error).__name__}: {outcome.error}" if outcome.error else None,
    }


def attach_outcome(outcome) -> None:
    """
    Attach the terminal state of a suite run.

    Skips are attached as plain text as well, so the reason shows up in the
    report overview without opening the JSON.
    """
    attach_json(outcome_to_dict(outcome), name=f"Outcome: {outcome.suite_name}")
    if outcome.skipped:
        attach_text(outcome.reason or "", name="Skip Reason")


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class ResultSummary:
    """Summary of allure-results for one run."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
        }


def summarize_results(results_dir: Path) -> ResultSummary:
    """
    Count result statuses in an allure-results directory.

    Unreadable result files are logged and ignored.
    """
    summary = ResultSummary()
    for result_file in Path(results_dir).glob("*-result.json"):
        try:
            with open(result_file, encoding="utf-8") as f:
                status = json.load(f).get("status", "unknown")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")
            continue

        summary.total += 1
        if status in ("passed", "failed", "broken", "skipped"):
            setattr(summary, status, getattr(summary, status) + 1)
    return summary


def generate_allure_report(results_dir: Path, output_dir: Optional[Path] = None) -> bool:
    """
    Generate the Allure HTML report with the allure CLI.

    Returns:
        True if successful
    """
    results_dir = Path(results_dir)
    output_dir = Path(output_dir or results_dir.parent / "allure-report")
    cmd = ["allure", "generate", str(results_dir), "-o", str(output_dir), "--clean"]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    logger.info(f"Report generated at {output_dir}")
    return True
