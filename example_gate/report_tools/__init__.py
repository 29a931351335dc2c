from .allure_utils import (
    ResultSummary,
    attach_json,
    attach_outcome,
    attach_text,
    generate_allure_report,
    outcome_to_dict,
    summarize_results,
)

__all__ = [
    "ResultSummary",
    "attach_json",
    "attach_outcome",
    "attach_text",
    "generate_allure_report",
    "outcome_to_dict",
    "summarize_results",
]
