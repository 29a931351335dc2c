"""
================================================================================
Example Gate Errors
================================================================================

Exception hierarchy shared by every example_gate component.

    ExampleGateError
    ├── ConfigurationError  invalid or unreadable configuration
    ├── ConnectionFailure   deployment unreachable or discovery failed
    ├── ProbeFailure        serverStatus failed or carried no version
    ├── MalformedVersion    version string is not dotted unsigned integers
    └── DeadlineExceeded    a bounded operation outlived its deadline

Only ProbeFailure is absorbed by the suite runner (it becomes a skip).
Errors raised by the example suites themselves are never wrapped.

Author: Automation Team
License: MIT
================================================================================
"""


class ExampleGateError(Exception):
    """Base class for all example_gate errors."""
    pass


class ConfigurationError(ExampleGateError):
    """Raised when configuration loading or validation fails."""
    pass


class ConnectionFailure(ExampleGateError):
    """Raised when a deployment handle cannot be established."""
    pass


class ProbeFailure(ExampleGateError):
    """Raised when the server version cannot be determined."""
    pass


class MalformedVersion(ExampleGateError, ValueError):
    """Raised when a version string cannot be parsed into components."""
    pass


class DeadlineExceeded(ExampleGateError, TimeoutError):
    """Raised when a bounded operation does not finish before its deadline."""
    pass


__all__ = [
    "ExampleGateError",
    "ConfigurationError",
    "ConnectionFailure",
    "ProbeFailure",
    "MalformedVersion",
    "DeadlineExceeded",
]
