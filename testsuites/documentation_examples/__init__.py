"""
MongoDB documentation examples, gated on deployment capabilities.
"""

from .suites import build_suites

__all__ = ["build_suites"]
