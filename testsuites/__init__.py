"""
Test suites package.

Kept importable so run_tests.py and the documentation example tests can
reach the suite registry as `testsuites.documentation_examples`.
"""
