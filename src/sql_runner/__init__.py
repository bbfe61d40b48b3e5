"""
Run playbooks of SQL queries against database targets and report the outcome.
"""

__version__ = "0.1.0"
