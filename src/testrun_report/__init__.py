"""
Derived report values for a completed test run's execution record.
"""

__version__ = "1.0.0"
