"""
Engines package for the event model.

This package contains the lifecycle engine that realizes sampled event counts
as concrete employee transitions.
"""

from .lifecycle import EmployeeLifecycle

__all__ = ["EmployeeLifecycle"]
