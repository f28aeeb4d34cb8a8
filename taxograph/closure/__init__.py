"""
Ancestor and descendant closures.

Main entry point: ClosureEngine
"""

from .engine import ClosureEngine

__all__ = ["ClosureEngine"]
