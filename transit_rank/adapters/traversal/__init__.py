"""Traversal adapters - Implementations of TraverserPort.

Available implementations:
- BasicTraverser: Records every event for later inspection
"""

from .basic import BasicTraverser

__all__ = ["BasicTraverser"]
