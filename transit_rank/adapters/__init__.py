"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the graph engine to external systems like:
- Graph storage (CSV files)
- Traversal observers (recording traverser)
- Report storage (CSV rank report)
"""
