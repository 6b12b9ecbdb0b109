"""Top-level package for the transit ranking engine.

This package computes structural importance metrics over a transit
network modelled as a graph of stops and typed edges: traversals,
shortest paths and rank propagation, optionally after collapsing
stations linked only by transfers into single logical nodes.
"""

__version__ = "0.1.0"
