"""Chunk cycle detector.

Detects circular dependencies between the output chunks of a bundle, and
cycles in any directed graph, with Kahn's reduction and DFS extraction.
"""

__version__ = "0.1.0"
