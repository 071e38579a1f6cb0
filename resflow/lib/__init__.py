"""Library utilities for resflow.

This package contains integration modules for external libraries.
"""

from resflow.lib.nx import EdgeMap, NodeMap, from_networkx, to_networkx

__all__ = [
    "EdgeMap",
    "NodeMap",
    "from_networkx",
    "to_networkx",
]
