"""Max-flow engines sharing one residual-network representation."""
