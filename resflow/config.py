"""Configuration classes for resflow components."""

from dataclasses import dataclass

from resflow.algorithms.base import MaxFlowAlgorithm


@dataclass
class SolverConfig:
    """Defaults consulted by the max-flow dispatcher."""

    # Algorithm used by calc_max_flow when the caller does not name one
    default_algorithm: MaxFlowAlgorithm = MaxFlowAlgorithm.DINIC

    # Emit a DEBUG progress line every N phases/augmentations (0 disables)
    log_phase_every: int = 0

    def should_log_progress(self, count: int) -> bool:
        """Return True when progress line ``count`` should be logged."""
        return self.log_phase_every > 0 and count % self.log_phase_every == 0


# Global configuration instance
SOLVER_CONFIG = SolverConfig()
