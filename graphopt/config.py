"""Configuration classes for graphopt algorithms.

Module-level instances hold the defaults used when a caller does not pass an
explicit value. Callers that need different defaults can replace fields on
these instances or pass arguments per call.
"""

from dataclasses import dataclass


@dataclass
class FlowConfig:
    """Numeric settings for max-flow and s-t min-cut computations."""

    # Residual capacities at or below this value are treated as saturated.
    # Integer inputs are unaffected: any positive integer exceeds it.
    tolerance: float = 1e-10


@dataclass
class KargerConfig:
    """Defaults for the randomized contraction min-cut."""

    # Number of independent contraction trials
    trials: int = 100

    # Component label used to derive per-trial seeds
    seed_component: str = "karger"


@dataclass
class LeidenConfig:
    """Defaults for Leiden community detection."""

    resolution: float = 1.0
    random_seed: int = 42
    max_iterations: int = 100

    # Minimum modularity improvement for a partition to replace the best one
    threshold: float = 1e-7

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is out of range."""
        if self.resolution < 0:
            raise ValueError(f"resolution must be >= 0, got {self.resolution}")
        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be >= 0, got {self.max_iterations}"
            )
        if self.threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {self.threshold}")


# Global configuration instances
FLOW_CONFIG = FlowConfig()
KARGER_CONFIG = KargerConfig()
LEIDEN_CONFIG = LeidenConfig()
