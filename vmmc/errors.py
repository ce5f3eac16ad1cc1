"""Error classes raised by the VMMC engine.

These are subclasses of built-in exception types so callers can catch either
the specific class or its base. Physics-level outcomes of a trial move
(overlaps, frustrated links, oversized clusters) are never raised; they
resolve to a rejected move.
"""


class ConfigurationError(ValueError):
    """Raised at construction when the simulation setup is invalid."""


class InteractionOverflow(RuntimeError):
    """Raised when a model reports more interactions than the configured cap."""

    def __init__(self, index: int, count: int, max_interactions: int) -> None:
        self.index = index
        self.count = count
        self.max_interactions = max_interactions
        super().__init__(str(self))

    def __str__(self) -> str:
        """Returns the error message."""
        return (
            f"Particle {self.index} has {self.count} interactions, "
            f"more than the maximum of {self.max_interactions}"
        )
