"""Square-well potential."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import ConfigurationError
from .base import OVERLAP, PairModel

if TYPE_CHECKING:
    from ..neighborlists import NeighborIndex
    from ..system import ParticleState


class SquareWell(PairModel):
    """
    Isotropic square-well fluid of hard discs or spheres.

    V(r) = inf       for r < sigma
         = -epsilon  for sigma <= r < lambda
         = 0         otherwise

    Orientations are carried but have no energetic effect.

    Attributes:
        interaction_energy: Well depth epsilon in units of kBT.
        interaction_range: Outer edge of the well, lambda.
        diameter: Hard-core diameter sigma.
    """

    def __init__(
        self,
        state: ParticleState,
        neighbor_index: NeighborIndex,
        interaction_energy: float = 1.0,
        interaction_range: float = 1.5,
        diameter: float = 1.0,
    ) -> None:
        """
        Initialize square-well model.

        Args:
            state: Committed particle state.
            neighbor_index: Neighbor index with cells >= interaction_range.
            interaction_energy: Well depth in units of kBT.
            interaction_range: Outer edge of the well (center distance).
            diameter: Hard-core diameter.
        """
        super().__init__(state, neighbor_index, interaction_range)
        if not 0 < diameter < interaction_range:
            raise ConfigurationError(
                f"Diameter {diameter} must be positive and smaller than the "
                f"interaction range {interaction_range}"
            )
        self.interaction_energy = float(interaction_energy)
        self.diameter = float(diameter)

        self._diameter_sq = self.diameter**2
        self._range_sq = self.interaction_range**2

    def pair_energy(
        self,
        index1: int,
        position1: NDArray[np.floating],
        orientation1: NDArray[np.floating],
        index2: int,
        position2: NDArray[np.floating],
        orientation2: NDArray[np.floating],
    ) -> float:
        """Compute square-well energy between two particles."""
        dr = self.box.minimum_image(position1, position2)
        r_sq = float(np.dot(dr, dr))

        if r_sq < self._diameter_sq:
            return OVERLAP
        if r_sq < self._range_sq:
            return -self.interaction_energy
        return 0.0
