"""Adaptive step size for the force-directed layout iteration."""

import math
from dataclasses import dataclass

_BOOST_FLOOR = 1.0
_BOOST_RESET = 2.0
_PROGRESS_NEEDED = 3
_GROW_LIMIT = 5.0
_GROW_FACTOR = 1.3
_SHRINK_LIMIT = 0.025
_SHRINK_FACTOR = 0.95
_NON_FINITE_STEP = 2.0
_CONVERGED_STEP = 1e-1


@dataclass
class StepController:
    """Tracks the step size, adapting it to how the total energy changes.

    The step grows after several successive drops in energy and shrinks
    whenever the energy does not drop.
    """

    step_size: float = 0.1
    energy: float = 0.0
    progress: int = 0

    def boost(self) -> None:
        """Enlarge the step: jump to 2 if it is below 1, else double it."""
        if self.step_size < _BOOST_FLOOR:
            self.step_size = _BOOST_RESET
        else:
            self.step_size *= 2

    def limit(self, maximum: float) -> None:
        """Keep the step size no larger than ``maximum``."""
        self.step_size = min(maximum, self.step_size)

    def update(self, energy: float) -> None:
        """Adapt the step size to the energy of the latest iteration."""
        if not math.isfinite(energy):
            self.step_size = _NON_FINITE_STEP
        elif energy < self.energy:
            if self.progress < _PROGRESS_NEEDED:
                self.progress += 1
            elif self.step_size < _GROW_LIMIT:
                self.step_size *= _GROW_FACTOR
        else:
            self.progress = 0
            if self.step_size > _SHRINK_LIMIT:
                self.step_size *= _SHRINK_FACTOR
        self.energy = energy

    def converged(self) -> bool:
        """Return whether the step size has become small enough to stop."""
        return self.step_size <= _CONVERGED_STEP