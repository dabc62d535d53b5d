from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Fluid:
    name: str
    rho: float      # kg/m3
    mu: float       # Pa*s

    @property
    def nu(self) -> float:
        """Kinematic viscosity [m2/s]."""
        return self.mu / self.rho
