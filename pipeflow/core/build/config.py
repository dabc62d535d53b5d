# pipeflow/core/build/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np


# ============================================================
# RootSolverConfig (inverse Be -> Re)
# ============================================================

@dataclass(frozen=True)
class RootSolverConfig:
    """
    Bracket and tolerances for the bracketed Be -> Re search.
    """
    max_reynolds: float = 1e12
    xtol: float = 1e-12
    rtol: float = 1e-12
    maxiter: int = 500

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "RootSolverConfig":
        out = RootSolverConfig(
            max_reynolds=float(cfg.get("max_reynolds", cfg.get("max_re", 1e12))),
            xtol=float(cfg.get("solver_xtol", cfg.get("xtol", 1e-12))),
            rtol=float(cfg.get("solver_rtol", cfg.get("rtol", 1e-12))),
            maxiter=int(cfg.get("solver_maxiter", cfg.get("maxiter", 500))),
        )
        out.validate()
        return out

    def validate(self) -> None:
        if not self.max_reynolds > 0:
            raise ValueError(f"RootSolverConfig.max_reynolds must be > 0 (received {self.max_reynolds})")
        if not self.xtol > 0:
            raise ValueError(f"RootSolverConfig.xtol must be > 0 (received {self.xtol})")
        # brentq refuses rtol below 4 machine epsilons
        if self.rtol < 4 * np.finfo(float).eps:
            raise ValueError(f"RootSolverConfig.rtol must be >= 4*eps (received {self.rtol})")
        if self.maxiter <= 0:
            raise ValueError(f"RootSolverConfig.maxiter must be > 0 (received {self.maxiter})")


# ============================================================
# HydrostaticConfig
# ============================================================

@dataclass(frozen=True)
class HydrostaticConfig:
    """
    Gravity used for hydrostatic head and head sources.
    """
    g_m_s2: float = 9.81

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "HydrostaticConfig":
        g = cfg.get("g_m_s2", cfg.get("g", cfg.get("gravity", 9.81)))
        out = HydrostaticConfig(g_m_s2=float(g))
        out.validate()
        return out

    def validate(self) -> None:
        if not (0.0 < self.g_m_s2 < 20.0):
            raise ValueError(f"HydrostaticConfig.g_m_s2 out of range: {self.g_m_s2}")


# ============================================================
# PipeFlowConfig (aggregator)
# ============================================================

@dataclass(frozen=True)
class PipeFlowConfig:
    solver: RootSolverConfig = field(default_factory=RootSolverConfig)
    hydrostatic: HydrostaticConfig = field(default_factory=HydrostaticConfig)
    version: int = 1

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "PipeFlowConfig":
        out = PipeFlowConfig(
            solver=RootSolverConfig.from_dict(cfg),
            hydrostatic=HydrostaticConfig.from_dict(cfg),
            version=int(cfg.get("config_version", cfg.get("version", 1))),
        )
        out.validate()
        return out

    def validate(self) -> None:
        if self.version <= 0:
            raise ValueError(f"PipeFlowConfig.version must be > 0 (received {self.version})")

        self.solver.validate()
        self.hydrostatic.validate()


DEFAULT_CONFIG = PipeFlowConfig()
