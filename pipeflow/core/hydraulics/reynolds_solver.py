# pipeflow/core/hydraulics/reynolds_solver.py
from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from scipy.optimize import brentq

from pipeflow.core.build.config import DEFAULT_CONFIG, RootSolverConfig
from pipeflow.core.errors import DomainError, NonConvergenceError
from pipeflow.core.hydraulics.bejan import (
    RE_TRANSITION,
    bejan_from_reynolds,
    bejan_length_from_diameter,
)
from pipeflow.core.hydraulics.friction import fanning

logger = logging.getLogger(__name__)


def _solver_config(solver: Optional[RootSolverConfig]) -> RootSolverConfig:
    return solver if solver is not None else DEFAULT_CONFIG.solver


def _find_root(objective: Callable[[float], float], re_max: float, solver: RootSolverConfig) -> float:
    """
    Root of a monotone objective on [0, re_max].

    The bracket ends are checked before searching so that a target outside
    the image of the correlation surfaces as NonConvergenceError, not as a
    scipy ValueError.
    """
    f_lo = objective(0.0)
    f_hi = objective(re_max)

    if not (math.isfinite(f_lo) and math.isfinite(f_hi)):
        raise NonConvergenceError(
            f"objective not finite at bracket ends: f(0)={f_lo!r}, f({re_max:g})={f_hi!r}"
        )
    if f_lo == 0.0:
        return 0.0
    if f_lo * f_hi > 0:
        raise NonConvergenceError(
            f"no sign change in Re bracket [0, {re_max:g}]: f(0)={f_lo:.6e}, f(max)={f_hi:.6e}"
        )

    re, info = brentq(
        objective,
        0.0,
        re_max,
        xtol=solver.xtol,
        rtol=solver.rtol,
        maxiter=solver.maxiter,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        raise NonConvergenceError(
            f"brentq did not converge after {info.iterations} iterations ({info.flag})"
        )

    logger.debug("Re root %.6e found in %d iterations", re, info.iterations)
    return float(re)


def _reynolds_from_bejan_length(
    be_l: float,
    roughness_ratio: float,
    length_to_diameter: float,
    solver: RootSolverConfig,
) -> float:
    if not length_to_diameter > 0:
        raise DomainError(f"length_to_diameter <= 0 (received {length_to_diameter!r})")
    if not roughness_ratio >= 0:
        raise DomainError(f"roughness_ratio < 0 (received {roughness_ratio!r})")

    sign = -1.0 if be_l < 0 else 1.0
    be_l = abs(be_l)

    re_max = solver.max_reynolds
    max_be_l = bejan_length_from_diameter(
        bejan_from_reynolds(re_max, roughness_ratio, length_to_diameter, 0.0),
        length_to_diameter,
    )
    if not be_l < max_be_l:
        raise DomainError(f"Be_L too large: |Be_L|={be_l:.6e} >= {max_be_l:.6e} (Re={re_max:g})")

    # Be_L = 2 * f_fanning * Re^2 * (L/D)^3  ->  f*Re^2 = 32 * Be_L * (4 L/D)^-3
    bejan_term = 32.0 * be_l * (4.0 * length_to_diameter) ** -3

    def objective(re: float) -> float:
        if re < RE_TRANSITION:
            # laminar line f_fanning*Re^2 = 16*Re, same interpolation as the forward map
            fanning_re_sq = 16.0 * re
        else:
            fanning_re_sq = fanning(re, roughness_ratio) * re ** 2
        return fanning_re_sq - bejan_term

    return sign * _find_root(objective, re_max, solver)


def _reynolds_from_bejan_diameter(
    be_d: float,
    roughness_ratio: float,
    length_to_diameter: float,
    form_loss_k: float,
    solver: RootSolverConfig,
) -> float:
    if not length_to_diameter > 0:
        raise DomainError(f"length_to_diameter <= 0 (received {length_to_diameter!r})")
    if not roughness_ratio >= 0:
        raise DomainError(f"roughness_ratio < 0 (received {roughness_ratio!r})")
    if not form_loss_k >= 0:
        raise DomainError(f"form loss coefficient K < 0 (received {form_loss_k!r})")

    sign = -1.0 if be_d < 0 else 1.0
    be_d = abs(be_d)

    re_max = solver.max_reynolds
    max_be_d = bejan_from_reynolds(re_max, roughness_ratio, length_to_diameter, 0.0)
    if not be_d < max_be_d:
        raise DomainError(f"Be_D too large: |Be_D|={be_d:.6e} >= {max_be_d:.6e} (Re={re_max:g})")

    def objective(re: float) -> float:
        return be_d - bejan_from_reynolds(re, roughness_ratio, length_to_diameter, form_loss_k)

    return sign * _find_root(objective, re_max, solver)


def reynolds_from_bejan(
    be: float,
    roughness_ratio: float,
    length_to_diameter: float,
    form_loss_k: Optional[float] = None,
    *,
    solver: Optional[RootSolverConfig] = None,
) -> float:
    """
    Signed Reynolds number for a given Bejan number.

    - form_loss_k is None: ``be`` is Be_L (based on pipe length), no form losses
    - form_loss_k == 0: ``be`` is Be_D, converted to Be_L and solved as above
      (fewer cancelling terms)
    - form_loss_k > 0: ``be`` is Be_D (based on hydraulic diameter)

    Raises DomainError before any solving for invalid inputs, including
    |Be| at or beyond the value reached at Re = max_reynolds, and
    NonConvergenceError when the bracketed search fails.
    """
    solver = _solver_config(solver)

    if form_loss_k is None:
        return _reynolds_from_bejan_length(be, roughness_ratio, length_to_diameter, solver)

    if form_loss_k == 0:
        be_l = bejan_length_from_diameter(be, length_to_diameter)
        return _reynolds_from_bejan_length(be_l, roughness_ratio, length_to_diameter, solver)

    return _reynolds_from_bejan_diameter(be, roughness_ratio, length_to_diameter, form_loss_k, solver)
