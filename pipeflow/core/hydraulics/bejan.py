# pipeflow/core/hydraulics/bejan.py
from __future__ import annotations

import math

import numpy as np

from pipeflow.core.errors import DomainError
from pipeflow.core.hydraulics.friction import f_ldk

# below this Re the friction term is interpolated along f_darcy*Re^2 = 64*Re
RE_TRANSITION = 1800.0


def laminar_darcy_re_sq(re: float) -> float:
    """
    Straight line through (0, 0) and (1800, 64*1800): f_darcy * Re^2 in the
    laminar range, without evaluating the correlation near Re -> 0.
    """
    return float(np.interp(re, [0.0, RE_TRANSITION], [0.0, 64.0 * RE_TRANSITION]))


def _check_geometry(roughness_ratio: float, length_to_diameter: float, form_loss_k: float) -> None:
    if not roughness_ratio >= 0:
        raise DomainError(f"roughness_ratio < 0 (received {roughness_ratio!r})")
    if not length_to_diameter > 0:
        raise DomainError(f"length_to_diameter <= 0 (received {length_to_diameter!r})")
    if not form_loss_k >= 0:
        raise DomainError(f"form loss coefficient K < 0 (received {form_loss_k!r})")


def bejan_from_reynolds(
    re: float,
    roughness_ratio: float,
    length_to_diameter: float,
    form_loss_k: float,
) -> float:
    """
    Be_D for an unsigned Reynolds number.

        Be_D = 0.5 * (f*L/D + K) * Re^2

    Re = 0 gives Be = 0. Negative Re is rejected; callers strip the flow
    direction first (see bejan_from_reynolds_signed).
    """
    if re == 0:
        return 0.0
    if not re > 0:
        raise DomainError(f"Re < 0 (received {re!r})")
    _check_geometry(roughness_ratio, length_to_diameter, form_loss_k)

    if re < RE_TRANSITION:
        f_ld_re_sq = laminar_darcy_re_sq(re) * length_to_diameter
        k_re_sq = form_loss_k * re ** 2
        return 0.5 * (k_re_sq + f_ld_re_sq)

    return 0.5 * f_ldk(re, roughness_ratio, length_to_diameter, form_loss_k) * re ** 2


def bejan_from_reynolds_signed(
    re: float,
    roughness_ratio: float,
    length_to_diameter: float,
    form_loss_k: float,
) -> float:
    """Odd extension of bejan_from_reynolds: Be carries the sign of Re."""
    be = bejan_from_reynolds(abs(re), roughness_ratio, length_to_diameter, form_loss_k)
    return math.copysign(be, re) if re != 0 else 0.0


def bejan_length_from_diameter(be_d: float, length_to_diameter: float) -> float:
    """Be_L = Be_D * (L/D)^2"""
    if not length_to_diameter > 0:
        raise DomainError(f"length_to_diameter <= 0 (received {length_to_diameter!r})")
    return be_d * length_to_diameter ** 2
