# pipeflow/core/hydraulics/friction.py
from __future__ import annotations

import math
from typing import Literal

import numpy as np

from pipeflow.core.errors import DomainError, UndefinedAtZeroError

FrictionKind = Literal["fanning", "darcy", "moody"]


def _check_re_and_roughness(re: float, roughness_ratio: float) -> None:
    if re == 0:
        raise UndefinedAtZeroError("Re = 0, friction factor undefined")
    if not re > 0:
        raise DomainError(f"Re < 0 (received {re!r})")
    if not roughness_ratio >= 0:
        raise DomainError(f"roughness_ratio < 0 (received {roughness_ratio!r})")


def churchill_a(re: float, roughness_ratio: float) -> float:
    """A = (2.457 ln(1/((7/Re)^0.9 + 0.27 eps/D)))^16"""
    log_fraction = 1.0 / ((7.0 / re) ** 0.9 + 0.27 * roughness_ratio)
    return (2.457 * math.log(log_fraction)) ** 16


def churchill_b(re: float) -> float:
    """B = (37530/Re)^16"""
    return (37530.0 / re) ** 16


def _churchill_inner(re: float, roughness_ratio: float) -> float:
    laminar = (8.0 / re) ** 12
    turbulent = (1.0 / (churchill_a(re, roughness_ratio) + churchill_b(re))) ** 1.5
    return laminar + turbulent


def fanning(re: float, roughness_ratio: float) -> float:
    """
    Fanning friction factor, Churchill (1977).

    Single explicit expression covering laminar, transition and fully
    turbulent flow:
        f = 2 * ((8/Re)^12 + 1/(A+B)^(3/2))^(1/12)
    """
    _check_re_and_roughness(re, roughness_ratio)
    return 2.0 * _churchill_inner(re, roughness_ratio) ** (1.0 / 12)


def darcy(re: float, roughness_ratio: float) -> float:
    """Darcy friction factor = 4 * Fanning."""
    _check_re_and_roughness(re, roughness_ratio)
    return 4.0 * fanning(re, roughness_ratio)


def moody(re: float, roughness_ratio: float) -> float:
    """Moody friction factor, same as Darcy."""
    return darcy(re, roughness_ratio)


_BY_KIND = {
    "fanning": fanning,
    "darcy": darcy,
    "moody": moody,
}


def friction_factor(re: float, roughness_ratio: float, kind: FrictionKind = "darcy") -> float:
    try:
        fn = _BY_KIND[kind]
    except KeyError:
        raise ValueError(f"Unknown friction factor kind: {kind!r}. Allowed: {sorted(_BY_KIND)}") from None
    return fn(re, roughness_ratio)


def f_ldk(re: float, roughness_ratio: float, length_to_diameter: float, form_loss_k: float) -> float:
    """f*L/D + K, the total loss coefficient of a pipe with form losses."""
    _check_re_and_roughness(re, roughness_ratio)
    if not length_to_diameter > 0:
        raise DomainError(f"length_to_diameter <= 0 (received {length_to_diameter!r})")
    if not form_loss_k >= 0:
        raise DomainError(f"form loss coefficient K < 0 (received {form_loss_k!r})")

    return darcy(re, roughness_ratio) * length_to_diameter + form_loss_k


def darcy_vec(re: np.ndarray, roughness_ratio: np.ndarray | float) -> np.ndarray:
    """Vectorized: arrays Re, eps/D (broadcast) -> Darcy f."""
    re = np.asarray(re, dtype=float)
    rr = np.asarray(roughness_ratio, dtype=float)

    if np.any(re == 0):
        raise UndefinedAtZeroError("darcy_vec: Re = 0, friction factor undefined")
    if np.any(re < 0) or np.any(rr < 0):
        raise DomainError("darcy_vec: Re < 0 or roughness_ratio < 0")

    a = (2.457 * np.log(1.0 / ((7.0 / re) ** 0.9 + 0.27 * rr))) ** 16
    b = (37530.0 / re) ** 16
    inner = (8.0 / re) ** 12 + (1.0 / (a + b)) ** 1.5
    return 8.0 * inner ** (1.0 / 12)
