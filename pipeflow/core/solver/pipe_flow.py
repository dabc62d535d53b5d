# pipeflow/core/solver/pipe_flow.py
from __future__ import annotations

import logging
from typing import Optional, Union

import pint

from pipeflow.core.build.config import DEFAULT_CONFIG, PipeFlowConfig
from pipeflow.core.errors import DomainError, require_positive
from pipeflow.core.hydraulics.bejan import bejan_from_reynolds
from pipeflow.core.hydraulics.dimensionless import (
    bejan_from_pressure,
    mass_flow_from_reynolds,
    pressure_from_bejan,
    reynolds_from_mass_flow,
)
from pipeflow.core.hydraulics.headloss import hydrostatic_pressure
from pipeflow.core.hydraulics.reynolds_solver import reynolds_from_bejan
from pipeflow.core.models.fluid import Fluid
from pipeflow.core.models.pipe import PipeSegment
from pipeflow.core.models.source import InternalSource, as_source
from pipeflow.core.units import Quantity, QuantityLike, as_pressure, magnitude

logger = logging.getLogger(__name__)

SourceLike = Union[InternalSource, QuantityLike]


def _cfg(config: Optional[PipeFlowConfig]) -> PipeFlowConfig:
    return config if config is not None else DEFAULT_CONFIG


def _length_to_diameter(length: QuantityLike, hydraulic_diameter: QuantityLike) -> float:
    L = magnitude(length, "m")
    D = magnitude(hydraulic_diameter, "m")
    require_positive(L, "pipe length")
    require_positive(D, "hydraulic diameter")
    return L / D


def _check_losses(roughness_ratio: float, form_loss_k: float) -> None:
    if not roughness_ratio >= 0:
        raise DomainError(f"roughness_ratio < 0 (received {roughness_ratio!r})")
    if not form_loss_k >= 0:
        raise DomainError(f"form loss coefficient K < 0 (received {form_loss_k!r})")


def _source_pressure(source: Optional[SourceLike], density: QuantityLike, g_m_s2: float) -> float:
    if source is None:
        return 0.0
    return as_source(source).to_pressure(density=magnitude(density, "kg/m**3"), g_m_s2=g_m_s2)


# ============================================================
# Straight pipe: pressure loss <-> mass flow
# ============================================================

def pressure_loss(
    mass_flow: QuantityLike,
    *,
    area: QuantityLike,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
    density: QuantityLike,
    length: QuantityLike,
    roughness_ratio: float = 0.0,
    form_loss_k: float = 0.0,
) -> pint.Quantity:
    """
    Pressure loss for a given mass flow, co-signed with the flow.

    m_dot -> Re -> Be_D -> dp. Reverse flow is evaluated on |m_dot| and the
    sign is put back on the result.
    """
    ld = _length_to_diameter(length, hydraulic_diameter)
    _check_losses(roughness_ratio, form_loss_k)

    re = reynolds_from_mass_flow(mass_flow, area, hydraulic_diameter, viscosity)
    be_d = bejan_from_reynolds(abs(re), roughness_ratio, ld, form_loss_k)
    loss = pressure_from_bejan(be_d, hydraulic_diameter, density, viscosity)

    logger.debug("pressure_loss: Re=%.6e Be_D=%.6e dp=%.6e Pa", re, be_d, loss.magnitude)
    return -loss if re < 0 else loss


def mass_flow_from_pressure_loss(
    pressure_loss: QuantityLike,
    *,
    area: QuantityLike,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
    density: QuantityLike,
    length: QuantityLike,
    roughness_ratio: float = 0.0,
    form_loss_k: float = 0.0,
    config: Optional[PipeFlowConfig] = None,
) -> pint.Quantity:
    """
    Mass flow driven by a given (signed) pressure loss.

    dp -> Be_D -> Re (bracketed search) -> m_dot.
    """
    ld = _length_to_diameter(length, hydraulic_diameter)
    _check_losses(roughness_ratio, form_loss_k)

    be_d = bejan_from_pressure(pressure_loss, hydraulic_diameter, density, viscosity)
    re = reynolds_from_bejan(be_d, roughness_ratio, ld, form_loss_k, solver=_cfg(config).solver)

    logger.debug("mass_flow_from_pressure_loss: Be_D=%.6e Re=%.6e", be_d, re)
    return mass_flow_from_reynolds(area, re, hydraulic_diameter, viscosity)


# ============================================================
# Tilted pipe (hydrostatic head) with optional internal source
#
#   pressure change = hydrostatic - pressure loss + source
# ============================================================

def pressure_change(
    mass_flow: QuantityLike,
    *,
    area: QuantityLike,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
    density: QuantityLike,
    length: QuantityLike,
    incline_angle: QuantityLike,
    source: Optional[SourceLike] = None,
    roughness_ratio: float = 0.0,
    form_loss_k: float = 0.0,
    config: Optional[PipeFlowConfig] = None,
) -> pint.Quantity:
    """
    Pressure change (outlet minus inlet) for a given mass flow.

    source may be a PressureSource / KinematicPressureSource / HeadSource, a
    pint quantity of any of those dimensions, or a float in pascal.
    """
    g = _cfg(config).hydrostatic.g_m_s2
    hydro = hydrostatic_pressure(density, length, incline_angle, g_m_s2=g)
    loss = pressure_loss(
        mass_flow,
        area=area,
        hydraulic_diameter=hydraulic_diameter,
        viscosity=viscosity,
        density=density,
        length=length,
        roughness_ratio=roughness_ratio,
        form_loss_k=form_loss_k,
    )
    change = hydro - loss
    if source is None:
        return change
    return change + as_pressure(_source_pressure(source, density, g))


def mass_flow_from_pressure_change(
    pressure_change: QuantityLike,
    *,
    area: QuantityLike,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
    density: QuantityLike,
    length: QuantityLike,
    incline_angle: QuantityLike,
    source: Optional[SourceLike] = None,
    roughness_ratio: float = 0.0,
    form_loss_k: float = 0.0,
    config: Optional[PipeFlowConfig] = None,
) -> pint.Quantity:
    """
    Mass flow for a given pressure change: the source is removed first, then
    pressure loss = hydrostatic - pressure change is inverted as a straight pipe.
    """
    g = _cfg(config).hydrostatic.g_m_s2
    change_without_source = magnitude(pressure_change, "Pa") - _source_pressure(source, density, g)
    hydro = hydrostatic_pressure(density, length, incline_angle, g_m_s2=g).magnitude

    return mass_flow_from_pressure_loss(
        as_pressure(hydro - change_without_source),
        area=area,
        hydraulic_diameter=hydraulic_diameter,
        viscosity=viscosity,
        density=density,
        length=length,
        roughness_ratio=roughness_ratio,
        form_loss_k=form_loss_k,
        config=config,
    )


# ============================================================
# Model-level helpers (PipeSegment + Fluid)
# ============================================================

def segment_pressure_change(
    pipe: PipeSegment,
    fluid: Fluid,
    mass_flow: QuantityLike,
    *,
    source: Optional[SourceLike] = None,
    config: Optional[PipeFlowConfig] = None,
) -> pint.Quantity:
    return pressure_change(
        mass_flow,
        area=pipe.flow_area,
        hydraulic_diameter=pipe.hydraulic_diameter,
        viscosity=fluid.mu,
        density=fluid.rho,
        length=pipe.length,
        incline_angle=Quantity(pipe.incline_angle_deg, "degree"),
        source=source,
        roughness_ratio=pipe.roughness_ratio,
        form_loss_k=pipe.form_loss_k,
        config=config,
    )


def segment_mass_flow(
    pipe: PipeSegment,
    fluid: Fluid,
    pressure_change: QuantityLike,
    *,
    source: Optional[SourceLike] = None,
    config: Optional[PipeFlowConfig] = None,
) -> pint.Quantity:
    return mass_flow_from_pressure_change(
        pressure_change,
        area=pipe.flow_area,
        hydraulic_diameter=pipe.hydraulic_diameter,
        viscosity=fluid.mu,
        density=fluid.rho,
        length=pipe.length,
        incline_angle=Quantity(pipe.incline_angle_deg, "degree"),
        source=source,
        roughness_ratio=pipe.roughness_ratio,
        form_loss_k=pipe.form_loss_k,
        config=config,
    )
