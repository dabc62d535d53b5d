# pipeflow/core/postprocess/curves.py
from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from pipeflow.core.build.config import DEFAULT_CONFIG, PipeFlowConfig
from pipeflow.core.build.validate import raise_on_errors, validate_pipes
from pipeflow.core.hydraulics.bejan import bejan_from_reynolds_signed
from pipeflow.core.hydraulics.dimensionless import reynolds_from_mass_flow
from pipeflow.core.hydraulics.friction import darcy_vec
from pipeflow.core.hydraulics.headloss import hydrostatic_pressure
from pipeflow.core.models.fluid import Fluid
from pipeflow.core.models.pipe import PipeSegment
from pipeflow.core.models.source import as_source
from pipeflow.core.solver.pipe_flow import SourceLike, pressure_loss
from pipeflow.core.units import Quantity

logger = logging.getLogger(__name__)

CURVE_COLUMNS = [
    "mass_flow_kg_s",
    "re",
    "be_d",
    "pressure_loss_pa",
    "hydrostatic_pa",
    "source_pa",
    "pressure_change_pa",
]


def system_curve(
    pipe: PipeSegment,
    fluid: Fluid,
    mass_flows: Iterable[float],
    *,
    source: Optional[SourceLike] = None,
    config: Optional[PipeFlowConfig] = None,
) -> pd.DataFrame:
    """
    Pressure change vs mass flow for one pipe segment (system curve).

    mass_flows in kg/s, may include zero and reverse flow.
    Columns: CURVE_COLUMNS.
    """
    raise_on_errors(validate_pipes([pipe], fluid))
    cfg = config if config is not None else DEFAULT_CONFIG
    g = cfg.hydrostatic.g_m_s2

    m = np.asarray(list(mass_flows), dtype=float)
    hydro = hydrostatic_pressure(
        fluid.rho,
        pipe.length,
        Quantity(pipe.incline_angle_deg, "degree"),
        g_m_s2=g,
    ).magnitude
    source_pa = 0.0 if source is None else as_source(source).to_pressure(density=fluid.rho, g_m_s2=g)

    rows = []
    for m_i in m:
        re = reynolds_from_mass_flow(m_i, pipe.flow_area, pipe.hydraulic_diameter, fluid.mu)
        be_d = bejan_from_reynolds_signed(re, pipe.roughness_ratio, pipe.length_to_diameter, pipe.form_loss_k)
        loss = pressure_loss(
            m_i,
            area=pipe.flow_area,
            hydraulic_diameter=pipe.hydraulic_diameter,
            viscosity=fluid.mu,
            density=fluid.rho,
            length=pipe.length,
            roughness_ratio=pipe.roughness_ratio,
            form_loss_k=pipe.form_loss_k,
        ).magnitude
        rows.append({
            "mass_flow_kg_s": float(m_i),
            "re": re,
            "be_d": be_d,
            "pressure_loss_pa": loss,
            "hydrostatic_pa": hydro,
            "source_pa": source_pa,
            "pressure_change_pa": hydro - loss + source_pa,
        })

    logger.debug("system_curve: pipe=%s, %d points", pipe.uid, len(rows))
    return pd.DataFrame(rows, columns=CURVE_COLUMNS)


def friction_table(re_values: Iterable[float], roughness_ratios: Iterable[float]) -> pd.DataFrame:
    """
    Darcy friction factors on a Re x eps/D grid (Moody chart as a table).
    Index: Re, one column per roughness ratio.
    """
    re = np.asarray(list(re_values), dtype=float)
    rr = np.asarray(list(roughness_ratios), dtype=float)

    f = darcy_vec(re[:, None], rr[None, :])
    df = pd.DataFrame(f, index=pd.Index(re, name="re"), columns=[f"eps_D={r:g}" for r in rr])
    return df
