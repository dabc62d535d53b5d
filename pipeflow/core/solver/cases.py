# pipeflow/core/solver/cases.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import pandas as pd

from pipeflow.core.build.config import DEFAULT_CONFIG, PipeFlowConfig
from pipeflow.core.build.validate import raise_on_errors, validate_pipes
from pipeflow.core.errors import PipeFlowError
from pipeflow.core.hydraulics.dimensionless import reynolds_from_mass_flow
from pipeflow.core.hydraulics.headloss import hydrostatic_pressure
from pipeflow.core.models.case import FlowCase
from pipeflow.core.models.fluid import Fluid
from pipeflow.core.models.pipe import PipeSegment
from pipeflow.core.solver.pipe_flow import segment_mass_flow, segment_pressure_change
from pipeflow.core.units import Quantity

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "case_id",
    "pipe_id",
    "given",
    "value",
    "mass_flow_kg_s",
    "pressure_change_pa",
    "pressure_loss_pa",
    "re",
    "status",
    "error",
]


def _solve_case(pipe: PipeSegment, fluid: Fluid, case: FlowCase, cfg: PipeFlowConfig) -> Dict[str, object]:
    if case.given == "mass_flow_kg_s":
        m_dot = case.value
        dp = segment_pressure_change(pipe, fluid, m_dot, source=case.source, config=cfg).magnitude
    elif case.given == "pressure_change_pa":
        dp = case.value
        m_dot = segment_mass_flow(pipe, fluid, dp, source=case.source, config=cfg).magnitude
    else:
        raise ValueError(f"FlowCase(uid={case.uid}) has invalid given: {case.given!r}")

    hydro = hydrostatic_pressure(
        fluid.rho, pipe.length, Quantity(pipe.incline_angle_deg, "degree"), g_m_s2=cfg.hydrostatic.g_m_s2
    ).magnitude
    source_pa = 0.0
    if case.source is not None:
        source_pa = case.source.to_pressure(density=fluid.rho, g_m_s2=cfg.hydrostatic.g_m_s2)

    return {
        "mass_flow_kg_s": float(m_dot),
        "pressure_change_pa": float(dp),
        "pressure_loss_pa": float(hydro + source_pa - dp),
        "re": reynolds_from_mass_flow(m_dot, pipe.flow_area, pipe.hydraulic_diameter, fluid.mu),
    }


def run_cases(
    pipes: Dict[str, PipeSegment],
    fluid: Fluid,
    cases: Iterable[FlowCase],
    *,
    config: Optional[PipeFlowConfig] = None,
    fail_fast: bool = False,
) -> pd.DataFrame:
    """
    Resolve every FlowCase and tabulate the results (one row per case).

    Pipes and fluid are validated up front. With fail_fast=False a case that
    raises DomainError / NonConvergenceError is reported with status="error"
    and the message in the "error" column; with fail_fast=True it propagates.
    """
    cfg = config if config is not None else DEFAULT_CONFIG
    raise_on_errors(validate_pipes(pipes.values(), fluid))

    rows = []
    for case in cases:
        if case.pipe_uid not in pipes:
            raise KeyError(f"FlowCase(uid={case.uid}) references unknown pipe uid={case.pipe_uid!r}")
        pipe = pipes[case.pipe_uid]

        row: Dict[str, object] = {
            "case_id": case.external_id or case.uid,
            "pipe_id": pipe.external_id or pipe.uid,
            "given": case.given,
            "value": case.value,
        }
        try:
            row.update(_solve_case(pipe, fluid, case, cfg))
            row["status"] = "ok"
            row["error"] = ""
        except PipeFlowError as e:
            if fail_fast:
                raise
            logger.warning("case %s failed: %s", row["case_id"], e)
            row["status"] = "error"
            row["error"] = f"{type(e).__name__}: {e}"
        rows.append(row)

    logger.info("run_cases: %d cases, %d errors", len(rows), sum(r["status"] == "error" for r in rows))
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)
