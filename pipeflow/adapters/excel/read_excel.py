from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from pipeflow.core.models.case import FlowCase
from pipeflow.core.models.fluid import Fluid
from pipeflow.core.models.pipe import PipeSegment
from pipeflow.core.models.source import make_source

logger = logging.getLogger(__name__)


# -----------------------------
# Excel contract
# -----------------------------
SHEET_PIPES = "pipes"
SHEET_CASES = "cases"
SHEET_CONFIG = "config"

# Required columns (snake_case)
REQ_PIPES = {"pipe_id", "name", "hydraulic_diameter_m", "length_m"}
REQ_CASES = {"case_id", "pipe_id", "given", "value"}
REQ_CONFIG = {"key", "value"}

# Accepted spellings of the "given" column -> core name
GIVEN_MAP = {
    "mass_flow": "mass_flow_kg_s",
    "mass_flow_kg_s": "mass_flow_kg_s",
    "pressure_change": "pressure_change_pa",
    "pressure_change_pa": "pressure_change_pa",
}

DENSITY_KEYS = ("density_kg_m3", "density", "rho")
VISCOSITY_KEYS = ("viscosity_pa_s", "viscosity", "mu")


@dataclass(frozen=True)
class ExcelIds:
    """Holds mapping from Excel IDs to internal UIDs."""
    pipe_uid_by_excel_id: Dict[str, str]
    case_uid_by_excel_id: Dict[str, str]


def _norm_str(x: Any) -> str:
    if x is None or (isinstance(x, float) and pd.isna(x)):
        return ""
    return str(x).strip()


def _norm_lower(x: Any) -> str:
    return _norm_str(x).lower()


def _require_columns(df: pd.DataFrame, required: set[str], sheet: str) -> None:
    missing = sorted(list(required - set(df.columns)))
    if missing:
        raise ValueError(f"Sheet '{sheet}' is missing required columns: {missing}")


def _as_float(x: Any, field: str, sheet: str, row_hint: str) -> float:
    try:
        if x is None or (isinstance(x, float) and pd.isna(x)) or (isinstance(x, str) and x.strip() == ""):
            raise ValueError("empty")
        return float(x)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid numeric value for '{field}' in sheet '{sheet}' ({row_hint}): {x!r}") from e


def _maybe_float(x: Any, field: str, sheet: str, row_hint: str, default: Optional[float] = None) -> Optional[float]:
    """Optional numeric cell: blank gives ``default``, anything else must parse."""
    if x is None or (isinstance(x, float) and pd.isna(x)) or (isinstance(x, str) and x.strip() == ""):
        return default
    return _as_float(x, field, sheet, row_hint)


def _check_unique(ids: List[str], column: str, sheet: str) -> None:
    dups = sorted({x for x in ids if ids.count(x) > 1})
    if dups:
        raise ValueError(f"Duplicate {column} in sheet '{sheet}': {dups}")


def _read_config(df_config: pd.DataFrame) -> Dict[str, Any]:
    config: Dict[str, Any] = {}
    for _, r in df_config.iterrows():
        key = _norm_lower(r["key"])
        if not key:
            continue
        val = r["value"]

        # Try to coerce to float if looks numeric
        if isinstance(val, str):
            v = val.strip()
            if v == "":
                continue
            try:
                config[key] = float(v)
            except ValueError:
                config[key] = v
            continue

        if isinstance(val, float) and pd.isna(val):
            continue

        config[key] = val
    return config


def _first(config: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for k in keys:
        if k in config:
            return config[k]
    return None


def fluid_from_config(config: Dict[str, Any]) -> Fluid:
    rho = _first(config, DENSITY_KEYS)
    mu = _first(config, VISCOSITY_KEYS)
    if rho is None or mu is None:
        raise ValueError(
            f"Sheet '{SHEET_CONFIG}' must define the fluid density {list(DENSITY_KEYS)} "
            f"and dynamic viscosity {list(VISCOSITY_KEYS)}."
        )
    name = _norm_str(config.get("fluid_name", config.get("fluid", ""))) or "fluid"
    return Fluid(
        name=name,
        rho=_as_float(rho, "density", SHEET_CONFIG, "key=density"),
        mu=_as_float(mu, "viscosity", SHEET_CONFIG, "key=viscosity"),
    )


def load_cases_from_excel(
    path: str,
) -> Tuple[Dict[str, PipeSegment], List[FlowCase], Fluid, Dict[str, Any], ExcelIds]:
    """
    Reads 'pipes', 'cases', 'config' from an Excel file and returns:
      - pipes by internal uid
      - flow cases (in sheet order)
      - the fluid defined in 'config'
      - config dict from 'config' sheet (keys normalized, see PipeFlowConfig.from_dict)
      - ExcelIds mapping (Excel ids -> internal uids)
    """

    # Read sheets
    df_pipes = pd.read_excel(path, sheet_name=SHEET_PIPES, engine="openpyxl")
    df_cases = pd.read_excel(path, sheet_name=SHEET_CASES, engine="openpyxl")
    df_config = pd.read_excel(path, sheet_name=SHEET_CONFIG, engine="openpyxl")

    # Validate columns
    _require_columns(df_pipes, REQ_PIPES, SHEET_PIPES)
    _require_columns(df_cases, REQ_CASES, SHEET_CASES)
    _require_columns(df_config, REQ_CONFIG, SHEET_CONFIG)

    # -----------------------------
    # Config + fluid
    # -----------------------------
    config = _read_config(df_config)
    fluid = fluid_from_config(config)

    # -----------------------------
    # Pipes
    # -----------------------------
    pipe_uid_by_excel_id: Dict[str, str] = {}
    pipes: Dict[str, PipeSegment] = {}

    _check_unique([_norm_str(x) for x in df_pipes["pipe_id"].tolist() if _norm_str(x)], "pipe_id", SHEET_PIPES)

    for _, r in df_pipes.iterrows():
        pipe_id = _norm_str(r["pipe_id"])
        if not pipe_id:
            continue  # allow blank rows
        hint = f"pipe_id={pipe_id}"

        uid = str(uuid.uuid4())
        pipe_uid_by_excel_id[pipe_id] = uid
        pipes[uid] = PipeSegment(
            uid=uid,
            name=_norm_str(r["name"]) or pipe_id,
            hydraulic_diameter=_as_float(r["hydraulic_diameter_m"], "hydraulic_diameter_m", SHEET_PIPES, hint),
            length=_as_float(r["length_m"], "length_m", SHEET_PIPES, hint),
            area=_maybe_float(r.get("area_m2", None), "area_m2", SHEET_PIPES, hint),
            roughness_ratio=_maybe_float(r.get("roughness_ratio", None), "roughness_ratio", SHEET_PIPES, hint, 0.0),
            form_loss_k=_maybe_float(r.get("form_loss_k", None), "form_loss_k", SHEET_PIPES, hint, 0.0),
            incline_angle_deg=_maybe_float(r.get("incline_deg", None), "incline_deg", SHEET_PIPES, hint, 0.0),
            external_id=pipe_id,
            metadata={"excel_pipe_id": pipe_id},
        )

    # -----------------------------
    # Cases
    # -----------------------------
    case_uid_by_excel_id: Dict[str, str] = {}
    cases: List[FlowCase] = []

    _check_unique([_norm_str(x) for x in df_cases["case_id"].tolist() if _norm_str(x)], "case_id", SHEET_CASES)

    for _, r in df_cases.iterrows():
        case_id = _norm_str(r["case_id"])
        if not case_id:
            continue
        hint = f"case_id={case_id}"

        pipe_id = _norm_str(r["pipe_id"])
        if pipe_id not in pipe_uid_by_excel_id:
            raise ValueError(f"Unknown pipe_id '{pipe_id}' in '{SHEET_CASES}' ({hint})")

        given_raw = _norm_lower(r["given"])
        if given_raw not in GIVEN_MAP:
            raise ValueError(
                f"Invalid given in '{SHEET_CASES}' ({hint}): {given_raw!r}. Allowed: {sorted(GIVEN_MAP.keys())}"
            )

        source = None
        source_type = _norm_lower(r.get("source_type", ""))
        if source_type and source_type != "none":
            source_value = _as_float(r.get("source_value", None), "source_value", SHEET_CASES, hint)
            source = make_source(source_type, source_value)

        uid = str(uuid.uuid4())
        case_uid_by_excel_id[case_id] = uid
        cases.append(FlowCase(
            uid=uid,
            pipe_uid=pipe_uid_by_excel_id[pipe_id],
            given=GIVEN_MAP[given_raw],  # type: ignore[arg-type]
            value=_as_float(r["value"], "value", SHEET_CASES, hint),
            source=source,
            external_id=case_id,
        ))

    logger.info("Loaded %d pipes and %d cases from %s", len(pipes), len(cases), path)

    excel_ids = ExcelIds(pipe_uid_by_excel_id=pipe_uid_by_excel_id, case_uid_by_excel_id=case_uid_by_excel_id)
    return pipes, cases, fluid, config, excel_ids
