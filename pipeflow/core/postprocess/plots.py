from __future__ import annotations

import os
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd


def _require_columns(df: pd.DataFrame, required: list[str]) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise KeyError(
            f"Required columns not found: {missing}. "
            f"Available columns: {list(df.columns)}"
        )


def plot_system_curve(
    curve: pd.DataFrame,
    *,
    title: str,
    out_png: str,
    show_loss: bool = True,
) -> None:
    """
    Pressure change (and optionally pressure loss) vs mass flow, in kPa.
    """
    _require_columns(curve, ["mass_flow_kg_s", "pressure_change_pa", "pressure_loss_pa"])
    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)

    plt.figure()
    plt.plot(curve["mass_flow_kg_s"], curve["pressure_change_pa"] / 1e3, label="pressure change")
    if show_loss:
        plt.plot(curve["mass_flow_kg_s"], curve["pressure_loss_pa"] / 1e3, "--", label="pressure loss")
    plt.axhline(0.0, color="k", linewidth=0.5)
    plt.xlabel("m_dot [kg/s]")
    plt.ylabel("dp [kPa]")
    plt.title(title)
    plt.legend()
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()


def plot_moody(
    table: pd.DataFrame,
    *,
    out_png: str,
    title: Optional[str] = "Darcy friction factor (Churchill)",
) -> None:
    """
    Log-log chart of a friction_table (index Re, one column per eps/D).
    """
    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)

    plt.figure()
    for col in table.columns:
        plt.loglog(table.index, table[col], label=str(col))
    plt.xlabel("Re [-]")
    plt.ylabel("f_darcy [-]")
    if title:
        plt.title(title)
    plt.legend(fontsize="small")
    plt.grid(True, which="both")
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()
