from __future__ import annotations

import os
from typing import Dict

import pandas as pd


def export_curve_csv(
    curve: pd.DataFrame,
    path_csv: str,
) -> None:
    """
    Export a system curve (see curves.system_curve) to CSV.
    """
    os.makedirs(os.path.dirname(path_csv) or ".", exist_ok=True)
    curve.to_csv(path_csv, index=False)


def export_curve_excel(
    curve: pd.DataFrame,
    path_xlsx: str,
    sheet_name: str = "system_curve",
) -> None:
    """
    Export a system curve to Excel.
    """
    os.makedirs(os.path.dirname(path_xlsx) or ".", exist_ok=True)
    with pd.ExcelWriter(path_xlsx, engine="openpyxl") as writer:
        curve.to_excel(writer, sheet_name=sheet_name, index=False)


def export_tables_excel(
    tables: Dict[str, pd.DataFrame],
    path_xlsx: str,
    *,
    index: bool = False,
) -> None:
    """
    One sheet per table, e.g. {"results": cases_df, "moody": friction_df}.
    Sheet names are truncated to Excel's 31 characters.
    """
    os.makedirs(os.path.dirname(path_xlsx) or ".", exist_ok=True)
    with pd.ExcelWriter(path_xlsx, engine="openpyxl") as writer:
        for name, df in tables.items():
            df.to_excel(writer, sheet_name=str(name)[:31], index=index)
