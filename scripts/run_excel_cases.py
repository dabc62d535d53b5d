"""
Resolve the flow cases of an Excel workbook and write results + system curves.

    python scripts/run_excel_cases.py cases.xlsx --out out/

Workbook contract: see pipeflow.adapters.excel.read_excel.
"""
from __future__ import annotations

import argparse
import logging
import os

import numpy as np

from pipeflow.adapters.excel.read_excel import load_cases_from_excel
from pipeflow.core.build.config import PipeFlowConfig
from pipeflow.core.postprocess.curves import friction_table, system_curve
from pipeflow.core.postprocess.export import export_curve_csv, export_tables_excel
from pipeflow.core.postprocess.plots import plot_moody, plot_system_curve
from pipeflow.core.solver.cases import run_cases


def main() -> None:
    parser = argparse.ArgumentParser(description="Pipe flow cases from Excel")
    parser.add_argument("workbook", help="Excel file with sheets pipes, cases, config")
    parser.add_argument("--out", default="out", help="output folder (default: out)")
    parser.add_argument("--curve-max", type=float, default=None,
                        help="max |mass flow| [kg/s] for system curves (default: 1.5x max case flow)")
    parser.add_argument("--points", type=int, default=41, help="points per system curve (default: 41)")
    parser.add_argument("--fail-fast", action="store_true", help="stop at the first failing case")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger("run_excel_cases")

    # 1) Load workbook
    pipes, cases, fluid, config_dict, _ = load_cases_from_excel(args.workbook)
    config = PipeFlowConfig.from_dict(config_dict)
    log.info("Fluid %s: rho=%g kg/m3, mu=%g Pa.s", fluid.name, fluid.rho, fluid.mu)

    # 2) Cases
    results = run_cases(pipes, fluid, cases, config=config, fail_fast=args.fail_fast)
    os.makedirs(args.out, exist_ok=True)

    # 3) System curves, one per pipe
    ok = results[results["status"] == "ok"]
    m_max = args.curve_max
    if m_max is None:
        m_max = 1.5 * float(ok["mass_flow_kg_s"].abs().max()) if not ok.empty else 1.0
    mass_flows = np.linspace(-m_max, m_max, args.points)

    for uid, pipe in pipes.items():
        curve = system_curve(pipe, fluid, mass_flows, config=config)
        stem = pipe.external_id or uid
        export_curve_csv(curve, os.path.join(args.out, f"curve_{stem}.csv"))
        plot_system_curve(curve, title=f"{stem} {pipe.name}".strip(), out_png=os.path.join(args.out, f"curve_{stem}.png"))

    # 4) Moody table of the roughness ratios in use
    rr = sorted({p.roughness_ratio for p in pipes.values()})
    moody = friction_table(np.logspace(2, 8, 61), rr)
    plot_moody(moody, out_png=os.path.join(args.out, "moody.png"))

    export_tables_excel(
        {"results": results, "moody": moody.reset_index()},
        os.path.join(args.out, "results.xlsx"),
    )
    log.info("Done: %d cases -> %s", len(results), args.out)


if __name__ == "__main__":
    main()
