from __future__ import annotations

import math
from typing import Iterable, List

from pipeflow.core.errors import PipeValidationError, ValidationIssue
from pipeflow.core.models.fluid import Fluid
from pipeflow.core.models.pipe import PipeSegment


def _is_number(x: object) -> bool:
    try:
        return not math.isnan(float(x))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False


def validate_fluid(fluid: Fluid) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    if not _is_number(fluid.rho):
        issues.append(ValidationIssue("error", f"Fluid({fluid.name}) density is not numeric: {fluid.rho!r}"))
    elif fluid.rho <= 0:
        issues.append(ValidationIssue("error", f"Fluid({fluid.name}) density <= 0: {fluid.rho}"))

    if not _is_number(fluid.mu):
        issues.append(ValidationIssue("error", f"Fluid({fluid.name}) viscosity is not numeric: {fluid.mu!r}"))
    elif fluid.mu <= 0:
        issues.append(ValidationIssue("error", f"Fluid({fluid.name}) viscosity <= 0: {fluid.mu}"))

    return issues


def validate_pipe(pipe: PipeSegment) -> List[ValidationIssue]:
    """
    Validate a PipeSegment for basic consistency.
    Returns a list of issues (errors and warnings). If errors exist, caller may raise.
    """
    issues: List[ValidationIssue] = []
    tag = f"Pipe(uid={pipe.uid}, name={pipe.name})"

    # geometry checks
    for label, value in (("hydraulic_diameter", pipe.hydraulic_diameter), ("length", pipe.length)):
        if not _is_number(value):
            issues.append(ValidationIssue("error", f"{tag} {label} is not numeric: {value!r}"))
        elif value <= 0:
            issues.append(ValidationIssue("error", f"{tag} {label} <= 0: {value}"))

    if pipe.area is not None:
        if not _is_number(pipe.area):
            issues.append(ValidationIssue("error", f"{tag} area is not numeric: {pipe.area!r}"))
        elif pipe.area <= 0:
            issues.append(ValidationIssue(
                "error",
                f"{tag} area <= 0: {pipe.area}",
                "Leave area empty to use the circular section of the hydraulic diameter.",
            ))

    if not _is_number(pipe.incline_angle_deg):
        issues.append(ValidationIssue("error", f"{tag} incline angle is not numeric: {pipe.incline_angle_deg!r}"))

    # loss coefficients
    if not _is_number(pipe.roughness_ratio):
        issues.append(ValidationIssue("error", f"{tag} roughness_ratio is not numeric: {pipe.roughness_ratio!r}"))
    elif pipe.roughness_ratio < 0:
        issues.append(ValidationIssue("error", f"{tag} roughness_ratio < 0: {pipe.roughness_ratio}"))
    elif pipe.roughness_ratio > 0.05:
        issues.append(ValidationIssue(
            "warning",
            f"{tag} roughness_ratio seems unusual: eps/D={pipe.roughness_ratio}",
            "eps/D is a ratio, not an absolute roughness; Moody charts stop at 0.05.",
        ))

    if not _is_number(pipe.form_loss_k):
        issues.append(ValidationIssue("error", f"{tag} form_loss_k is not numeric: {pipe.form_loss_k!r}"))
    elif pipe.form_loss_k < 0:
        issues.append(ValidationIssue("error", f"{tag} form_loss_k < 0: {pipe.form_loss_k}"))
    elif pipe.form_loss_k > 100.0:
        issues.append(ValidationIssue(
            "warning",
            f"{tag} form_loss_k seems unusual: K={pipe.form_loss_k}",
            "K is the sum of the minor loss coefficients of the segment.",
        ))

    return issues


def validate_pipes(pipes: Iterable[PipeSegment], fluid: Fluid) -> List[ValidationIssue]:
    issues = validate_fluid(fluid)
    for p in pipes:
        issues.extend(validate_pipe(p))
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errors = [i for i in issues if i.level == "error"]
    if errors:
        raise PipeValidationError(errors)
