from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


class PipeFlowError(Exception):
    """Base class for every error raised by pipeflow."""


class DomainError(PipeFlowError, ValueError):
    """Non-physical or out-of-range input (Re<0, roughness<0, L/D<=0, K<0, ...)."""


class UndefinedAtZeroError(DomainError, ZeroDivisionError):
    """Friction factor requested at Re = 0, where it is undefined."""


class NonConvergenceError(PipeFlowError, RuntimeError):
    """
    Inputs passed every domain check but the bracketed solver could not
    locate or refine a root.
    """


@dataclass(frozen=True)
class ValidationIssue:
    level: str              # "error" | "warning"
    message: str
    hint: Optional[str] = None


class PipeValidationError(DomainError):
    """Raised when validation finds one or more errors."""
    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        lines = ["Pipe flow validation failed with errors:"]
        for it in issues:
            if it.level == "error":
                lines.append(f"- {it.message}" + (f" | hint: {it.hint}" if it.hint else ""))
        super().__init__("\n".join(lines))


def require_positive(value: float, name: str) -> None:
    if not value > 0:
        raise DomainError(f"{name} <= 0, nonphysical (received {value!r})")


def require_non_negative(value: float, name: str) -> None:
    if not value >= 0:
        raise DomainError(f"{name} < 0, nonphysical (received {value!r})")
