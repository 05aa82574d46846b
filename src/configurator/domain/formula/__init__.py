"""Formula evaluation for per-view global dimensions."""

from .engine import (
    EngineSettings,
    EngineState,
    FormulaEngine,
    RecalcReport,
    formula_key,
)
from .interpreter import MATH_FUNCTIONS, FormulaInterpreter
from .scheduler import AsyncioScheduler, ManualScheduler
from .scope import FormulaScope

__all__ = [
    "AsyncioScheduler",
    "EngineSettings",
    "EngineState",
    "FormulaEngine",
    "FormulaInterpreter",
    "FormulaScope",
    "MATH_FUNCTIONS",
    "ManualScheduler",
    "RecalcReport",
    "formula_key",
]
