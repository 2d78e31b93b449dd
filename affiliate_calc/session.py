"""Caller-side holder for the calculator's current inputs and result."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .models import CalculationInputs, CalculationMode, CalculationResult
from .services.earnings import EarningsEngine


@dataclass
class CalculatorSession:
    """Keeps the last successful result; invalid input leaves it untouched."""

    engine: EarningsEngine = field(default_factory=EarningsEngine)
    inputs: CalculationInputs = field(default_factory=CalculationInputs)
    result: Optional[CalculationResult] = None
    mode: Optional[CalculationMode] = None

    def apply(self, inputs: CalculationInputs, mode: CalculationMode) -> bool:
        self.inputs = inputs
        result = self.engine.calculate(inputs, mode)
        if result is None:
            return False
        self.result = result
        self.mode = mode
        return True

    def reset(self) -> None:
        self.inputs = CalculationInputs()
        self.result = None
        self.mode = None
