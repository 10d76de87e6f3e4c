from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, PayrollInputs


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, inputs: PayrollInputs) -> PayrollBreakdown:
        raise NotImplementedError
