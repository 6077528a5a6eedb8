"""
Calculators Package

Provides the calculation components behind the payment terms form.
"""

from .due_dates import DueDateRequirementResolver
from .split import PaymentSplitEngine
from .totals import TotalsCalculator

__all__ = [
    "TotalsCalculator",
    "PaymentSplitEngine",
    "DueDateRequirementResolver",
]
