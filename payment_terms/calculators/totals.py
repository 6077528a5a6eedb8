"""
Totals Calculator

Derives subtotal, tax and grand total from the line item collection.
"""

from decimal import ROUND_FLOOR, Decimal
from typing import Iterable

from ..models import LineItem, Totals


class TotalsCalculator:
    """Computes document totals. Callers re-run it on every item change."""

    TAX_RATE = Decimal("0.1")

    def calculate(self, items: Iterable[LineItem]) -> Totals:
        subtotal = sum((item.amount for item in items), Decimal("0"))
        tax_amount = self._calculate_tax(subtotal)
        return Totals(
            subtotal=subtotal,
            tax_amount=tax_amount,
            total=subtotal + tax_amount,
        )

    def _calculate_tax(self, subtotal: Decimal) -> Decimal:
        """VAT at 10%, floored to a whole currency unit."""
        return (subtotal * self.TAX_RATE).to_integral_value(rounding=ROUND_FLOOR)
