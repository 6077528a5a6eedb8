"""
Validators for the Payment Terms Engine

SplitValidator holds the pure predicates used during form validation; they
return booleans and never raise.

InputValidator checks the structure of incoming request data before it
reaches the engine. Raises ValueError with clear messages, which the HTTP
layers turn into 400 responses.
"""

from decimal import Decimal
from typing import Iterable

from .models import (
    CONDITIONS,
    DOCUMENT_KINDS,
    METHODS,
    MODES,
    DocumentForm,
    LineItem,
    Legs,
    PaymentSplit,
    parse_leg,
)


class SplitValidator:
    """Sum and numeric sanity checks for the three payment legs."""

    TOLERANCE = Decimal("0.01")
    PERCENT_TARGET = Decimal("100")

    def validate_amount_sum(self, legs: Legs, total: Decimal) -> bool:
        """Legs must add up to the document total, unless nothing is entered."""
        return self._sum_matches(legs.total, total)

    def validate_percent_sum(self, legs: Legs) -> bool:
        """Percent legs must add up to 100, unless nothing is entered."""
        return self._sum_matches(legs.total, self.PERCENT_TARGET)

    def validate_leg_numeric(self, raw_value: str) -> bool:
        """Blank is fine (legs are optional); NaN, infinities and negatives are not."""
        value = parse_leg(raw_value)
        if value is None:
            return True
        if not value.is_finite():
            return False
        return value >= 0

    def _sum_matches(self, leg_sum: Decimal, target: Decimal) -> bool:
        if leg_sum > 0 and abs(leg_sum - target) > self.TOLERANCE:
            return False
        return True


class InputValidator:
    """Validates request data according to the form's structural rules."""

    def validate(self, form: DocumentForm) -> None:
        """
        Run all structural checks. Raises ValueError if any check fails.
        """
        if form.kind not in DOCUMENT_KINDS:
            raise ValueError(f"Invalid kind: {form.kind}. Must be 'quote' or 'contract'")

        self.validate_items(form.items)
        self.validate_split(form.split)

    def validate_split(self, split: PaymentSplit) -> None:
        # An empty condition is a form error (unselected), not a request error
        if split.condition and split.condition not in CONDITIONS:
            raise ValueError(f"Invalid condition: {split.condition}. Must be 'immediate' or 'custom'")

        if split.mode not in MODES:
            raise ValueError(f"Invalid mode: {split.mode}. Must be 'amount' or 'percent'")

        if split.method and split.method not in METHODS:
            raise ValueError(f"Invalid method: {split.method}. Must be 'bank' or 'card'")

    def validate_items(self, items: Iterable[LineItem]) -> None:
        for i, item in enumerate(items):
            self._validate_item(item, i)

    def _validate_item(self, item: LineItem, index: int) -> None:
        if item.quantity < 1:
            raise ValueError(f"Item {index} quantity must be at least 1, got: {item.quantity}")

        if not item.unit_price.is_finite() or item.unit_price < 0:
            raise ValueError(f"Item {index} unit_price must be a non-negative number, got: {item.unit_price}")
