"""
Payment Split Engine

Owns the deposit / milestone / balance split. Every operation returns a new
snapshot; nothing is mutated in place.
"""

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from ..models import (
    LEG_NAMES,
    MODES,
    DueDates,
    Legs,
    ModeSwitch,
    PaymentSplit,
    format_decimal,
    leg_value,
)


def quantize_percent(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class PaymentSplitEngine:
    """Leg edits with balance auto-derivation, and destructive mode switching."""

    PERCENT_TARGET = Decimal("100")

    def set_leg(self, legs: Legs, leg_name: str, raw_value: str, mode: str, total: Decimal) -> Legs:
        """
        Write one leg and re-derive the balance.

        The raw string is kept as typed. Editing deposit or milestone sets
        balance = max(target - deposit - milestone, 0), where target is the
        document total (amount mode) or 100 (percent mode). Editing balance
        leaves the other two legs alone.
        """
        self._check_leg(leg_name)
        self._check_mode(mode)

        updated = replace(legs, **{leg_name: raw_value})
        if leg_name == "balance":
            return updated

        return replace(updated, balance=self._derive_balance(updated, mode, total))

    def apply_leg_edit(self, split: PaymentSplit, leg_name: str, raw_value: str, total: Decimal) -> PaymentSplit:
        """Edit a leg of the split's active mode."""
        legs = self.set_leg(split.active_legs, leg_name, raw_value, split.mode, total)
        if split.mode == "amount":
            return replace(split, amounts=legs)
        return replace(split, percents=legs)

    def switch_mode(self, split: PaymentSplit, new_mode: str, confirmed: bool = False) -> ModeSwitch:
        """
        Switch between amount and percent units.

        Switching clears all six leg fields (no unit conversion). If the
        active legs hold anything, the switch is only applied once the
        caller passes confirmed=True.
        """
        self._check_mode(new_mode)

        if new_mode == split.mode:
            return ModeSwitch(confirmed=False, requires_confirmation=False, split=split)

        has_values = split.active_legs.has_any_value
        if has_values and not confirmed:
            return ModeSwitch(confirmed=False, requires_confirmation=True, split=split)

        cleared = replace(split, mode=new_mode, amounts=Legs(), percents=Legs())
        return ModeSwitch(confirmed=True, requires_confirmation=has_values, split=cleared)

    def set_due_date(self, split: PaymentSplit, leg_name: str, value: str) -> PaymentSplit:
        self._check_leg(leg_name)
        due_dates: DueDates = replace(split.due_dates, **{leg_name: value})
        return replace(split, due_dates=due_dates)

    def _derive_balance(self, legs: Legs, mode: str, total: Decimal) -> str:
        target = total if mode == "amount" else self.PERCENT_TARGET
        remaining = target - leg_value(legs.deposit) - leg_value(legs.milestone)

        if remaining <= 0:
            return "0"
        if mode == "percent":
            return str(quantize_percent(remaining))
        return format_decimal(remaining)

    @staticmethod
    def _check_leg(leg_name: str) -> None:
        if leg_name not in LEG_NAMES:
            raise ValueError(f"Invalid leg: {leg_name}. Must be one of {', '.join(LEG_NAMES)}")

    @staticmethod
    def _check_mode(mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Invalid mode: {mode}. Must be 'amount' or 'percent'")
