"""
Due Date Requirement Resolver

A leg needs a due date only when it actually carries money.
"""

from decimal import Decimal

from ..models import LEG_NAMES, Legs, parse_leg


class DueDateRequirementResolver:
    """Decides per leg whether the matching due date field is mandatory."""

    def is_due_date_required(self, leg_value: Decimal | None) -> bool:
        if leg_value is None or leg_value.is_nan():
            return False
        return leg_value > 0

    def required_due_dates(self, legs: Legs) -> dict[str, bool]:
        """Requirement flag for each leg, independent of the unit mode."""
        return {
            leg: self.is_due_date_required(parse_leg(legs.get(leg)))
            for leg in LEG_NAMES
        }
