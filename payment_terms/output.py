"""
Payload Builder

Constructs the normalized submission payload sent to the document API
once a form has passed validation.
"""

from decimal import Decimal
from typing import Optional

from .calculators import DueDateRequirementResolver, TotalsCalculator
from .models import LEG_NAMES, DocumentForm, LineItem, PaymentSplit, format_decimal, parse_leg


def _or_none(value: str) -> Optional[str]:
    """Blank strings are sent as null."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def to_money(value: Decimal) -> str:
    """Render a Decimal amount as a plain string."""
    return format_decimal(value)


class PayloadBuilder:
    """Builds the submission payload for a quote or contract."""

    def __init__(self):
        self.totals_calculator = TotalsCalculator()
        self.due_date_resolver = DueDateRequirementResolver()

    def build(self, form: DocumentForm) -> dict:
        """Construct the complete document payload from a form snapshot."""
        totals = self.totals_calculator.calculate(form.items)
        payload = {
            "kind": form.kind,
            "title": form.title.strip(),
            "client_name": _or_none(form.client.name),
            "client_email": _or_none(form.client.email),
            "client_phone": _or_none(form.client.phone),
            "client_company": _or_none(form.client.company),
            "project_start_date": _or_none(form.start_date),
            "project_end_date": _or_none(form.end_date),
            "items": [self._build_item(item) for item in form.items if item.name.strip()],
            "subtotal": to_money(totals.subtotal),
            "tax_amount": to_money(totals.tax_amount),
            "total": to_money(totals.total),
        }

        if form.kind == "contract":
            payload["supplier_info"] = {
                "name": _or_none(form.supplier.name),
                "email": _or_none(form.supplier.email),
                "phone": _or_none(form.supplier.phone),
                "company": _or_none(form.supplier.company),
            }
        else:
            payload["expiry_date"] = _or_none(form.valid_until)

        payload.update(self.build_payment_fields(form.split))
        return payload

    def build_payment_fields(self, split: PaymentSplit) -> dict:
        """
        Normalized payment fields.

        Leg values are only sent for the active mode, due dates only for legs
        carrying money, bank details only for bank transfer. Everything else
        is null.
        """
        custom = split.is_custom
        fields = {
            "payment_condition": split.condition or None,
            "payment_input_unit": split.mode if custom else None,
            "payment_method": (split.method or None) if custom else None,
        }

        required_due = self.due_date_resolver.required_due_dates(split.active_legs)
        for leg in LEG_NAMES:
            fields[f"amount_{leg}"] = self._leg_field(split, "amount", leg)
            fields[f"percent_{leg}"] = self._leg_field(split, "percent", leg)
            due = split.due_dates.get(leg) if custom and required_due[leg] else None
            fields[f"due_{leg}"] = _or_none(due)

        is_bank = custom and split.method == "bank"
        fields["bank_name"] = _or_none(split.bank.name) if is_bank else None
        fields["bank_account_number"] = _or_none(split.bank.account_number) if is_bank else None
        fields["bank_account_holder"] = _or_none(split.bank.account_holder) if is_bank else None
        return fields

    def _leg_field(self, split: PaymentSplit, mode: str, leg: str) -> Optional[str]:
        if not split.is_custom or split.mode != mode:
            return None
        legs = split.amounts if mode == "amount" else split.percents
        value = parse_leg(legs.get(leg))
        if value is None:
            return None
        return legs.get(leg).strip()

    def _build_item(self, item: LineItem) -> dict:
        return {
            "id": item.id,
            "name": item.name.strip(),
            "description": item.description,
            "quantity": item.quantity,
            "unit_price": to_money(item.unit_price),
            "amount": to_money(item.amount),
            "unit": item.unit,
        }
