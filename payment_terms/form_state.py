"""
Document Form Reducer

One immutable DocumentForm with explicit transitions. Each transition
returns a new snapshot, so "unsaved changes" is a plain equality check
against the last saved baseline.
"""

from dataclasses import replace

from .calculators import PaymentSplitEngine, TotalsCalculator
from .models import CONDITIONS, METHODS, DocumentForm, LineItem, ModeSwitch, Totals, to_decimal

BANK_FIELDS = ("name", "account_number", "account_holder")


class DocumentFormReducer:
    """Transition functions over DocumentForm snapshots."""

    def __init__(self):
        self.totals_calculator = TotalsCalculator()
        self.split_engine = PaymentSplitEngine()

    def new_form(self, kind: str = "contract") -> DocumentForm:
        return DocumentForm(kind=kind)

    def totals(self, form: DocumentForm) -> Totals:
        return self.totals_calculator.calculate(form.items)

    # -------------------------------------------------------------------------
    # Line items
    # -------------------------------------------------------------------------

    def add_item(self, form: DocumentForm, item: LineItem | None = None) -> DocumentForm:
        return replace(form, items=form.items + (item or LineItem(),))

    def update_item(self, form: DocumentForm, index: int, **changes) -> DocumentForm:
        """Change fields of one item. `amount` cannot be set; it is derived."""
        if "amount" in changes:
            raise ValueError("amount is derived from quantity and unit_price")
        if "unit_price" in changes:
            changes["unit_price"] = to_decimal(changes["unit_price"], "unit_price")

        items = list(form.items)
        items[index] = replace(items[index], **changes)
        return replace(form, items=tuple(items))

    def remove_item(self, form: DocumentForm, index: int) -> DocumentForm:
        """Remove a row; the last remaining row is kept."""
        if len(form.items) <= 1:
            return form
        items = form.items[:index] + form.items[index + 1:]
        return replace(form, items=items)

    # -------------------------------------------------------------------------
    # Payment split
    # -------------------------------------------------------------------------

    def edit_leg(self, form: DocumentForm, leg_name: str, raw_value: str) -> DocumentForm:
        """Edit a leg; the balance is derived from the current total."""
        total = self.totals(form).total
        split = self.split_engine.apply_leg_edit(form.split, leg_name, raw_value, total)
        return replace(form, split=split)

    def switch_mode(self, form: DocumentForm, new_mode: str, confirmed: bool = False) -> tuple[DocumentForm, ModeSwitch]:
        result = self.split_engine.switch_mode(form.split, new_mode, confirmed=confirmed)
        if not result.confirmed:
            return form, result
        return replace(form, split=result.split), result

    def edit_due_date(self, form: DocumentForm, leg_name: str, value: str) -> DocumentForm:
        split = self.split_engine.set_due_date(form.split, leg_name, value)
        return replace(form, split=split)

    def set_condition(self, form: DocumentForm, condition: str) -> DocumentForm:
        if condition not in CONDITIONS:
            raise ValueError(f"Invalid condition: {condition}. Must be 'immediate' or 'custom'")
        return replace(form, split=replace(form.split, condition=condition))

    def set_method(self, form: DocumentForm, method: str) -> DocumentForm:
        if method and method not in METHODS:
            raise ValueError(f"Invalid method: {method}. Must be 'bank' or 'card'")
        return replace(form, split=replace(form.split, method=method))

    def set_bank_detail(self, form: DocumentForm, field_name: str, value: str) -> DocumentForm:
        if field_name not in BANK_FIELDS:
            raise ValueError(f"Invalid bank field: {field_name}")
        bank = replace(form.split.bank, **{field_name: value})
        return replace(form, split=replace(form.split, bank=bank))

    @staticmethod
    def is_dirty(baseline: DocumentForm, form: DocumentForm) -> bool:
        """True when the form differs from the last saved snapshot."""
        return baseline != form
