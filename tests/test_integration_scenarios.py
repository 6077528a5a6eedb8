"""
Integration Test Scenarios for the Payment Terms Engine

These tests walk a document form through the same steps the authoring
screen does: edit items, edit legs, switch units, validate, build payload.

Run with: python -m pytest tests/test_integration_scenarios.py -v

IMPORTANT: This file has a companion business summary document:
    docs/test_scenarios_business_summary.md

When adding or modifying tests, please update the business summary document
to keep them in sync. The summary provides plain-English explanations of
each test scenario for business stakeholders.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from payment_terms import FormValidationOrchestrator
from payment_terms.form_state import DocumentFormReducer
from payment_terms.models import ErrorCode, Party
from payment_terms.output import PayloadBuilder
from payment_terms.tooltips import FieldTooltipStore


def codes_for(outcome, field_key):
    """Error codes reported for one field, in check order."""
    return [e.code for e in outcome.errors if e.field == field_key]


@pytest.fixture
def reducer():
    return DocumentFormReducer()


@pytest.fixture
def orchestrator():
    return FormValidationOrchestrator()


@pytest.fixture
def million_form(reducer):
    """Contract with ₩1,000,000 of items (total ₩1,100,000 incl. VAT), custom bank split."""
    form = reducer.new_form("contract")
    form = replace(
        form,
        title="Brand identity",
        client=Party(name="Acme", email="pm@acme.example", phone="010-1234-5678", company="Kim"),
        supplier=Party(name="Studio", email="hello@studio.example", phone="010-9876-5432"),
        start_date="2026-11-01",
        end_date="2027-01-31",
    )
    form = reducer.update_item(form, 0, name="Logo", quantity=1, unit_price="400000")
    form = reducer.add_item(form)
    form = reducer.update_item(form, 1, name="Guidelines", quantity=2, unit_price="300000")
    form = reducer.set_condition(form, "custom")
    form = reducer.set_method(form, "bank")
    form = reducer.set_bank_detail(form, "name", "KB")
    form = reducer.set_bank_detail(form, "account_number", "123-456-789")
    form = reducer.set_bank_detail(form, "account_holder", "Studio")
    return form


class TestAmountSplit:
    """Scenario A: amount legs reconcile to the VAT-inclusive total."""

    def test_totals_include_floored_vat(self, reducer, million_form):
        totals = reducer.totals(million_form)

        assert totals.subtotal == Decimal("1000000")
        assert totals.tax_amount == Decimal("100000")
        assert totals.total == Decimal("1100000")

    def test_half_and_half_leaves_zero_balance(self, reducer, orchestrator, million_form):
        form = reducer.edit_leg(million_form, "deposit", "550000")
        form = reducer.edit_leg(form, "milestone", "550000")
        form = reducer.edit_due_date(form, "deposit", "On signing")
        form = reducer.edit_due_date(form, "milestone", "2026-12-15")

        assert form.split.amounts.balance == "0"
        assert orchestrator.split_validator.validate_amount_sum(form.split.amounts, Decimal("1100000"))
        assert orchestrator.validate(form).has_errors is False


class TestPercentSplit:
    """Scenario B: percent legs derive a 2-decimal balance."""

    def test_thirty_forty_gives_thirty(self, reducer, orchestrator, million_form):
        form, switch = reducer.switch_mode(million_form, "percent")
        assert switch.confirmed is True

        form = reducer.edit_leg(form, "deposit", "30")
        form = reducer.edit_leg(form, "milestone", "40")
        for leg, due in (("deposit", "On signing"), ("milestone", "2026-12-15"), ("balance", "On delivery")):
            form = reducer.edit_due_date(form, leg, due)

        assert form.split.percents.balance == "30.00"
        assert orchestrator.validate(form).has_errors is False


class TestUnparsableAndNegativeLegs:
    """Scenario C: text counts as zero; an explicit negative is rejected."""

    def test_text_deposit_counts_as_zero(self, reducer, orchestrator, million_form):
        form = reducer.edit_leg(million_form, "deposit", "abc")
        form = reducer.edit_due_date(form, "balance", "On delivery")

        assert form.split.amounts.balance == "1100000"
        outcome = orchestrator.validate(form)
        assert ErrorCode.INVALID_NUMERIC_VALUE not in codes_for(outcome, "amount_deposit")
        assert outcome.has_errors is False

    def test_negative_deposit_is_rejected(self, reducer, orchestrator, million_form):
        form = reducer.edit_leg(million_form, "deposit", "-5")
        form = reducer.edit_due_date(form, "balance", "On delivery")

        # balance absorbs the negative, so the sum still reconciles
        assert form.split.amounts.balance == "1100005"
        outcome = orchestrator.validate(form)
        assert codes_for(outcome, "amount_deposit") == [ErrorCode.INVALID_NUMERIC_VALUE]
        assert outcome.first_error_field_key == "amount_deposit"


class TestMissingBankDetail:
    """Scenario D: bank transfer without a bank name blocks submission."""

    def test_bank_name_blocks_submission(self, reducer, orchestrator, million_form):
        form = reducer.set_bank_detail(million_form, "name", "")
        form = reducer.edit_leg(form, "deposit", "1100000")
        form = reducer.edit_due_date(form, "deposit", "On signing")

        outcome = orchestrator.validate(form)

        assert outcome.has_errors is True
        assert codes_for(outcome, "bank_name") == [ErrorCode.MISSING_BANK_DETAIL]
        assert outcome.first_error_field_key == "bank_name"


class TestModeSwitchRoundTrip:
    """Switching units back and forth clears the legs each time."""

    def test_confirmed_round_trip_clears(self, reducer, million_form):
        form = reducer.edit_leg(million_form, "deposit", "550000")

        refused, switch = reducer.switch_mode(form, "percent")
        assert switch.requires_confirmation is True
        assert refused.split.amounts.deposit == "550000"

        form, _ = reducer.switch_mode(form, "percent", confirmed=True)
        form = reducer.edit_leg(form, "deposit", "30")
        form, _ = reducer.switch_mode(form, "amount", confirmed=True)

        assert form.split.mode == "amount"
        assert form.split.amounts.has_any_value is False
        assert form.split.percents.has_any_value is False


class TestSubmitFlow:
    """Validate, show tooltips, fix, revalidate, build payload."""

    def test_fix_and_submit(self, reducer, orchestrator, million_form):
        store = FieldTooltipStore()
        form = reducer.edit_leg(million_form, "deposit", "300000")

        outcome = orchestrator.validate(form)
        store.replace(outcome.field_messages)
        assert set(store) == {"due_deposit", "due_balance"}
        assert outcome.first_error_field_key == "due_deposit"

        form = reducer.edit_due_date(form, "deposit", "On signing")
        assert store.clear_if_satisfied("due_deposit", "On signing") is True
        form = reducer.edit_due_date(form, "balance", "2027-01-31")

        outcome = orchestrator.validate(form)
        store.replace(outcome.field_messages)
        assert outcome.has_errors is False
        assert len(store) == 0

        payload = PayloadBuilder().build(form)
        assert payload["payment_input_unit"] == "amount"
        assert payload["amount_deposit"] == "300000"
        assert payload["amount_balance"] == "800000"
        assert payload["due_milestone"] is None
        assert payload["total"] == "1100000"
