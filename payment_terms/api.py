"""
Dictionary-level entry points shared by the Flask app and the Lambda handler.

Each function takes the decoded JSON body and returns a JSON-ready dict.
Structurally invalid input raises ValueError (or KeyError/TypeError), which
the HTTP layers report as 400.
"""

from decimal import Decimal
from typing import Any, Dict

from .calculators import PaymentSplitEngine, TotalsCalculator
from .models import DocumentForm, LineItem, PaymentSplit, format_decimal, to_decimal
from .output import PayloadBuilder
from .processor import FormValidationOrchestrator
from .validators import InputValidator

input_validator = InputValidator()
totals_calculator = TotalsCalculator()
split_engine = PaymentSplitEngine()
orchestrator = FormValidationOrchestrator()
payload_builder = PayloadBuilder()


class FormInvalid(Exception):
    """The document failed validation and cannot be submitted."""

    def __init__(self, outcome: Dict[str, Any]):
        super().__init__("Document has validation errors")
        self.outcome = outcome


def _total_from(data: Dict[str, Any]) -> Decimal:
    if "items" in data:
        items = [LineItem.from_dict(i) for i in data["items"]]
        input_validator.validate_items(items)
        return totals_calculator.calculate(items).total
    if "total" not in data:
        raise ValueError("Either 'total' or 'items' is required")
    total = to_decimal(data["total"], "total")
    if not total.is_finite() or total < 0:
        raise ValueError(f"total must be a non-negative number, got: {data['total']}")
    return total


def _document_from(data: Dict[str, Any]) -> DocumentForm:
    document = data.get("document")
    if not isinstance(document, dict):
        raise ValueError("'document' object is required")
    form = DocumentForm.from_dict(document)
    input_validator.validate(form)
    return form


def compute_totals(data: Dict[str, Any]) -> Dict[str, Any]:
    items = [LineItem.from_dict(i) for i in data.get("items", [])]
    input_validator.validate_items(items)
    return totals_calculator.calculate(items).to_dict()


def edit_leg(data: Dict[str, Any]) -> Dict[str, Any]:
    split = PaymentSplit.from_dict(data.get("split"))
    input_validator.validate_split(split)
    total = _total_from(data)
    value = data.get("value")
    raw_value = "" if value is None else str(value)
    updated = split_engine.apply_leg_edit(split, data["leg"], raw_value, total)
    return {"split": updated.to_dict(), "total": format_decimal(total)}


def switch_mode(data: Dict[str, Any]) -> Dict[str, Any]:
    split = PaymentSplit.from_dict(data.get("split"))
    input_validator.validate_split(split)
    result = split_engine.switch_mode(split, data["mode"], confirmed=bool(data.get("confirmed", False)))
    return {
        "confirmed": result.confirmed,
        "requires_confirmation": result.requires_confirmation,
        "split": result.split.to_dict(),
    }


def validate_document(data: Dict[str, Any]) -> Dict[str, Any]:
    return orchestrator.validate(_document_from(data)).to_dict()


def build_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate, then build the submission payload. Raises FormInvalid on errors."""
    form = _document_from(data)
    outcome = orchestrator.validate(form)
    if outcome.has_errors:
        raise FormInvalid(outcome.to_dict())
    return payload_builder.build(form)
