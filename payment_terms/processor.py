"""
Form Validation Orchestrator

Runs the complete required-field and payment split validation over a
quote/contract form before it may be sent or saved.
"""

import logging
import re
from typing import Any, Dict

from .calculators import DueDateRequirementResolver, TotalsCalculator
from .models import (
    LEG_NAMES,
    DocumentForm,
    ErrorCode,
    FieldError,
    Party,
    ValidationOutcome,
    ValidationStatus,
    format_decimal,
)
from .validators import InputValidator, SplitValidator

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_MESSAGE = "This field is required"
EMAIL_MESSAGE = "Enter a valid email address"
LEG_LABELS = {"deposit": "Deposit", "milestone": "Milestone payment", "balance": "Balance"}


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


class FormValidationOrchestrator:
    """
    Validates a whole document form.

    Checks run in a fixed priority order:
    1. Document identity (title, client, supplier/validity)
    2. Project dates
    3. Payment condition
    4. Payment method and bank details
    5. Split sums, leg numbers, due dates
    6. Line items

    Every failing field gets a message; the first failure is the focus
    target. Nothing here raises for a form violation.
    """

    def __init__(self):
        self.totals_calculator = TotalsCalculator()
        self.split_validator = SplitValidator()
        self.due_date_resolver = DueDateRequirementResolver()
        self.input_validator = InputValidator()

    def validate(self, form: DocumentForm) -> ValidationOutcome:
        """
        Run a full validation pass.

        Args:
            form: The document form snapshot to check

        Returns:
            ValidationOutcome with every error, the field message map and
            the first field to focus
        """
        outcome = ValidationOutcome(status=ValidationStatus.VALIDATING)
        errors = outcome.errors

        self._check_identity(form, errors)
        self._check_dates(form, errors)
        self._check_condition(form, errors)
        self._check_method(form, errors)
        self._check_split(form, errors)
        self._check_items(form, errors)

        outcome.status = ValidationStatus.INVALID if errors else ValidationStatus.VALID

        logger.debug(
            "Validated %s form: %s (%d errors, focus=%s)",
            form.kind, outcome.status.value, len(errors), outcome.first_error_field_key,
        )
        return outcome

    def validate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a form from raw dictionary input.

        Convenience method for API usage. Raises ValueError for structurally
        invalid input.
        """
        form = DocumentForm.from_dict(data)
        self.input_validator.validate(form)
        return self.validate(form).to_dict()

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _check_identity(self, form: DocumentForm, errors: list[FieldError]) -> None:
        self._require(errors, "title", form.title)
        self._check_party(errors, "client", form.client)

        if form.kind == "contract":
            self._check_supplier(errors, form.supplier)
        elif form.kind == "quote":
            self._require(errors, "valid_until", form.valid_until)

    def _check_party(self, errors: list[FieldError], prefix: str, party: Party) -> None:
        self._require(errors, f"{prefix}_name", party.name)
        self._check_email(errors, f"{prefix}_email", party.email)
        self._require(errors, f"{prefix}_company", party.company)
        self._require(errors, f"{prefix}_phone", party.phone)

    def _check_supplier(self, errors: list[FieldError], supplier: Party) -> None:
        self._require(errors, "supplier_name", supplier.name)
        self._check_email(errors, "supplier_email", supplier.email)
        self._require(errors, "supplier_phone", supplier.phone)

    def _check_email(self, errors: list[FieldError], key: str, email: str) -> None:
        if not email.strip():
            errors.append(FieldError(key, ErrorCode.MISSING_REQUIRED_FIELD, REQUIRED_MESSAGE))
        elif not is_valid_email(email):
            errors.append(FieldError(key, ErrorCode.INVALID_EMAIL_FORMAT, EMAIL_MESSAGE))

    def _check_dates(self, form: DocumentForm, errors: list[FieldError]) -> None:
        self._require(errors, "start_date", form.start_date)
        self._require(errors, "end_date", form.end_date)

        # Dates come from ISO (YYYY-MM-DD) inputs, so string order is date order
        start, end = form.start_date.strip(), form.end_date.strip()
        if start and end and start > end:
            errors.append(FieldError(
                "start_date",
                ErrorCode.INVALID_DATE_ORDERING,
                "Start date must not be after the end date",
            ))

    def _check_condition(self, form: DocumentForm, errors: list[FieldError]) -> None:
        if not form.split.condition:
            errors.append(FieldError(
                "payment_condition", ErrorCode.MISSING_REQUIRED_FIELD, "Select a payment condition",
            ))

    def _check_method(self, form: DocumentForm, errors: list[FieldError]) -> None:
        split = form.split
        if not split.is_custom:
            return

        if not split.method:
            errors.append(FieldError(
                "payment_method", ErrorCode.MISSING_REQUIRED_FIELD, "Select a payment method",
            ))
            return

        if split.method != "bank":
            return

        bank_fields = (
            ("bank_name", split.bank.name, "Bank name is required"),
            ("bank_account_number", split.bank.account_number, "Account number is required"),
            ("bank_account_holder", split.bank.account_holder, "Account holder is required"),
        )
        for key, value, message in bank_fields:
            if not value.strip():
                errors.append(FieldError(key, ErrorCode.MISSING_BANK_DETAIL, message))

    def _check_split(self, form: DocumentForm, errors: list[FieldError]) -> None:
        split = form.split
        if not split.is_custom:
            return

        legs = split.active_legs
        prefix = split.mode  # field keys are amount_* or percent_*

        # 1. Sum against the target
        if split.mode == "amount":
            total = self.totals_calculator.calculate(form.items).total
            if not self.split_validator.validate_amount_sum(legs, total):
                errors.append(FieldError(
                    "amount_balance",
                    ErrorCode.SPLIT_SUM_MISMATCH,
                    f"Deposit + milestone + balance must equal the total ({format_decimal(total)})",
                ))
        elif not self.split_validator.validate_percent_sum(legs):
            errors.append(FieldError(
                "percent_balance",
                ErrorCode.SPLIT_SUM_MISMATCH,
                "Deposit + milestone + balance must equal 100%",
            ))

        # 2. Each leg must be a usable number
        for leg in LEG_NAMES:
            if not self.split_validator.validate_leg_numeric(legs.get(leg)):
                errors.append(FieldError(
                    f"{prefix}_{leg}",
                    ErrorCode.INVALID_NUMERIC_VALUE,
                    "Enter a valid number (0 or more)",
                ))

        # 3. Legs carrying money need a due date
        required = self.due_date_resolver.required_due_dates(legs)
        for leg in LEG_NAMES:
            if required[leg] and not split.due_dates.get(leg).strip():
                errors.append(FieldError(
                    f"due_{leg}",
                    ErrorCode.MISSING_DUE_DATE,
                    f"{LEG_LABELS[leg]} due date is required",
                ))

    def _check_items(self, form: DocumentForm, errors: list[FieldError]) -> None:
        has_valid_item = any(item.name.strip() and item.amount > 0 for item in form.items)
        if not has_valid_item:
            errors.append(FieldError(
                "items.0.name",
                ErrorCode.NO_VALID_LINE_ITEM,
                "Add at least one item with a name and an amount",
            ))

    @staticmethod
    def _require(errors: list[FieldError], key: str, value: str) -> None:
        if not value.strip():
            errors.append(FieldError(key, ErrorCode.MISSING_REQUIRED_FIELD, REQUIRED_MESSAGE))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def validate_form_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a document form from a Python dict and return a Python dict."""
    orchestrator = FormValidationOrchestrator()
    return orchestrator.validate_from_dict(input_data)


def validate_form_from_json(json_input: str) -> str:
    """
    Validate a document form from a JSON string and return a JSON string.
    """
    import json

    try:
        input_data = json.loads(json_input)
        result = validate_form_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)
