"""
Domain Models for the Payment Terms Engine

These dataclasses are immutable snapshots of the authoring form state.
All monetary and percentage values use Decimal for precision; leg inputs
are kept as the raw strings the user typed and parsed on demand.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum

# =============================================================================
# CONSTANTS
# =============================================================================

LEG_NAMES = ("deposit", "milestone", "balance")

CONDITIONS = ("immediate", "custom")
MODES = ("amount", "percent")
METHODS = ("bank", "card")
DOCUMENT_KINDS = ("quote", "contract")

# Largest accepted magnitude is below 10 ** (MAX_EXPONENT + 1)
MAX_EXPONENT = 15


def is_out_of_range(value: Decimal) -> bool:
    return value.is_finite() and value.adjusted() > MAX_EXPONENT


def parse_leg(raw: str | None) -> Decimal | None:
    """Parse a leg input string.

    Returns None for blank input and for text with no numeric reading
    (e.g. "abc"). NaN and infinities are returned as-is so validators can
    reject them; numbers too large to be a real amount ("1e999999999")
    read as an infinity of the same sign.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if is_out_of_range(value):
        return Decimal("Infinity").copy_sign(value)
    return value


def leg_value(raw: str | None) -> Decimal:
    """Numeric value of a leg for computation: anything unusable counts as 0."""
    value = parse_leg(raw)
    if value is None or not value.is_finite():
        return Decimal("0")
    return value


def format_decimal(value: Decimal) -> str:
    """Render a Decimal as a plain string without exponent ("550000", "1234.5")."""
    integral = value.to_integral_value()
    if value == integral:
        return format(integral, "f")
    return format(value.normalize(), "f")


def to_decimal(value, field_name: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{field_name} must be a number, got: {value!r}")
    if is_out_of_range(result):
        raise ValueError(f"{field_name} is out of range, got: {value!r}")
    return result


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class LineItem:
    """A single quote/contract line. `amount` is always quantity × unit_price."""

    id: str = ""
    name: str = ""
    description: str = ""
    quantity: int = 1
    unit_price: Decimal = Decimal("0")
    unit: str = ""

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        quantity = data.get("quantity", 1)
        if isinstance(quantity, bool) or not isinstance(quantity, (int, str)):
            raise ValueError(f"quantity must be an integer, got: {quantity!r}")
        try:
            quantity = int(quantity)
        except ValueError:
            raise ValueError(f"quantity must be an integer, got: {quantity!r}")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", "") or "",
            description=data.get("description", "") or "",
            quantity=quantity,
            # `amount` from the client is ignored; it is derived
            unit_price=to_decimal(data.get("unit_price", 0), "unit_price"),
            unit=data.get("unit", "") or "",
        )


@dataclass(frozen=True)
class Legs:
    """Raw input strings for the three payment legs."""

    deposit: str = ""
    milestone: str = ""
    balance: str = ""

    def get(self, leg: str) -> str:
        return getattr(self, leg)

    def values(self) -> dict[str, Decimal]:
        return {leg: leg_value(self.get(leg)) for leg in LEG_NAMES}

    @property
    def total(self) -> Decimal:
        return sum(self.values().values(), Decimal("0"))

    @property
    def has_any_value(self) -> bool:
        return any(self.get(leg) for leg in LEG_NAMES)

    @classmethod
    def from_dict(cls, data: dict | None) -> "Legs":
        data = data or {}
        return cls(**{leg: _raw(data.get(leg)) for leg in LEG_NAMES})


@dataclass(frozen=True)
class DueDates:
    """Free-text due dates, one per leg."""

    deposit: str = ""
    milestone: str = ""
    balance: str = ""

    def get(self, leg: str) -> str:
        return getattr(self, leg)

    @classmethod
    def from_dict(cls, data: dict | None) -> "DueDates":
        data = data or {}
        return cls(**{leg: data.get(leg) or "" for leg in LEG_NAMES})


@dataclass(frozen=True)
class BankDetails:
    name: str = ""
    account_number: str = ""
    account_holder: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "BankDetails":
        data = data or {}
        return cls(
            name=data.get("name") or "",
            account_number=data.get("account_number") or "",
            account_holder=data.get("account_holder") or "",
        )


@dataclass(frozen=True)
class PaymentSplit:
    """Payment terms of a document: condition, unit mode, legs and bank info."""

    condition: str = "immediate"  # 'immediate', 'custom' or '' (not selected)
    mode: str = "amount"  # 'amount' or 'percent'
    amounts: Legs = field(default_factory=Legs)
    percents: Legs = field(default_factory=Legs)
    due_dates: DueDates = field(default_factory=DueDates)
    method: str = ""  # 'bank', 'card' or ''
    bank: BankDetails = field(default_factory=BankDetails)

    @property
    def is_custom(self) -> bool:
        return self.condition == "custom"

    @property
    def active_legs(self) -> Legs:
        return self.amounts if self.mode == "amount" else self.percents

    @classmethod
    def from_dict(cls, data: dict | None) -> "PaymentSplit":
        data = data or {}
        return cls(
            condition=data.get("condition", "immediate") or "",
            mode=data.get("mode", "amount") or "amount",
            amounts=Legs.from_dict(data.get("amounts")),
            percents=Legs.from_dict(data.get("percents")),
            due_dates=DueDates.from_dict(data.get("due_dates")),
            method=data.get("method") or "",
            bank=BankDetails.from_dict(data.get("bank")),
        )

    def to_dict(self) -> dict:
        return {
            "condition": self.condition,
            "mode": self.mode,
            "amounts": _legs_dict(self.amounts),
            "percents": _legs_dict(self.percents),
            "due_dates": _legs_dict(self.due_dates),
            "method": self.method,
            "bank": {
                "name": self.bank.name,
                "account_number": self.bank.account_number,
                "account_holder": self.bank.account_holder,
            },
        }


@dataclass(frozen=True)
class Party:
    """Client or supplier identity block."""

    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Party":
        data = data or {}
        return cls(
            name=data.get("name") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            company=data.get("company") or "",
        )


@dataclass(frozen=True)
class DocumentForm:
    """The whole authoring form of a quote or contract."""

    kind: str = "contract"  # 'quote' or 'contract'
    title: str = ""
    client: Party = field(default_factory=Party)
    supplier: Party = field(default_factory=Party)
    start_date: str = ""
    end_date: str = ""
    valid_until: str = ""  # quotes only
    items: tuple[LineItem, ...] = (LineItem(),)
    split: PaymentSplit = field(default_factory=PaymentSplit)

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentForm":
        items = tuple(LineItem.from_dict(i) for i in data.get("items", []))
        return cls(
            kind=data.get("kind", "contract"),
            title=data.get("title") or "",
            client=Party.from_dict(data.get("client")),
            supplier=Party.from_dict(data.get("supplier")),
            start_date=data.get("start_date") or "",
            end_date=data.get("end_date") or "",
            valid_until=data.get("valid_until") or "",
            items=items or (LineItem(),),
            split=PaymentSplit.from_dict(data.get("payment")),
        )


def _raw(value) -> str:
    if value is None:
        return ""
    return str(value)


def _legs_dict(legs) -> dict:
    return {leg: legs.get(leg) for leg in LEG_NAMES}


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class Totals:
    """Derived totals of a line item collection."""

    subtotal: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "subtotal": format_decimal(self.subtotal),
            "tax_amount": format_decimal(self.tax_amount),
            "total": format_decimal(self.total),
        }


@dataclass(frozen=True)
class ModeSwitch:
    """Result of a unit mode switch request.

    `confirmed` is True only when the switch was applied. When it was refused
    because data would be lost, `requires_confirmation` is True and `split`
    is the unchanged input.
    """

    confirmed: bool
    requires_confirmation: bool
    split: PaymentSplit


class ErrorCode(str, Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_EMAIL_FORMAT = "invalid_email_format"
    INVALID_DATE_ORDERING = "invalid_date_ordering"
    INVALID_NUMERIC_VALUE = "invalid_numeric_value"
    SPLIT_SUM_MISMATCH = "split_sum_mismatch"
    MISSING_DUE_DATE = "missing_due_date"
    MISSING_BANK_DETAIL = "missing_bank_detail"
    NO_VALID_LINE_ITEM = "no_valid_line_item"


class ValidationStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class FieldError:
    field: str
    code: ErrorCode
    message: str


@dataclass
class ValidationOutcome:
    """Result of one full validation pass over a document form.

    A fresh outcome is IDLE; the orchestrator holds it as VALIDATING while
    the checks run and settles it on VALID or INVALID.
    """

    status: ValidationStatus = ValidationStatus.IDLE
    errors: list[FieldError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def field_messages(self) -> dict[str, str]:
        # A later rule hitting the same field replaces the earlier message
        return {e.field: e.message for e in self.errors}

    @property
    def first_error_field_key(self) -> str | None:
        return self.errors[0].field if self.errors else None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "has_errors": self.has_errors,
            "field_messages": self.field_messages,
            "first_error_field_key": self.first_error_field_key,
            "errors": [
                {"field": e.field, "code": e.code.value, "message": e.message}
                for e in self.errors
            ],
        }
