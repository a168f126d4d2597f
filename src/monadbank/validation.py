"""Input validation for form submissions.

Pure functions: no session or network access. Every check runs before the
workflow looks at the wallet, so rejected input never costs a provider call.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from monadbank.errors import ValidationError
from monadbank.intents import (
    DepositIntent,
    Intent,
    IntentKind,
    RegisterIntent,
    WithdrawIntent,
)

MIN_AGE = 1
MAX_AGE = 150
MAX_NAME_LENGTH = 32

# Smallest unit is 1e-18 of the native currency
MAX_AMOUNT_DECIMALS = 18

# Fixed form field identifiers
FIELD_NAME = "name"
FIELD_AGE = "age"
FIELD_MARRIED = "married"
FIELD_DEPOSIT_AMOUNT = "amount"
FIELD_WITHDRAW_AMOUNT = "withdrawAmount"


def _parse_age(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValidationError(FIELD_AGE, "Age must be between 1 and 150")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError(FIELD_AGE, "Age must be between 1 and 150")


def _parse_married(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    value = "" if raw is None else str(raw).strip().lower()
    if value not in ("true", "false"):
        raise ValidationError(FIELD_MARRIED, "Select whether you are married")
    return value == "true"


def validate_register(name: Any, age: Any, married: Any) -> RegisterIntent:
    """Validate registration input.

    Args:
        name: Non-blank display name, at most 32 characters
        age: Integer (or base-10 string) between 1 and 150
        married: Boolean or the selector value "true"/"false"

    Returns:
        RegisterIntent

    Raises:
        ValidationError: If a constraint is violated
    """
    parsed_age = _parse_age(age)
    if parsed_age < MIN_AGE or parsed_age > MAX_AGE:
        raise ValidationError(FIELD_AGE, "Age must be between 1 and 150")

    name = "" if name is None else str(name)
    if not name.strip():
        raise ValidationError(FIELD_NAME, "Name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(FIELD_NAME, "Name must be 32 characters or less")

    return RegisterIntent(name=name, age=parsed_age, married=_parse_married(married))


def parse_amount(raw: Any, field: str, message: str) -> Decimal:
    """Parse a positive native-currency amount.

    Rejects non-numeric input, NaN/Infinity, zero, negatives and amounts
    finer than one wei.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError(field, message)

    # Decimal() accepts digit-group underscores, the form does not
    if "_" in str(raw):
        raise ValidationError(field, message)

    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(field, message)

    if not amount.is_finite() or amount <= 0:
        raise ValidationError(field, message)

    exponent = amount.normalize().as_tuple().exponent
    if isinstance(exponent, int) and -exponent > MAX_AMOUNT_DECIMALS:
        raise ValidationError(field, message)

    return amount


def validate_deposit(amount: Any) -> DepositIntent:
    """Validate a deposit amount."""
    return DepositIntent(
        amount=parse_amount(amount, FIELD_DEPOSIT_AMOUNT, "Enter a valid deposit amount")
    )


def validate_withdraw(amount: Any) -> WithdrawIntent:
    """Validate a withdrawal amount."""
    return WithdrawIntent(
        amount=parse_amount(amount, FIELD_WITHDRAW_AMOUNT, "Enter a valid withdrawal amount")
    )


def parse_form(kind: IntentKind, fields: Mapping[str, Any]) -> Intent:
    """Build an intent from raw form fields keyed by field identifier."""
    if kind == IntentKind.REGISTER:
        return validate_register(
            fields.get(FIELD_NAME),
            fields.get(FIELD_AGE),
            fields.get(FIELD_MARRIED),
        )
    if kind == IntentKind.DEPOSIT:
        return validate_deposit(fields.get(FIELD_DEPOSIT_AMOUNT))
    if kind == IntentKind.WITHDRAW:
        return validate_withdraw(fields.get(FIELD_WITHDRAW_AMOUNT))
    raise ValueError(f"Unknown intent kind: {kind}")
