"""
Shared validators for input sanitization.

All validators raise InvalidArgumentError before any I/O happens and return
the normalized value.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from shared.config.constants import ErrorMessages
from shared.utils.exceptions import InvalidArgumentError


def require_text(value: Optional[str], field: str, max_length: int) -> str:
    """
    Validate a required text field.

    Args:
        value: The raw value (can be None)
        field: Field name used in the error message
        max_length: Maximum allowed length after trimming

    Returns:
        The trimmed value

    Raises:
        InvalidArgumentError: If the value is missing, blank or too long
    """
    if value is None or not value.strip():
        raise InvalidArgumentError(ErrorMessages.REQUIRED_FIELD.format(field=field), field=field)

    value = value.strip()
    if len(value) > max_length:
        raise InvalidArgumentError(
            ErrorMessages.FIELD_TOO_LONG.format(field=field, max_length=max_length),
            field=field,
            length=len(value),
        )
    return value


def optional_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    """Validate an optional text field. Blank values become None."""
    if value is None or not value.strip():
        return None
    return require_text(value, field, max_length)


def to_decimal(value: Any, field: str) -> Decimal:
    """
    Convert a number to Decimal without binary float artifacts.

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1").
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(ErrorMessages.INVALID_NUMBER.format(field=field), field=field)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidArgumentError(
                ErrorMessages.INVALID_NUMBER.format(field=field), field=field, value=str(value)
            )
    if not result.is_finite():
        raise InvalidArgumentError(ErrorMessages.INVALID_NUMBER.format(field=field), field=field)
    return result


def require_positive_decimal(
    value: Any,
    field: str,
    places: Decimal,
    message: str,
    maximum: Decimal | None = None,
) -> Decimal:
    """
    Validate a strictly positive decimal and quantize it to the given places.

    Rounding happens half-up; a value that rounds to zero is rejected.

    Raises:
        InvalidArgumentError: If the value is not a number, not positive or too large
    """
    if value is None:
        raise InvalidArgumentError(ErrorMessages.REQUIRED_FIELD.format(field=field), field=field)

    number = to_decimal(value, field)
    if number <= 0:
        raise InvalidArgumentError(message, field=field, value=str(number))

    try:
        quantized = number.quantize(places, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidArgumentError(message, field=field, value=str(number))
    if quantized <= 0:
        raise InvalidArgumentError(message, field=field, value=str(number))
    if maximum is not None and quantized > maximum:
        raise InvalidArgumentError(message, field=field, value=str(number), maximum=str(maximum))
    return quantized


def require_identifier(value: Optional[str], field: str) -> str:
    """Validate a non-empty opaque identifier."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError(ErrorMessages.REQUIRED_FIELD.format(field=field), field=field)
    return str(value).strip()
