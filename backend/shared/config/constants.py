"""
Centralized constants for the backend application.
Avoid magic numbers and repeated strings.

Usage:
    from shared.config.constants import Limits, Precision, ErrorMessages

    if len(name) > Limits.MAX_NAME_LENGTH:
        ...
"""

from decimal import Decimal
from typing import Final


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 255
    MAX_SUPPLIER_LENGTH: Final[int] = 255
    MAX_DESCRIPTION_LENGTH: Final[int] = 10_000

    # Price limits (NUMERIC(10,2) column)
    MAX_PRICE: Final[Decimal] = Decimal("99999999.99")

    # Quantity limits (NUMERIC(12,4) column)
    MAX_QUANTITY: Final[Decimal] = Decimal("99999999.9999")

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200
    DEFAULT_OFFSET: Final[int] = 0


class Precision:
    """Decimal precision of persisted amounts."""

    # Prices are monetary: two decimals
    PRICE: Final[Decimal] = Decimal("0.01")
    # Recipe quantities: four decimals
    QUANTITY: Final[Decimal] = Decimal("0.0001")
    # Presentation of line costs and totals
    MONEY: Final[Decimal] = Decimal("0.01")


# Display name used when an ingredient name cannot be resolved
UNKNOWN_INGREDIENT_NAME: Final[str] = "Unknown"


# =============================================================================
# Error Messages
# =============================================================================


class ErrorMessages:
    """Standardized error messages in Spanish."""

    # Not found errors
    ENTITY_NOT_FOUND: Final[str] = "{entity} no encontrado"
    INGREDIENT_NOT_FOUND: Final[str] = "Ingrediente no encontrado"
    RECIPE_NOT_FOUND: Final[str] = "Receta no encontrada"
    PRICE_NOT_FOUND: Final[str] = "No hay precio registrado para el ingrediente {ingredient_id}"

    # Validation errors
    REQUIRED_FIELD: Final[str] = "El campo '{field}' es requerido"
    FIELD_TOO_LONG: Final[str] = "El campo '{field}' no puede superar {max_length} caracteres"
    INVALID_QUANTITY: Final[str] = "La cantidad debe ser mayor a cero"
    INVALID_PRICE: Final[str] = "El precio debe ser mayor a cero"
    INVALID_NUMBER: Final[str] = "El campo '{field}' no es un número válido"
    RECIPE_WITHOUT_LINES: Final[str] = "La receta debe tener al menos un ingrediente"
    NOTHING_TO_UPDATE: Final[str] = "Debe indicar al menos un campo (nombre o descripción) para actualizar"

