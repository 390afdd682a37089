"""
Centralized domain exceptions for consistent error handling.

Every exception carries the HTTP status code the API answers with and a
human readable detail, and logs itself with structured context when raised.

Usage:
    from shared.utils.exceptions import NotFoundError, InvalidArgumentError

    raise NotFoundError("Ingrediente", ingredient_id)
    raise InvalidArgumentError("El precio debe ser mayor a cero", field="price")
    raise VersionConflictError("Receta", recipe_id, expected=3, actual=4)
"""

from typing import Any

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    status_code: int = 500

    def __init__(
        self,
        detail: str,
        log_level: str = "warning",
        status_code: int | None = None,
        **log_context: Any,
    ):
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        self.context = log_context

        # Log the error with context
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=self.status_code, error=type(self).__name__, **log_context)

        super().__init__(detail)


# =============================================================================
# 400 Invalid Argument Errors
# =============================================================================


class InvalidArgumentError(AppException):
    """
    Malformed input caught before any I/O (400).

    Usage:
        raise InvalidArgumentError("El precio debe ser mayor a cero", field="price", value=-1)
    """

    status_code = 400

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, log_level="warning", **log_context)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found or soft-deleted (404).

    Usage:
        raise NotFoundError("Receta", recipe_id)
    """

    status_code = 404

    def __init__(
        self,
        entity: str,
        entity_id: str | None = None,
        detail: str | None = None,
        **log_context: Any,
    ):
        if detail is None:
            if entity_id is not None:
                detail = f"{entity} con ID {entity_id} no encontrado"
            else:
                detail = f"{entity} no encontrado"

        super().__init__(
            detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class PriceNotFoundError(NotFoundError):
    """Ingredient has no price history where one is required."""

    def __init__(self, ingredient_id: str, **log_context: Any):
        self.ingredient_id = ingredient_id
        super().__init__(
            "Precio",
            detail=ErrorMessages.PRICE_NOT_FOUND.format(ingredient_id=ingredient_id),
            ingredient_id=ingredient_id,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("El ingrediente ya existe")
    """

    status_code = 409

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, log_level="warning", **log_context)


class VersionConflictError(ConflictError):
    """
    Optimistic concurrency check failed on save.

    Callers reload the aggregate and retry; nothing here retries on its own.
    """

    def __init__(
        self,
        entity: str,
        entity_id: str,
        expected: int | None = None,
        actual: int | None = None,
        **log_context: Any,
    ):
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual
        detail = f"{entity} con ID {entity_id} fue modificado por otra operación (versión {expected})"
        super().__init__(
            detail,
            entity=entity,
            entity_id=entity_id,
            expected_version=expected,
            actual_version=actual,
            **log_context,
        )


class DuplicateEntityError(ConflictError):
    """Entity already exists."""

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"{entity} con identificador '{identifier}' ya existe"
        else:
            detail = f"{entity} ya existe"

        super().__init__(detail, entity=entity, identifier=identifier, **log_context)


# =============================================================================
# 503 Dependency Errors
# =============================================================================


class DependencyFailureError(AppException):
    """
    A store or cache is unreachable or failed (503).

    Raised by the adapters with the driver error chained; propagated unchanged.
    """

    status_code = 503

    def __init__(self, service: str, reason: str | None = None, **log_context: Any):
        self.service = service
        detail = f"Servicio {service} temporalmente no disponible"
        super().__init__(
            detail,
            log_level="error",
            service=service,
            reason=reason,
            **log_context,
        )
