"""Reglas de negocio previas al envío.

Orden de validación: operación → forma del payload → campo `Committed`.
Ninguna regla realiza I/O; una violación termina el flujo antes de tocar
la red.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import COMMITTED_FIELD, TaxRequest
from core.domain.operation import Operation
from core.errors import CommitMismatchError, InvalidOperationError, MalformedInputError


def parse_operation(value: object) -> Operation:
    """Convierte el literal de la CLI en `Operation`."""

    if isinstance(value, Operation):
        return value
    if isinstance(value, str):
        try:
            return Operation(value)
        except ValueError:
            pass
    raise InvalidOperationError(value, Operation.values())


def validate_operation(value: object) -> Operation:
    return parse_operation(value)


def validate_payload_shape(payload: object) -> TaxRequest:
    if not isinstance(payload, dict):
        raise MalformedInputError(
            f"Request body must be a JSON object, got {type(payload).__name__}"
        )
    return payload


def validate_committed(operation: Operation, payload: TaxRequest) -> None:
    """Exige `Committed` estrictamente igual a lo que pide la operación.

    `0`, `"false"`, `null` o la ausencia del campo no equivalen a `False`.
    """

    expected = operation.required_commit()
    if expected is None:
        return

    actual = payload.get(COMMITTED_FIELD)
    if not isinstance(actual, bool) or actual is not expected:
        raise CommitMismatchError(operation.value, expected, actual)


def escape_apostrophes(value: Any) -> Any:
    """Copia recursiva con cada `'` de los valores string duplicado (`''`).

    Las claves de los objetos no se modifican.
    """

    if isinstance(value, str):
        return value.replace("'", "''")
    if isinstance(value, dict):
        return {key: escape_apostrophes(item) for key, item in value.items()}
    if isinstance(value, list):
        return [escape_apostrophes(item) for item in value]
    return value


def validate(operation: object, payload: object, *, sanitize: bool = False) -> TaxRequest:
    """Aplica todas las reglas y devuelve el payload listo para enviar.

    Con `sanitize=False` devuelve el mismo objeto recibido; con
    `sanitize=True` devuelve una copia con apóstrofes escapados.
    """

    op = validate_operation(operation)
    body = validate_payload_shape(payload)
    validate_committed(op, body)
    if sanitize:
        return escape_apostrophes(body)
    return body
