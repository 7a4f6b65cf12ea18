"""Resolución de endpoints de la API de impuestos.

Función pura: la misma `(operation, test_mode)` produce siempre la misma URL.
El modo de prueba solo afecta a las operaciones de cálculo.
"""

from __future__ import annotations

from core.domain.operation import Operation
from core.errors import InvalidOperationError

CALCULATE_ENDPOINT = "MGGetTaxForCart"
CALCULATE_TEST_ENDPOINT = "STCCalcV3_TEST"
CANCEL_ENDPOINT = "CancelTransaction"


def resolve_endpoint(
    operation: Operation,
    *,
    base_url: str,
    api_code: str,
    test_mode: bool = False,
) -> str:
    """Construye la URL completa para `operation`.

    `base_url` se concatena tal cual; se espera que termine en `/`.
    """

    if not isinstance(operation, Operation):
        raise InvalidOperationError(operation, Operation.values())

    if operation.is_calculation():
        endpoint = CALCULATE_TEST_ENDPOINT if test_mode else CALCULATE_ENDPOINT
        return f"{base_url}{endpoint}?code={api_code}"

    if operation is Operation.CANCEL_TRANSACTION:
        return f"{base_url}{CANCEL_ENDPOINT}"

    raise InvalidOperationError(operation, Operation.values())
