"""Operaciones soportadas por la API de impuestos.

Cada valor del enum es el literal aceptado en la CLI. Las tablas de este
módulo cubren todos los miembros de `Operation`; agregar una operación sin
completarlas falla al importar.
"""

from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    """Operación solicitada en el primer argumento de la CLI."""

    CALCULATE_ONLY = "get_tax"
    CALCULATE_AND_COMMIT = "post_tax"
    CANCEL_TRANSACTION = "cancel_tax"

    @classmethod
    def values(cls) -> list[str]:
        return [op.value for op in cls]

    def required_commit(self) -> bool | None:
        """Valor exigido para `Committed`; `None` significa sin restricción."""

        return _REQUIRED_COMMIT[self]

    def is_calculation(self) -> bool:
        return self in (Operation.CALCULATE_ONLY, Operation.CALCULATE_AND_COMMIT)

    def label(self) -> str:
        """Etiqueta legible para la consola."""

        return _LABELS[self]


_REQUIRED_COMMIT: dict[Operation, bool | None] = {
    Operation.CALCULATE_ONLY: False,
    Operation.CALCULATE_AND_COMMIT: True,
    Operation.CANCEL_TRANSACTION: None,
}

_LABELS: dict[Operation, str] = {
    Operation.CALCULATE_ONLY: "Calculate tax (Committed: false)",
    Operation.CALCULATE_AND_COMMIT: "Calculate and commit tax (Committed: true)",
    Operation.CANCEL_TRANSACTION: "Cancel a tax transaction",
}

for _table in (_REQUIRED_COMMIT, _LABELS):
    if set(_table) != set(Operation):
        raise RuntimeError(f"Operation table out of sync: {sorted(_table)}")
