"""Contrato del log de diagnóstico.

Protocol estructural: el flujo y los adaptadores reciben un `ErrorLog`
inyectado y nunca construyen uno propio.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ErrorLog(Protocol):
    """Destino de entradas de severidad error.

    Reglas de diseño:
    - `error` nunca lanza; una falla al escribir se descarta.
    - Una entrada es una sola línea de texto.
    """

    def error(self, message: str) -> None:
        """Registra `message` como error."""

        ...
