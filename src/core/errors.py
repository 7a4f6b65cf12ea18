"""Jerarquía de errores del cliente de impuestos.

Todas las fallas del flujo son terminales: no hay reintentos ni éxito
parcial. Cada excepción lleva datos estructurados (no solo el mensaje) para
que la CLI pueda presentarlas y el log diario pueda registrarlas.

    TaxClientError
    +-- ConfigurationError
    +-- InputFileNotFoundError   (también FileNotFoundError)
    +-- MalformedInputError
    +-- InvalidOperationError
    +-- CommitMismatchError
    +-- TransportError
    +-- ApiError
    +-- StorageError
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Sequence


class TaxClientError(Exception):
    """Base de todos los errores del cliente."""

    code: str = "TAX_CLIENT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(TaxClientError):
    """Faltan variables de entorno requeridas."""

    code = "CONFIGURATION_ERROR"

    def __init__(self, missing_variables: Sequence[str]) -> None:
        self.missing_variables = list(missing_variables)
        super().__init__(
            "Missing required environment variables: " + ", ".join(self.missing_variables)
        )


class InputFileNotFoundError(TaxClientError, FileNotFoundError):
    """El archivo de entrada no existe.

    `similar_files` contiene candidatos del mismo directorio (diagnóstico
    best-effort); `diagnostic_note` explica por qué no se pudo listar.
    """

    code = "INPUT_FILE_NOT_FOUND"

    def __init__(
        self,
        path: Path,
        *,
        directory_listing: Sequence[str] | None = None,
        similar_files: Sequence[str] | None = None,
        diagnostic_note: str | None = None,
    ) -> None:
        self.path = path
        self.directory_listing = list(directory_listing or [])
        self.similar_files = list(similar_files or [])
        self.diagnostic_note = diagnostic_note
        TaxClientError.__init__(self, f"Input file does not exist: {path}")

    def __str__(self) -> str:
        return self.message


class MalformedInputError(TaxClientError):
    """El archivo existe pero no es JSON válido (o no es un objeto)."""

    code = "MALFORMED_INPUT"

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidOperationError(TaxClientError):
    code = "INVALID_OPERATION"

    def __init__(self, operation: object, valid: Sequence[str]) -> None:
        self.operation = operation
        self.valid_operations = list(valid)
        choices = ", ".join(f'"{v}"' for v in self.valid_operations)
        super().__init__(f'Invalid operation: "{operation}". Use {choices}.')


class CommitMismatchError(TaxClientError):
    """El campo `Committed` no coincide con lo que exige la operación."""

    code = "COMMIT_MISMATCH"

    def __init__(self, operation: str, expected: bool, actual: object) -> None:
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'For operation {operation}, "Committed" must be {str(expected).lower()} '
            f"(got {actual!r})."
        )


class TransportErrorKind(str, Enum):
    CONNECTION_REFUSED = "connection_refused"
    DNS_FAILURE = "dns_failure"
    TIMEOUT = "timeout"
    NO_RESPONSE = "no_response"
    SERVER_ERROR = "server_error"
    INVALID_RESPONSE = "invalid_response"


class TransportError(TaxClientError):
    """Falla a nivel de red o respuesta 5xx del servidor."""

    code = "TRANSPORT_ERROR"

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ApiError(TaxClientError):
    """El servicio rechazó la petición (4xx).

    `body` es el texto crudo devuelto por el servidor, sin modificar.
    """

    code = "API_ERROR"

    def __init__(self, status_code: int, body: str, *, url: str, reason: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        self.reason = reason
        detail = body if body else reason
        super().__init__(f"HTTP error {status_code}: {detail}")


class StorageError(TaxClientError):
    """No se pudo crear el directorio de salida o escribir el archivo."""

    code = "STORAGE_ERROR"

    def __init__(self, message: str, *, path: Path) -> None:
        self.path = path
        super().__init__(message)
