"""Orquestación del envío de impuestos.

Responsabilidad:
- Ejecutar en orden: operación -> archivo de entrada -> validación ->
  endpoint -> llamada a la API -> persistencia de la respuesta.
- La primera falla corta el resto de las etapas.

Notas:
- Los efectos visibles para el usuario (impresión, progreso) viven en la
  CLI y se conectan mediante hooks opcionales.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from adapters.input_loader import load_tax_request
from adapters.json_exporter import export_response_json
from adapters.tax_api_client import TaxApiClient
from core.config import AppSettings
from core.domain.models import LoadedInput, SubmissionResult, TaxRequest
from core.domain.operation import Operation
from core.errors import TaxClientError
from core.interfaces.error_log import ErrorLog
from core.services.tax_validator import parse_operation, validate


@dataclass
class SubmissionRequest:
    """Parámetros de una invocación."""

    operation: str
    input_path: Path
    sanitize: bool | None = None


@dataclass
class PipelineHooks:
    """Callbacks opcionales para la capa de UI."""

    loaded: Callable[[LoadedInput], None] | None = None
    sending: Callable[[Operation, str, TaxRequest], None] | None = None
    saved: Callable[[Path], None] | None = None


@dataclass
class _Stage:
    name: str
    context: dict[str, str] = field(default_factory=dict)


def _log_failure(error_log: ErrorLog, stage: _Stage, exc: TaxClientError) -> None:
    details = " - ".join(f"{key}: {value}" for key, value in stage.context.items())
    message = f"[{stage.name}] {exc.message}"
    if details:
        message = f"{message} - {details}"
    error_log.error(message)


def submit(
    *,
    settings: AppSettings,
    request: SubmissionRequest,
    api_client: TaxApiClient,
    error_log: ErrorLog,
    hooks: PipelineHooks | None = None,
) -> SubmissionResult:
    """Ejecuta el pipeline una vez y devuelve el artefacto escrito.

    Reglas:
    - Cada `TaxClientError` se registra en `error_log` una sola vez y se
      vuelve a lanzar sin cambios.
    """

    hooks = hooks or PipelineHooks()
    stage = _Stage("operation", {"Operation": str(request.operation)})
    sanitize = settings.sanitize_apostrophes if request.sanitize is None else request.sanitize

    try:
        operation = parse_operation(request.operation)

        stage = _Stage("input", {"Operation": operation.value, "Path": str(request.input_path)})
        loaded = load_tax_request(request.input_path)
        if hooks.loaded:
            hooks.loaded(loaded)

        stage.name = "validation"
        payload = validate(operation, loaded.payload, sanitize=sanitize)

        url = settings.endpoint_url(operation)
        stage = _Stage("request", {"Operation": operation.value, "URL": url})
        if hooks.sending:
            hooks.sending(operation, url, payload)
        response = api_client.send(url, payload)

        stage = _Stage("storage", {"Operation": operation.value, "File": loaded.file_name})
        artifact = export_response_json(
            response=response,
            original_name=loaded.file_name,
            output_dir=settings.output_dir,
        )
        if hooks.saved:
            hooks.saved(artifact)
    except TaxClientError as exc:
        _log_failure(error_log, stage, exc)
        raise

    return SubmissionResult(
        operation=operation,
        url=url,
        response=response,
        artifact_path=artifact,
        sanitized=sanitize,
    )
