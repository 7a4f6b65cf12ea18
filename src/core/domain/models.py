"""Modelos del dominio (Pydantic v2).

Notas:
- `TaxRequest` y `TaxResponse` son opacos: el cliente solo interpreta el
  campo booleano `Committed` de la petición; el resto viaja tal cual.
- Estos modelos describen *qué* se envía y se obtiene, no *cómo*.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.operation import Operation

TaxRequest = dict[str, Any]
TaxResponse = Any

COMMITTED_FIELD = "Committed"
RESPONSE_FILE_PREFIX = "RESPONSE_"


class LoadedInput(BaseModel):
    """Contenido parseado del archivo de entrada."""

    model_config = ConfigDict(frozen=True)

    payload: Any = Field(
        ...,
        description="Documento JSON tal como se leyó del disco.",
    )
    file_name: str = Field(
        ...,
        min_length=1,
        description="Nombre base del archivo original (sin directorio).",
    )
    source_path: Path = Field(
        ...,
        description="Ruta recibida en la CLI.",
    )


class SubmissionResult(BaseModel):
    """Resultado de una invocación exitosa del flujo."""

    model_config = ConfigDict(frozen=True)

    operation: Operation
    url: str = Field(..., description="URL completa a la que se envió la petición.")
    response: TaxResponse = Field(
        default=None,
        description="Cuerpo JSON devuelto por el servicio (sin interpretar).",
    )
    artifact_path: Path = Field(
        ...,
        description="Archivo `RESPONSE_<nombre>` escrito en OUTPUT_DIR.",
    )
    sanitized: bool = Field(
        default=False,
        description="Indica si se escaparon apóstrofes antes de enviar.",
    )
