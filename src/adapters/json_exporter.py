"""Exportación JSON de la respuesta de la API.

- Escribe `OUTPUT_DIR/RESPONSE_<nombre original>` en UTF-8, indentado a 2
  espacios, con las claves en el orden recibido del servidor.
- Sobrescribe sin aviso un archivo previo con el mismo nombre.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import RESPONSE_FILE_PREFIX, TaxResponse
from core.errors import StorageError


def response_file_path(*, original_name: str, output_dir: Path) -> Path:
    """Ruta del artefacto; solo se usa el nombre base del archivo original."""

    return Path(output_dir) / f"{RESPONSE_FILE_PREFIX}{Path(original_name).name}"


def render_response(response: TaxResponse) -> str:
    return json.dumps(response, ensure_ascii=False, indent=2)


def export_response_json(*, response: TaxResponse, original_name: str, output_dir: Path) -> Path:
    """Persiste `response` y devuelve la ruta escrita."""

    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(
            f"Could not create output directory {output_dir}: {exc}", path=output_dir
        ) from exc

    output_path = response_file_path(original_name=original_name, output_dir=output_dir)
    # Se serializa completo antes de abrir el archivo: nunca queda un artefacto parcial.
    try:
        data = render_response(response).encode("utf-8")
    except ValueError as exc:
        raise StorageError(
            f"Could not encode response for {output_path}: {exc}", path=output_path
        ) from exc

    try:
        output_path.write_bytes(data)
    except OSError as exc:
        raise StorageError(
            f"Could not write response file {output_path}: {exc}", path=output_path
        ) from exc
    return output_path
