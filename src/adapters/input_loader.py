"""Carga del archivo JSON de entrada.

Lógica:
- Si el archivo no existe se lanza `InputFileNotFoundError` junto con un
  diagnóstico best-effort del directorio (archivos `.json` o con nombres de
  impuestos/órdenes). El diagnóstico nunca lanza.
- Si existe pero no se puede leer o no es JSON válido se lanza
  `MalformedInputError` con el mensaje original.
- `NaN`, `Infinity` y los surrogates sueltos no son JSON estándar: el
  payload debe poder reenviarse tal cual, así que también se rechazan.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import LoadedInput
from core.errors import InputFileNotFoundError, MalformedInputError

SIMILAR_NAME_PARTS: tuple[str, ...] = ("tax", "sage", "ord")
SIMILAR_SUFFIX = ".json"


def is_similar_file_name(name: str) -> bool:
    lowered = name.lower()
    if lowered.endswith(SIMILAR_SUFFIX):
        return True
    return any(part in lowered for part in SIMILAR_NAME_PARTS)


def _directory_diagnostic(path: Path) -> tuple[list[str], list[str], str | None]:
    """Devuelve (listado, similares, nota). Cualquier falla queda en la nota."""

    directory = path.parent
    try:
        if not directory.is_dir():
            return [], [], f"Directory {directory} does not exist"
        names = sorted(entry.name for entry in directory.iterdir())
    except Exception as exc:  # noqa: BLE001 - diagnostic only
        return [], [], f"Could not list directory {directory}: {exc}"

    similar = [name for name in names if is_similar_file_name(name)]
    return names, similar, None


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-standard JSON constant {token!r}")


def load_tax_request(path: str | Path) -> LoadedInput:
    """Lee y parsea `path`; devuelve el payload y el nombre base original."""

    source = Path(path)
    if not source.exists():
        listing, similar, note = _directory_diagnostic(source)
        raise InputFileNotFoundError(
            source,
            directory_listing=listing,
            similar_files=similar,
            diagnostic_note=note,
        )

    try:
        raw = source.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedInputError(f"Could not read input file {source}: {exc}", path=source) from exc

    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedInputError(
            f"Input file {source} does not contain valid JSON: {exc}", path=source
        ) from exc

    try:
        json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except ValueError as exc:
        raise MalformedInputError(
            f"Input file {source} cannot be sent as JSON: {exc}", path=source
        ) from exc

    return LoadedInput(payload=payload, file_name=source.name, source_path=source)
