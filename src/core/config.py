"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Se construye una sola vez al arrancar (`load_settings`) y se pasa
  explícitamente a cada componente; no hay instancia global.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.operation import Operation
from core.endpoints import resolve_endpoint
from core.errors import ConfigurationError

REQUIRED_VARIABLES: tuple[str, ...] = ("BASE_URL", "API_CODE", "OUTPUT_DIR")
DEFAULT_LOG_DIR = Path("logs")


def _env_flag(value: Any) -> bool:
    """Solo el texto `"true"` (sin importar mayúsculas/espacios) activa el flag."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


class AppSettings(BaseSettings):
    """Configuración de despliegue del cliente.

    Orden de lectura: variables de entorno del proceso, luego `.env` del
    directorio de trabajo. Inmutable durante toda la ejecución.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        ...,
        description="URL base de la API, terminada en '/'.",
    )
    api_code: str = Field(
        ...,
        description="Código de autenticación enviado como `?code=`.",
    )
    output_dir: Path = Field(
        ...,
        description="Directorio donde se escriben los archivos RESPONSE_*.",
    )
    test_mode: bool = Field(
        default=False,
        description="Redirige los cálculos al endpoint de pruebas.",
    )
    log_dir: Path = Field(
        default=DEFAULT_LOG_DIR,
        description="Directorio de los logs diarios de errores.",
    )
    sanitize_apostrophes: bool = Field(
        default=False,
        description="Escapa apóstrofes en los strings del payload antes de enviar.",
    )

    @field_validator("base_url", "api_code", "output_dir", mode="before")
    @classmethod
    def _reject_empty(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("must not be empty")
        return value

    @field_validator("test_mode", "sanitize_apostrophes", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        return _env_flag(value)

    @field_validator("log_dir", mode="before")
    @classmethod
    def _default_log_dir(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_LOG_DIR
        return value

    def endpoint_url(self, operation: Operation) -> str:
        return resolve_endpoint(
            operation,
            base_url=self.base_url,
            api_code=self.api_code,
            test_mode=self.test_mode,
        )


def load_settings(*, env_file: str | Path | None = ".env") -> AppSettings:
    """Construye `AppSettings` o falla con todas las variables faltantes.

    Reglas:
    - Un valor vacío cuenta como faltante.
    - El mensaje nombra todas las variables requeridas ausentes, no solo la
      primera.
    """

    try:
        return AppSettings(_env_file=env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        missing: list[str] = []
        for error in exc.errors():
            loc = error.get("loc") or ()
            if not loc:
                continue
            name = str(loc[0]).upper()
            if name not in missing:
                missing.append(name)
        ordered = [name for name in REQUIRED_VARIABLES if name in missing]
        ordered.extend(name for name in missing if name not in ordered)
        raise ConfigurationError(ordered) from exc
