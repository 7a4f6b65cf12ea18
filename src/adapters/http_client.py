"""Wrapper de httpx.

- Estandariza timeout y headers para la API de impuestos.
- Acepta un `transport` inyectado (p.ej. `httpx.MockTransport` en tests).
"""

from __future__ import annotations

import httpx

REQUEST_TIMEOUT_SECONDS = 30.0
USER_AGENT = "tax-api-client/0.1"


def build_client(
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con los defaults de la API.

    El timeout es fijo (30 s) y aplica a conexión, lectura y escritura.
    """

    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
