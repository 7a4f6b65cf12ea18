"""Cliente HTTP de la API de impuestos.

Responsabilidad:
- Enviar el payload JSON a una URL ya resuelta (una sola petición, sin
  reintentos).
- Clasificar la respuesta: red / 5xx → `TransportError`, 4xx → `ApiError`,
  resto → cuerpo JSON parseado.

Notas:
- El método es siempre GET con cuerpo JSON; el servicio remoto espera el
  payload en el body de un GET, sea cual sea la operación.
"""

from __future__ import annotations

import json
import socket

import httpx

from adapters.http_client import REQUEST_TIMEOUT_SECONDS, build_client
from core.domain.models import TaxRequest, TaxResponse
from core.errors import ApiError, TransportError, TransportErrorKind

REQUEST_METHOD = "GET"

_DNS_MARKERS: tuple[str, ...] = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def classify_connect_error(exc: BaseException) -> TransportErrorKind:
    """Distingue conexión rechazada de fallo DNS recorriendo la cadena de causas."""

    chain = _exception_chain(exc)
    for item in chain:
        if isinstance(item, socket.gaierror):
            return TransportErrorKind.DNS_FAILURE
        if isinstance(item, ConnectionRefusedError):
            return TransportErrorKind.CONNECTION_REFUSED

    text = " ".join(str(item) for item in chain).lower()
    if any(marker in text for marker in _DNS_MARKERS):
        return TransportErrorKind.DNS_FAILURE
    if "refused" in text:
        return TransportErrorKind.CONNECTION_REFUSED
    return TransportErrorKind.NO_RESPONSE


def describe_transport_failure(kind: TransportErrorKind, url: str) -> str:
    if kind is TransportErrorKind.CONNECTION_REFUSED:
        return (
            "Connection refused. The server is unavailable or the URL is wrong "
            f"(check that the server is running, BASE_URL is correct and no firewall blocks it). URL: {url}"
        )
    if kind is TransportErrorKind.DNS_FAILURE:
        return f"Server not found. Check the host in BASE_URL. URL: {url}"
    if kind is TransportErrorKind.TIMEOUT:
        return f"Request timed out after {REQUEST_TIMEOUT_SECONDS:.0f} seconds. URL: {url}"
    if kind is TransportErrorKind.SERVER_ERROR:
        return f"Server error. URL: {url}"
    if kind is TransportErrorKind.INVALID_RESPONSE:
        return f"Server returned a success status with a body that is not valid JSON. URL: {url}"
    return f"No response received from the server (connectivity problem). URL: {url}"


class TaxApiClient:
    """Envía peticiones a la API de impuestos y clasifica las respuestas."""

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = client or build_client(transport=transport)
        self._owns_client = client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TaxApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(self, url: str, payload: TaxRequest) -> TaxResponse:
        """Envía `payload` como cuerpo JSON y devuelve la respuesta parseada.

        Devuelve `None` si el servidor responde con éxito y cuerpo vacío.
        """

        try:
            response = self._client.request(
                REQUEST_METHOD,
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException as exc:
            raise self._transport_failure(TransportErrorKind.TIMEOUT, url) from exc
        except httpx.ConnectError as exc:
            raise self._transport_failure(classify_connect_error(exc), url) from exc
        except httpx.TransportError as exc:
            raise self._transport_failure(TransportErrorKind.NO_RESPONSE, url) from exc

        return self._handle_response(response, url)

    def _handle_response(self, response: httpx.Response, url: str) -> TaxResponse:
        status = response.status_code

        if status >= 500:
            raise self._transport_failure(
                TransportErrorKind.SERVER_ERROR,
                url,
                status_code=status,
                message=f"HTTP {status} {response.reason_phrase}. Server error. URL: {url}",
            )

        if status >= 400:
            raise ApiError(status, response.text, url=url, reason=response.reason_phrase)

        if not response.content.strip():
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._transport_failure(
                TransportErrorKind.INVALID_RESPONSE, url, status_code=status
            ) from exc

    def _transport_failure(
        self,
        kind: TransportErrorKind,
        url: str,
        *,
        status_code: int | None = None,
        message: str | None = None,
    ) -> TransportError:
        text = message or describe_transport_failure(kind, url)
        return TransportError(kind, text, url=url, status_code=status_code)
