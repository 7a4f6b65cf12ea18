"""Componentes de UI para CLI (Rich).

Separa los detalles visuales (paneles, tablas) de la lógica del comando.
"""

from __future__ import annotations

import json

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import SubmissionResult, TaxRequest
from core.domain.operation import Operation
from core.errors import ApiError, InputFileNotFoundError, TaxClientError, TransportError


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite con `--quiet`)."""

    title = Text("TAX API CLIENT", style="bold cyan")
    subtitle = Text("Calculate • Commit • Cancel", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_operations_table() -> Table:
    table = Table(title="Operations")
    table.add_column("Operation", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    for op in Operation:
        table.add_row(op.value, op.label())
    return table


def build_request_panel(operation: Operation, url: str, payload: TaxRequest) -> Panel:
    body = Text()
    body.append("Operation: ", style="bold")
    body.append(f"{operation.value}\n")
    body.append("URL: ", style="bold")
    body.append(f"{url}\n\n")
    body.append(json.dumps(payload, ensure_ascii=False, indent=2), style="dim")
    return Panel(body, title=f"{operation.value.upper()} request", border_style="blue")


def build_result_panel(result: SubmissionResult) -> Panel:
    body = Text()
    body.append("Operation: ", style="bold")
    body.append(f"{result.operation.value} completed\n")
    body.append("Saved to: ", style="bold")
    body.append(str(result.artifact_path))
    if result.sanitized:
        body.append("\nApostrophes escaped before sending", style="dim")
    return Panel(body, title="Success", border_style="green")


def build_error_panel(error: TaxClientError) -> Panel:
    """Panel rojo con el error; incluye diagnóstico según el tipo."""

    body = Text()
    body.append(error.message + "\n", style="bold")
    body.append(f"\nKind: {error.code}", style="dim")

    if isinstance(error, TransportError):
        body.append(f" ({error.kind.value})", style="dim")
    elif isinstance(error, ApiError):
        body.append("\n\nServer response:\n", style="bold")
        body.append(error.body or error.reason)
    elif isinstance(error, InputFileNotFoundError):
        if error.similar_files:
            body.append("\n\nSimilar files in that directory:\n", style="bold")
            for name in error.similar_files:
                body.append(f"  - {name}\n")
        elif error.diagnostic_note:
            body.append(f"\n\n{error.diagnostic_note}", style="dim")

    return Panel(body, title="Error", border_style="red")
