"""CLI principal (Typer).

Uso:
    tax-client <operacion> <ruta_del_archivo>

Operaciones: get_tax, post_tax, cancel_tax. Código de salida 0 en éxito y
1 ante cualquier error del cliente; Typer sale con 2 si faltan argumentos.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.error_log import DailyFileErrorLog
from adapters.tax_api_client import TaxApiClient
from cli.ui_components import (
    build_error_panel,
    build_operations_table,
    build_request_panel,
    build_result_panel,
    print_banner,
)
from core.config import DEFAULT_LOG_DIR, load_settings
from core.domain.operation import Operation
from core.errors import ConfigurationError, InvalidOperationError, TaxClientError
from core.services.tax_pipeline import PipelineHooks, SubmissionRequest, submit

app = typer.Typer(
    add_completion=False,
    help="Submit tax transactions to the tax API and save the response.",
)

_console = Console()
_err_console = Console(stderr=True)

_OPERATIONS_HELP = "One of: " + ", ".join(Operation.values())


@app.command()
def tax(
    operation: str = typer.Argument(..., help=_OPERATIONS_HELP, show_default=False),
    input_file: Path = typer.Argument(..., help="JSON file with the transaction payload."),
    sanitize_apostrophes: Optional[bool] = typer.Option(
        None,
        "--sanitize-apostrophes/--no-sanitize-apostrophes",
        help="Escape apostrophes in payload strings before sending (overrides SANITIZE_APOSTROPHES).",
        show_default=False,
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors."),
) -> None:
    """Run one tax operation against the configured API.

    Example: tax-client get_tax ./data/transaction.json
    """

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        # Sin settings: LOG_DIR del entorno o el directorio por defecto.
        log_dir = os.environ.get("LOG_DIR", "").strip() or DEFAULT_LOG_DIR
        bootstrap_log = DailyFileErrorLog(Path(log_dir))
        bootstrap_log.error(exc.message)
        bootstrap_log.close()
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    error_log = DailyFileErrorLog(settings.log_dir)

    if not quiet:
        print_banner(_console)
        if settings.test_mode:
            _console.print("[yellow]TEST_MODE enabled: calculations go to the test endpoint.[/yellow]")

    hooks = PipelineHooks()
    if not quiet:
        hooks.loaded = lambda loaded: _console.print(f"[dim]Loaded {loaded.source_path}[/dim]")
        hooks.sending = lambda op, url, payload: _console.print(build_request_panel(op, url, payload))
        hooks.saved = lambda path: _console.print(f"[dim]Response saved to {path}[/dim]")

    request = SubmissionRequest(
        operation=operation,
        input_path=input_file,
        sanitize=sanitize_apostrophes,
    )

    try:
        with TaxApiClient() as api_client:
            result = submit(
                settings=settings,
                request=request,
                api_client=api_client,
                error_log=error_log,
                hooks=hooks,
            )
    except TaxClientError as exc:
        _err_console.print(build_error_panel(exc))
        if not quiet and isinstance(exc, InvalidOperationError):
            _err_console.print(build_operations_table())
        raise typer.Exit(code=1) from exc
    finally:
        error_log.close()

    if not quiet:
        _console.print(build_result_panel(result))


def run() -> None:
    """Entry point del script `tax-client`."""

    app()


if __name__ == "__main__":
    run()
