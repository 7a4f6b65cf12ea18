"""Entry point de desarrollo del cliente de impuestos (sin instalar el paquete).

Equivale al script `tax-client`:
- `python main.py get_tax ./data/transaction.json`
- `python main.py cancel_tax ./data/cancel.json --quiet`

Notas:
- Lee `BASE_URL`, `API_CODE` y `OUTPUT_DIR` del entorno o de `.env` en el
  directorio actual.
- Agrega `src/` al path para encontrar `cli`, `core` y `adapters`.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import app  # noqa: PLC0415

    app(prog_name="tax-client")


if __name__ == "__main__":
    main()
