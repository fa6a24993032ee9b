"""
Entry point for the cyclogon generator.

Running this script with ``python run.py`` starts the FastAPI server
hosting the curve API.  The application defined in
``backend/cyclogon/main.py`` is imported after adding ``backend`` to the
Python path.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the cyclogon application."""
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    # Imported here so the path adjustment happens first.
    from cyclogon.main import app  # type: ignore

    host = os.getenv("CYCLOGON_HOST", "0.0.0.0")
    port = int(os.getenv("CYCLOGON_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
