# main.py
# Punto de entrada: credenciales Google -> loop de polling Gmail -> sube PDFs a Drive
from __future__ import annotations
import logging
import sys
from typing import Any

from config.settings import Settings
from infrastructure.auth.google_credentials import load_credentials
from interface_adapters.controllers.polling_controller import PollingController
from utils.clock import SystemClock

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stdout,
    )


def run_polling(controller: Any, clock: Any, interval: float, max_passes: int | None = None) -> int:
    """Pasadas secuenciales separadas por 'interval' segundos. Sin max_passes no termina nunca."""
    passes = 0
    while max_passes is None or passes < max_passes:
        try:
            controller.run_once()
        except Exception:
            logger.exception("Error en ciclo de polling")
        passes += 1
        clock.sleep(interval)
    return passes


def main() -> None:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    logger.info("=== Gmail -> Google Drive ===")
    credentials = load_credentials(settings.client_secret_path(), settings.token_path(), settings.scopes())
    if credentials is None:
        logger.error("No se pudieron obtener las credenciales.")
        return

    clock = SystemClock()
    try:
        controller = PollingController(settings=settings, credentials=credentials, clock=clock)
    except Exception:
        logger.exception("Error al inicializar los servicios")
        return

    logger.info("Servicios de Gmail y Google Drive inicializados (carpeta=%s)", settings.DRIVE_FOLDER_ID)
    run_polling(controller, clock, settings.POLL_INTERVAL)


if __name__ == "__main__":
    main()
