# infrastructure/filesystem/storage.py
from __future__ import annotations
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

class WatermarkStore:
    """
    Guarda el id del último mensaje procesado en un fichero plano.
    El fichero no existe (sin marca) o contiene exactamente un id, sin salto de línea.
    """
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            value = self.path.read_text().strip()
        except (OSError, UnicodeDecodeError):
            # Fichero corrupto o ilegible: se trata como "sin marca"
            logger.warning("No se pudo leer %s; se continúa sin marca", self.path, exc_info=True)
            return None
        return value or None

    def set(self, message_id: str) -> bool:
        try:
            self.path.write_text(message_id)
            return True
        except OSError:
            logger.exception("Error al guardar el id del último correo procesado (%s)", message_id)
            return False
