# infrastructure/storage/drive_client.py
from __future__ import annotations
from io import BytesIO
from typing import Any, Optional

from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

def escape_query_value(value: str) -> str:
    return value.replace("'", "\\'")

class DriveStorage:
    """Sube ficheros a una carpeta de Google Drive y comprueba duplicados por nombre."""

    def __init__(
        self,
        *,
        folder_id: str,
        credentials: Any = None,
        service: Any = None,
    ) -> None:
        self.folder_id = folder_id
        self.service = service or build("drive", "v3", credentials=credentials, cache_discovery=False)

    def file_exists(self, name: str) -> bool:
        """
        True si hay al menos un fichero no borrado con ese nombre exacto.
        Ojo: busca en todo lo visible para la cuenta, no solo en folder_id.
        """
        query = f"name = '{escape_query_value(name)}' and trashed = false"
        result = self.service.files().list(q=query, fields="files(id, name)").execute()
        return len(result.get("files", []) or []) > 0

    def upload(self, name: str, data: bytes, mime_type: str) -> Optional[str]:
        """Crea el fichero en la carpeta destino y devuelve su id (None si Drive no lo devuelve)."""
        metadata = {"name": name, "parents": [self.folder_id]}
        media = MediaIoBaseUpload(BytesIO(data), mimetype=mime_type or "application/octet-stream", resumable=False)
        created = self.service.files().create(body=metadata, media_body=media, fields="id").execute()
        return (created or {}).get("id")
