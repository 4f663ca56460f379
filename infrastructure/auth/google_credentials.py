# infrastructure/auth/google_credentials.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

logger = logging.getLogger(__name__)

def load_credentials(client_secret_file: Path, token_file: Path, scopes: list[str]) -> Optional[Credentials]:
    """
    Devuelve credenciales OAuth de usuario listas para usar, o None si falla.

    - Si existe token_file se reutiliza; si ha caducado y tiene refresh_token se refresca.
    - Si no hay token válido se abre el flujo de consentimiento en el navegador.
    - Cualquier token nuevo o refrescado se vuelve a escribir en token_file.
    """
    try:
        creds: Optional[Credentials] = None
        if token_file.exists():
            creds = Credentials.from_authorized_user_file(str(token_file), scopes)
            logger.info("Token cargado desde %s", token_file)

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            logger.info("Token caducado; refrescando…")
            creds.refresh(Request())
        else:
            logger.info("Iniciando flujo de consentimiento OAuth (se abrirá el navegador)…")
            flow = InstalledAppFlow.from_client_secrets_file(str(client_secret_file), scopes)
            creds = flow.run_local_server(port=0)

        token_file.write_text(creds.to_json())
        logger.info("Token guardado en %s", token_file)
        return creds
    except Exception:
        logger.exception("Error al obtener credenciales")
        return None
