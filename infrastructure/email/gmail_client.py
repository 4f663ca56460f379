# infrastructure/email/gmail_client.py
from __future__ import annotations
import base64
import logging
from typing import Any, Dict, List, Optional

from googleapiclient.discovery import build

from domain.models import MailMessage, MessagePart

logger = logging.getLogger(__name__)

UNREAD_LABEL = "UNREAD"

def decode_attachment_data(data: str) -> bytes:
    """
    Gmail entrega los adjuntos en base64url. Se traduce al alfabeto estándar
    ('-' -> '+', '_' -> '/'), se repone el padding que falte y se decodifica.
    """
    std = data.replace("-", "+").replace("_", "/")
    std += "=" * (-len(std) % 4)
    return base64.b64decode(std)

class GmailMailbox:
    def __init__(
        self,
        *,
        credentials: Any = None,
        user_id: str = "me",
        service: Any = None,
    ) -> None:
        self.user_id = user_id
        self.service = service or build("gmail", "v1", credentials=credentials, cache_discovery=False)

    def _messages(self):
        return self.service.users().messages()

    # ───────── list / get ─────────
    def list_message_ids(self, query: str, limit: Optional[int] = None) -> List[str]:
        logger.debug("Consulta Gmail: %s", query)
        ids: List[str] = []
        page_token: Optional[str] = None
        while True:
            params: Dict[str, Any] = {"userId": self.user_id, "q": query}
            if page_token:
                params["pageToken"] = page_token
            response = self._messages().list(**params).execute()
            ids.extend(m["id"] for m in response.get("messages", []) or [])
            if limit and len(ids) >= limit:
                return ids[:limit]
            page_token = response.get("nextPageToken")
            if not page_token:
                return ids

    def get_message(self, message_id: str) -> MailMessage:
        raw = self._messages().get(userId=self.user_id, id=message_id).execute()
        return self.parse_message(raw)

    @staticmethod
    def parse_message(raw: Dict[str, Any]) -> MailMessage:
        # Solo las partes de primer nivel del payload
        parts: List[MessagePart] = []
        for p in (raw.get("payload") or {}).get("parts") or []:
            body = p.get("body") or {}
            parts.append(MessagePart(
                filename=p.get("filename") or "",
                mime_type=p.get("mimeType") or "application/octet-stream",
                attachment_id=body.get("attachmentId"),
            ))
        return MailMessage(id=raw["id"], parts=parts)

    # ───────── adjuntos ─────────
    def get_attachment(self, message_id: str, attachment_id: str) -> bytes:
        att = self._messages().attachments().get(
            userId=self.user_id, messageId=message_id, id=attachment_id
        ).execute()
        return decode_attachment_data(att.get("data") or "")

    # ───────── etiquetas / borrado ─────────
    def mark_read(self, message_id: str) -> None:
        body = {"removeLabelIds": [UNREAD_LABEL]}
        self._messages().modify(userId=self.user_id, id=message_id, body=body).execute()

    def delete_message(self, message_id: str) -> None:
        # Borrado permanente (no pasa por la papelera)
        self._messages().delete(userId=self.user_id, id=message_id).execute()
