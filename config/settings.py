# config/settings.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    # Google OAuth (cliente de escritorio)
    GOOGLE_CLIENT_SECRET_FILE: str = os.getenv("GOOGLE_CLIENT_SECRET_FILE", "credentials.json")
    GOOGLE_TOKEN_FILE: str = os.getenv("GOOGLE_TOKEN_FILE", "token.json")
    GOOGLE_SCOPES: str = os.getenv(
        "GOOGLE_SCOPES",
        "https://www.googleapis.com/auth/gmail.modify,"
        "https://www.googleapis.com/auth/drive,"
        "https://www.googleapis.com/auth/drive.file",
    )

    # Gmail
    GMAIL_USER_ID: str = os.getenv("GMAIL_USER_ID", "me")
    MAIL_QUERY: str = os.getenv("MAIL_QUERY", "from:email_do_remetente@example.com has:attachment is:unread")

    # Filtros / adjuntos
    ATTACH_SUFFIX: str = os.getenv("ATTACH_SUFFIX", ".pdf")
    IGNORE_KEYWORD: str = os.getenv("IGNORE_KEYWORD", "IgnoreKeyword")

    # Drive
    DRIVE_FOLDER_ID: str = os.getenv("DRIVE_FOLDER_ID", "sua_pasta_id")

    # Estado local (último mensaje procesado)
    WATERMARK_FILE: str = os.getenv("WATERMARK_FILE", "lastProcessedMessageId.txt")

    # Polling
    POLL_INTERVAL: int = int(os.getenv("POLL_INTERVAL", 300))
    MAX_MAILS_PER_LOOP: int = int(os.getenv("MAX_MAILS_PER_LOOP", 0))  # 0 = sin límite

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ───────── helpers ─────────
    def scopes(self) -> list[str]:
        return [s.strip() for s in self.GOOGLE_SCOPES.split(",") if s.strip()]

    def client_secret_path(self) -> Path:
        return Path(self.GOOGLE_CLIENT_SECRET_FILE)

    def token_path(self) -> Path:
        return Path(self.GOOGLE_TOKEN_FILE)

    def watermark_path(self) -> Path:
        return Path(self.WATERMARK_FILE)

    def mail_limit(self) -> int | None:
        return self.MAX_MAILS_PER_LOOP if self.MAX_MAILS_PER_LOOP > 0 else None
