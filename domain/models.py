# domain/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

PartOutcome = Literal["uploaded", "upload_failed", "invalid", "ignored", "exists", "aborted"]

@dataclass
class MessagePart:
    filename: str
    mime_type: str
    attachment_id: str | None = None

@dataclass
class MailMessage:
    id: str
    parts: list[MessagePart] = field(default_factory=list)

    @property
    def has_parts(self) -> bool:
        return bool(self.parts)

@dataclass
class PassReport:
    """Resumen de una pasada; solo para logs y tests, no se persiste."""
    query: str = ""
    found: list[str] = field(default_factory=list)
    processed: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    uploaded: list[str] = field(default_factory=list)
    skipped: dict[str, int] = field(default_factory=dict)
    last_message_id: str | None = None
    aborted: bool = False

    def count_skip(self, outcome: PartOutcome) -> None:
        self.skipped[outcome] = self.skipped.get(outcome, 0) + 1
