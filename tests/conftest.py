from __future__ import annotations

from datetime import datetime, timezone

import pytest

from domain.models import MailMessage, MessagePart


class FakeMailbox:
    def __init__(self, messages: list[MailMessage] | None = None, attachments: dict[str, bytes] | None = None) -> None:
        self.messages = {m.id: m for m in (messages or [])}
        self.attachments = attachments or {}
        self.fail_on: dict[str, Exception] = {}
        self.queries: list[str] = []
        self.attachment_calls: list[tuple[str, str]] = []
        self.marked: list[str] = []
        self.deleted: list[str] = []

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise self.fail_on[op]

    def list_message_ids(self, query: str, limit: int | None = None) -> list[str]:
        self.queries.append(query)
        self._maybe_fail("list")
        ids = [mid for mid in self.messages if mid not in self.deleted]
        return ids[:limit] if limit else ids

    def get_message(self, message_id: str) -> MailMessage:
        self._maybe_fail("get")
        return self.messages[message_id]

    def get_attachment(self, message_id: str, attachment_id: str) -> bytes:
        self.attachment_calls.append((message_id, attachment_id))
        self._maybe_fail("attachment")
        return self.attachments.get(attachment_id, b"%PDF-1.4")

    def mark_read(self, message_id: str) -> None:
        self._maybe_fail("mark")
        self.marked.append(message_id)

    def delete_message(self, message_id: str) -> None:
        self._maybe_fail("delete")
        self.deleted.append(message_id)


class FakeStorage:
    def __init__(self, existing: set[str] | None = None) -> None:
        self.existing = existing or set()
        self.uploads: list[tuple[str, bytes, str]] = []
        self.exists_error: Exception | None = None
        self.upload_error: Exception | None = None
        self.return_id = True

    def file_exists(self, name: str) -> bool:
        if self.exists_error:
            raise self.exists_error
        return name in self.existing

    def upload(self, name: str, data: bytes, mime_type: str) -> str | None:
        if self.upload_error:
            raise self.upload_error
        self.uploads.append((name, data, mime_type))
        self.existing.add(name)
        return f"file-{len(self.uploads)}" if self.return_id else None


class FakeClock:
    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        self.sleeps: list[float] = []

    def now(self) -> datetime:
        return self._now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


def pdf_part(name: str, attachment_id: str = "att-1", mime_type: str = "application/pdf") -> MessagePart:
    return MessagePart(filename=name, mime_type=mime_type, attachment_id=attachment_id)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_mailbox():
    return FakeMailbox


@pytest.fixture
def make_storage():
    return FakeStorage


@pytest.fixture
def make_part():
    return pdf_part
