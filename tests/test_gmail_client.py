from __future__ import annotations

import base64
from unittest.mock import MagicMock

from infrastructure.email.gmail_client import GmailMailbox, decode_attachment_data


def make_mailbox() -> tuple[GmailMailbox, MagicMock]:
    service = MagicMock()
    return GmailMailbox(service=service, user_id="me"), service.users.return_value.messages.return_value


def test_decode_translates_urlsafe_alphabet() -> None:
    raw = bytes(range(250, 256)) + b"%PDF?>"
    encoded = base64.urlsafe_b64encode(raw).decode()
    assert "-" in encoded or "_" in encoded
    assert decode_attachment_data(encoded) == raw


def test_decode_restores_missing_padding() -> None:
    encoded = base64.urlsafe_b64encode(b"%PDF-1").decode().rstrip("=")
    assert decode_attachment_data(encoded) == b"%PDF-1"


def test_list_follows_pages() -> None:
    mailbox, messages = make_mailbox()
    messages.list.return_value.execute.side_effect = [
        {"messages": [{"id": "a"}, {"id": "b"}], "nextPageToken": "p2"},
        {"messages": [{"id": "c"}]},
    ]

    assert mailbox.list_message_ids("is:unread") == ["a", "b", "c"]
    first, second = messages.list.call_args_list
    assert first.kwargs == {"userId": "me", "q": "is:unread"}
    assert second.kwargs == {"userId": "me", "q": "is:unread", "pageToken": "p2"}


def test_list_without_results_returns_empty() -> None:
    mailbox, messages = make_mailbox()
    messages.list.return_value.execute.return_value = {"resultSizeEstimate": 0}
    assert mailbox.list_message_ids("is:unread") == []


def test_list_respects_limit() -> None:
    mailbox, messages = make_mailbox()
    messages.list.return_value.execute.return_value = {
        "messages": [{"id": "a"}, {"id": "b"}, {"id": "c"}],
        "nextPageToken": "more",
    }
    assert mailbox.list_message_ids("q", limit=2) == ["a", "b"]
    assert messages.list.call_count == 1


def test_get_message_parses_top_level_parts() -> None:
    mailbox, messages = make_mailbox()
    messages.get.return_value.execute.return_value = {
        "id": "m1",
        "labelIds": ["UNREAD", "INBOX"],
        "payload": {
            "parts": [
                {"filename": "", "mimeType": "text/plain", "body": {"size": 10}},
                {"filename": "invoice.pdf", "mimeType": "application/pdf", "body": {"attachmentId": "att-9"}},
            ]
        },
    }

    msg = mailbox.get_message("m1")

    messages.get.assert_called_once_with(userId="me", id="m1")
    assert msg.id == "m1"
    assert [(p.filename, p.attachment_id) for p in msg.parts] == [("", None), ("invoice.pdf", "att-9")]
    assert msg.parts[1].mime_type == "application/pdf"


def test_get_message_without_parts() -> None:
    msg = GmailMailbox.parse_message({"id": "m2", "payload": {"mimeType": "text/plain"}})
    assert msg.parts == []
    assert not msg.has_parts


def test_get_attachment_decodes_data() -> None:
    mailbox, messages = make_mailbox()
    attachments = messages.attachments.return_value
    attachments.get.return_value.execute.return_value = {
        "data": base64.urlsafe_b64encode(b"%PDF-1.7 body").decode(),
        "size": 13,
    }

    assert mailbox.get_attachment("m1", "att-9") == b"%PDF-1.7 body"
    attachments.get.assert_called_once_with(userId="me", messageId="m1", id="att-9")


def test_mark_read_removes_unread_label() -> None:
    mailbox, messages = make_mailbox()
    mailbox.mark_read("m1")
    messages.modify.assert_called_once_with(userId="me", id="m1", body={"removeLabelIds": ["UNREAD"]})
    messages.modify.return_value.execute.assert_called_once()


def test_delete_message_is_permanent_delete() -> None:
    mailbox, messages = make_mailbox()
    mailbox.delete_message("m1")
    messages.delete.assert_called_once_with(userId="me", id="m1")
    messages.trash.assert_not_called()
