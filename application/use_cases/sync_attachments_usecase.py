# application/use_cases/sync_attachments_usecase.py
from __future__ import annotations
import logging
from typing import Any

from domain.models import MailMessage, MessagePart, PartOutcome, PassReport
from application.services.error_policy import ErrorSite, Policy, attempt
from application.services.query_builder import build_query

logger = logging.getLogger(__name__)

class SyncAttachmentsUseCase:
    """
    Una pasada: busca correos, sube los PDF adjuntos a Drive y marca/borra los correos.

    mailbox: list_message_ids, get_message, get_attachment, mark_read, delete_message
    storage: file_exists, upload
    watermarks: get, set
    clock: now
    """
    def __init__(
        self,
        *,
        mailbox: Any,
        storage: Any,
        watermarks: Any,
        clock: Any,
        base_query: str,
        attach_suffix: str = ".pdf",
        ignore_keyword: str = "",
        mail_limit: int | None = None,
    ) -> None:
        self.mailbox = mailbox
        self.storage = storage
        self.watermarks = watermarks
        self.clock = clock
        self.base_query = base_query
        self.attach_suffix = attach_suffix
        self.ignore_keyword = ignore_keyword
        self.mail_limit = mail_limit

    def _is_candidate(self, part: MessagePart) -> bool:
        return bool(part.filename) and part.filename.endswith(self.attach_suffix) and bool(part.attachment_id)

    def _is_ignored(self, part: MessagePart) -> bool:
        return bool(self.ignore_keyword) and self.ignore_keyword in part.filename

    def run_pass(self) -> PassReport:
        logger.info("Iniciando procesamiento de correos…")
        query = build_query(self.base_query, self.watermarks.get(), self.clock.now())
        report = PassReport(query=query)

        listed = attempt(ErrorSite.LIST_MESSAGES, self.mailbox.list_message_ids, query, self.mail_limit)
        if listed.policy is Policy.ABORT_PASS:
            report.aborted = True
            return report

        report.found = list(listed.value or [])
        if not report.found:
            logger.info("No se encontraron mensajes.")
            return report

        logger.info("%d mensajes encontrados.", len(report.found))
        for mid in report.found:
            self.process_message(mid, report)

        logger.info(
            "Pasada terminada: %d procesados, %d subidos, %d con error",
            len(report.processed), len(report.uploaded), len(report.failed),
        )
        return report

    def process_message(self, message_id: str, report: PassReport) -> None:
        fetched = attempt(ErrorSite.GET_MESSAGE, self.mailbox.get_message, message_id, context=message_id)
        if fetched.policy is Policy.ABORT_MESSAGE:
            report.failed.append(message_id)
            return
        msg: MailMessage = fetched.value

        if not msg.has_parts:
            logger.info("Ningún adjunto encontrado en el mensaje %s", msg.id)
        for part in msg.parts:
            outcome = self.process_part(msg, part)
            if outcome == "aborted":
                # Sin marca, sin etiquetas y sin borrado: el correo se reintenta en la siguiente pasada
                report.count_skip(outcome)
                report.failed.append(message_id)
                return
            if outcome == "uploaded":
                report.uploaded.append(part.filename)
            else:
                report.count_skip(outcome)

        # La marca se guarda antes de tocar etiquetas, como en el flujo original
        if self.watermarks.set(message_id):
            report.last_message_id = message_id

        marked = attempt(ErrorSite.MARK_READ, self.mailbox.mark_read, msg.id, context=msg.id)
        if marked.policy is Policy.ABORT_MESSAGE:
            report.failed.append(message_id)
            return
        logger.info("Mensaje %s marcado como leído.", msg.id)

        deleted = attempt(ErrorSite.DELETE_MESSAGE, self.mailbox.delete_message, msg.id, context=msg.id)
        if deleted.policy is Policy.IGNORE:
            logger.warning("El mensaje %s queda leído pero sin eliminar", msg.id)
        else:
            logger.info("Mensaje %s eliminado.", msg.id)
            report.deleted.append(msg.id)
        report.processed.append(message_id)

    def process_part(self, msg: MailMessage, part: MessagePart) -> PartOutcome:
        if not self._is_candidate(part):
            logger.info("Adjunto no válido o no encontrado en el mensaje %s (%s)", msg.id, part.filename or "-")
            return "invalid"

        if self._is_ignored(part):
            logger.info("Adjunto ignorado por contener '%s': %s", self.ignore_keyword, part.filename)
            return "ignored"

        exists = attempt(ErrorSite.CHECK_EXISTS, self.storage.file_exists, part.filename, fallback=False, context=part.filename)
        if exists.policy is Policy.FAIL_OPEN:
            logger.warning("No se pudo comprobar %s en Drive; se sube igualmente", part.filename)
        elif exists.value:
            logger.info("El fichero %s ya existe en Drive. Se omite la subida.", part.filename)
            return "exists"

        logger.info("Procesando adjunto: %s", part.filename)
        fetched = attempt(ErrorSite.GET_ATTACHMENT, self.mailbox.get_attachment, msg.id, part.attachment_id, context=part.filename)
        if fetched.policy is Policy.ABORT_MESSAGE:
            return "aborted"

        uploaded = attempt(ErrorSite.UPLOAD, self.storage.upload, part.filename, fetched.value, part.mime_type, context=part.filename)
        if uploaded.policy is Policy.ABORT_MESSAGE:
            return "aborted"
        if not uploaded.value:
            logger.warning("Fallo en la subida de %s", part.filename)
            return "upload_failed"

        logger.info("Subida correcta de %s (id=%s)", part.filename, uploaded.value)
        return "uploaded"
