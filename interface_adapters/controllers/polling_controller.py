# interface_adapters/controllers/polling_controller.py
from __future__ import annotations
import logging
from typing import Any

from config.settings import Settings
from domain.models import PassReport
from infrastructure.filesystem.storage import WatermarkStore
from infrastructure.email.gmail_client import GmailMailbox
from infrastructure.storage.drive_client import DriveStorage
from application.use_cases.sync_attachments_usecase import SyncAttachmentsUseCase
from utils.clock import SystemClock

logger = logging.getLogger(__name__)

class PollingController:
    def __init__(
        self,
        settings: Settings,
        credentials: Any = None,
        *,
        mailbox: Any = None,
        storage: Any = None,
        clock: Any = None,
    ) -> None:
        self.settings = settings
        self.clock = clock or SystemClock()
        self.mailbox = mailbox or GmailMailbox(credentials=credentials, user_id=settings.GMAIL_USER_ID)
        self.storage = storage or DriveStorage(credentials=credentials, folder_id=settings.DRIVE_FOLDER_ID)
        self.watermarks = WatermarkStore(settings.watermark_path())
        self.uc = SyncAttachmentsUseCase(
            mailbox=self.mailbox,
            storage=self.storage,
            watermarks=self.watermarks,
            clock=self.clock,
            base_query=settings.MAIL_QUERY,
            attach_suffix=settings.ATTACH_SUFFIX,
            ignore_keyword=settings.IGNORE_KEYWORD,
            mail_limit=settings.mail_limit(),
        )

    def run_once(self) -> PassReport:
        report = self.uc.run_pass()
        if report.aborted:
            logger.warning("Pasada interrumpida; se reintentará en %s s", self.settings.POLL_INTERVAL)
        return report
