# application/services/error_policy.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

class ErrorSite(str, Enum):
    LIST_MESSAGES = "list_messages"
    GET_MESSAGE = "get_message"
    CHECK_EXISTS = "check_exists"
    GET_ATTACHMENT = "get_attachment"
    UPLOAD = "upload"
    MARK_READ = "mark_read"
    DELETE_MESSAGE = "delete_message"

class Policy(str, Enum):
    ABORT_PASS = "abort_pass"        # termina la pasada; se reintenta en la siguiente
    ABORT_MESSAGE = "abort_message"  # se abandona el correo en esta pasada
    FAIL_OPEN = "fail_open"          # se continúa como si la comprobación diera negativo
    IGNORE = "ignore"                # solo se registra

POLICY: dict[ErrorSite, Policy] = {
    ErrorSite.LIST_MESSAGES: Policy.ABORT_PASS,
    ErrorSite.GET_MESSAGE: Policy.ABORT_MESSAGE,
    ErrorSite.CHECK_EXISTS: Policy.FAIL_OPEN,
    ErrorSite.GET_ATTACHMENT: Policy.ABORT_MESSAGE,
    ErrorSite.UPLOAD: Policy.ABORT_MESSAGE,
    ErrorSite.MARK_READ: Policy.ABORT_MESSAGE,
    ErrorSite.DELETE_MESSAGE: Policy.IGNORE,
}

@dataclass
class StepResult:
    site: ErrorSite
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def policy(self) -> Policy | None:
        return None if self.ok else POLICY[self.site]

def attempt(site: ErrorSite, fn: Callable[..., Any], *args: Any, fallback: Any = None, context: str = "") -> StepResult:
    """
    Ejecuta una llamada remota y devuelve el resultado o el error capturado.
    El error se registra una sola vez aquí; qué hacer después lo decide POLICY.
    """
    try:
        return StepResult(site=site, value=fn(*args))
    except Exception as exc:
        logger.exception("Error en %s%s (política: %s)", site.value, f" [{context}]" if context else "", POLICY[site].value)
        return StepResult(site=site, value=fallback, error=exc)
