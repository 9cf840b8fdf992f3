"""
Transporte de envíos: POST form-encoded en segundo plano.

El estado pasa por idle -> submitting -> loading -> idle y se usa para
rotular y deshabilitar el botón de envío.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

import requests

from hezino.app.services.validate import ContactSubmission
from hezino.config import DEFAULT_SUBMIT_TIMEOUT

logger = logging.getLogger(__name__)

SUCCESS_TITLE = "Email has been sent"
SUCCESS_DESCRIPTION = "Thank you."
FAILURE_TITLE = "Message could not be sent"
INVALID_DESCRIPTION = "Please review the highlighted fields."
UNAVAILABLE_DESCRIPTION = "Please try again later."


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    LOADING = "loading"


@dataclass(frozen=True)
class Notification:
    """Aviso mostrado al usuario al terminar un envío."""

    title: str
    description: str
    variant: str = "default"  # "default" | "destructive"


@dataclass(frozen=True)
class SubmissionResult:
    status_code: Optional[int]
    notification: Notification
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300


def _failure(status_code, description, errors=None) -> SubmissionResult:
    return SubmissionResult(
        status_code=status_code,
        notification=Notification(FAILURE_TITLE, description, variant="destructive"),
        errors=dict(errors or {}),
    )


def inspect_response(response) -> SubmissionResult:
    """
    Traduce la respuesta del servidor en un resultado con su notificación.

    2xx es éxito; 400 con un mapa `errors` devuelve esos errores; cualquier
    otra cosa es un fallo genérico.
    """
    status_code = response.status_code
    if 200 <= status_code < 300:
        return SubmissionResult(
            status_code=status_code,
            notification=Notification(SUCCESS_TITLE, SUCCESS_DESCRIPTION),
        )

    if status_code == 400:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if isinstance(errors, dict) and errors:
            return _failure(status_code, INVALID_DESCRIPTION, errors)

    return _failure(status_code, UNAVAILABLE_DESCRIPTION)


class SubmissionTransport:
    """
    Envía envíos validados al endpoint de la página sin bloquear al llamador.

    Args:
        url: URL de la página (el mismo endpoint recibe el POST)
        session: Objeto compatible con requests.Session
        timeout: Timeout por petición, en segundos
        on_result: Callback invocado con el SubmissionResult al terminar
    """

    def __init__(
        self,
        url: str,
        session=None,
        timeout: float = DEFAULT_SUBMIT_TIMEOUT,
        on_result: Optional[Callable[[SubmissionResult], None]] = None,
    ):
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout
        self.on_result = on_result
        self._lock = threading.Lock()
        self._status = SubmissionStatus.IDLE
        self._inflight: Optional[Future] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="contact-transport")

    @property
    def status(self) -> SubmissionStatus:
        with self._lock:
            return self._status

    @property
    def busy(self) -> bool:
        return self.status is not SubmissionStatus.IDLE

    def _set_status(self, status: SubmissionStatus) -> None:
        with self._lock:
            self._status = status

    def send(self, submission: ContactSubmission) -> Future:
        """
        Inicia el envío y retorna un Future con el SubmissionResult.

        Mientras haya un envío en curso se retorna ese mismo Future.
        """
        with self._lock:
            if self._inflight is not None:
                return self._inflight
            self._status = SubmissionStatus.SUBMITTING
            self._inflight = self._executor.submit(self._deliver, submission.as_form())
            return self._inflight

    def _deliver(self, payload: Dict[str, str]) -> SubmissionResult:
        try:
            try:
                response = self.session.post(
                    self.url,
                    data=payload,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as exc:
                logger.warning(
                    "No se pudo enviar el formulario de contacto: %s", exc,
                    extra={
                        "event": "contact.transport_failed",
                        "url": self.url,
                        "error_type": type(exc).__name__,
                    },
                )
                result = _failure(None, UNAVAILABLE_DESCRIPTION)
            else:
                self._set_status(SubmissionStatus.LOADING)
                result = inspect_response(response)
        finally:
            # idle y sin envío en curso a la vez: el siguiente send() es nuevo.
            with self._lock:
                self._status = SubmissionStatus.IDLE
                self._inflight = None

        if self.on_result is not None:
            self.on_result(result)
        return result

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
