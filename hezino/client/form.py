"""Estado del formulario de contacto y validación previa al envío."""
from __future__ import annotations

from concurrent.futures import Future
from typing import Dict, Mapping, Optional

from hezino.app.services.fields import CONTACT_SCHEMA, ContactField
from hezino.app.services.validate import (
    ContactSubmission,
    ValidationErrorMap,
    validate_contact_submission,
)

from .transport import SubmissionResult, SubmissionTransport

SEND_LABEL = "Send"
SENDING_LABEL = "Sending..."


def validate_form(values: Mapping[str, str]) -> ValidationErrorMap:
    """Valida los valores del formulario con el esquema canónico."""
    return validate_contact_submission(ContactSubmission.from_mapping(values))


class ContactForm:
    """
    Valores vivos del formulario (por defecto cadenas vacías) y sus errores.

    `submit()` solo llega al transporte si la validación local pasa; los
    errores que devuelva el servidor se reflejan en `errors` al terminar.
    """

    def __init__(self, transport: Optional[SubmissionTransport] = None, **values: str):
        self.transport = transport
        self.values: Dict[str, str] = {rule.field.value: "" for rule in CONTACT_SCHEMA}
        for key, value in values.items():
            self.set(key, value)
        self.errors: ValidationErrorMap = {}
        self.last_result: Optional[SubmissionResult] = None

    def set(self, field, value: str) -> None:
        self.values[ContactField(field).value] = value

    def validate(self) -> ValidationErrorMap:
        self.errors = validate_form(self.values)
        return self.errors

    @property
    def submit_label(self) -> str:
        return SENDING_LABEL if self.busy else SEND_LABEL

    @property
    def busy(self) -> bool:
        return self.transport is not None and self.transport.busy

    def submit(self) -> Optional[Future]:
        """
        Intenta enviar el formulario.

        Returns:
            None si la validación local falla (no se envía nada); si no, el
            Future del transporte con el SubmissionResult.
        """
        if self.validate():
            return None
        if self.transport is None:
            raise RuntimeError("ContactForm.submit() requiere un SubmissionTransport")

        future = self.transport.send(ContactSubmission.from_mapping(self.values))
        future.add_done_callback(self._apply_result)
        return future

    def _apply_result(self, future: Future) -> None:
        if future.cancelled() or future.exception() is not None:
            return
        result = future.result()
        self.last_result = result
        self.errors = dict(result.errors)

    def wait(self, future: Future, timeout: Optional[float] = None) -> SubmissionResult:
        """Bloquea hasta que termine el envío y aplica su resultado al formulario."""
        result = future.result(timeout=timeout)
        self.last_result = result
        self.errors = dict(result.errors)
        return result
