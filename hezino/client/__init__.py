"""
Cliente Python del formulario de contacto.

Replica el flujo de la página: valida con el esquema canónico antes de enviar
y solo notifica éxito después de inspeccionar la respuesta del servidor.
"""
from .form import ContactForm, validate_form
from .transport import (
    Notification,
    SubmissionResult,
    SubmissionStatus,
    SubmissionTransport,
)

__all__ = [
    "ContactForm",
    "Notification",
    "SubmissionResult",
    "SubmissionStatus",
    "SubmissionTransport",
    "validate_form",
]
