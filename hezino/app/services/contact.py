"""
Servicio de recepción de envíos del formulario de contacto.

Centraliza la construcción del envío, la validación y el registro del
resultado para los tres canales (fetch, formulario clásico y API JSON).
"""
from typing import Any, Mapping, Tuple

from flask import current_app

from .validate import ContactSubmission, ValidationErrorMap, validate_contact_submission


CONTACT_INVALID_MESSAGE = "Your message could not be sent. Please review the highlighted fields."
CONTACT_SENT_MESSAGE = "Email has been sent. Thank you."


def receive_contact_submission(
    data: Mapping[str, Any],
    channel: str,
) -> Tuple[ContactSubmission, ValidationErrorMap]:
    """
    Construye y valida un envío recibido por el servidor.

    Args:
        data: Mapeo con los campos recibidos (request.form o JSON)
        channel: Canal de entrada, solo para los logs ("fetch", "form", "api")

    Returns:
        Tupla (envío, errores). Si es válido el envío ya viene normalizado;
        si no, conserva los valores originales para devolverlos al formulario.
    """
    submission = ContactSubmission.from_mapping(data)
    errors = validate_contact_submission(submission)

    # Nunca se registra el contenido del mensaje.
    if errors:
        current_app.logger.info(
            "Envío de contacto rechazado",
            extra={
                "event": "contact.rejected",
                "channel": channel,
                "invalid_fields": sorted(errors),
            },
        )
    else:
        current_app.logger.info(
            "Envío de contacto aceptado",
            extra={
                "event": "contact.accepted",
                "channel": channel,
                "content_length": len(submission.content or ""),
            },
        )
        submission = submission.normalized()
    return submission, errors
