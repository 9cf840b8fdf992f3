"""
Servicio de validación y normalización de datos.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Mapping, Optional

from .fields import CONTACT_SCHEMA, ContactField


ValidationErrorMap = Dict[str, str]


def normalize_email(value):
    """
    Normaliza una dirección de email removiendo espacios y convirtiendo a minúsculas.

    Args:
        value: Email a normalizar (None se conserva para distinguir un campo ausente)

    Returns:
        Email normalizado en minúsculas sin espacios, o None
    """
    if value is None:
        return None
    return str(value).strip().lower()


def _as_text(value):
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class ContactSubmission:
    """
    Valores de un envío del formulario de contacto.

    Cada campo es None cuando la clave no llegó en la petición, lo cual es
    distinto de una cadena vacía.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    content: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContactSubmission":
        """
        Construye un envío a partir de `request.form`, un dict JSON, etc.

        Los valores se conservan tal cual llegaron: las longitudes se validan
        sobre el texto original.
        """
        return cls(
            name=_as_text(data.get(ContactField.NAME.value)),
            email=_as_text(data.get(ContactField.EMAIL.value)),
            content=_as_text(data.get(ContactField.CONTENT.value)),
        )

    def normalized(self) -> "ContactSubmission":
        """Copia con el email normalizado; usar solo después de validar."""
        return replace(self, email=normalize_email(self.email))

    def value_of(self, field) -> Optional[str]:
        return getattr(self, ContactField(field).value)

    def as_form(self) -> Dict[str, str]:
        """Valores listos para un cuerpo form-encoded (omite los ausentes)."""
        return {key: value for key, value in asdict(self).items() if value is not None}


def validate_contact_submission(submission: ContactSubmission) -> ValidationErrorMap:
    """
    Valida los datos de un formulario de contacto.

    Args:
        submission: Envío a validar

    Returns:
        Diccionario campo -> mensaje, vacío si todo es válido. Cada campo
        reporta a lo sumo un mensaje: gana la primera regla incumplida.
    """
    errors: ValidationErrorMap = {}
    for rule in CONTACT_SCHEMA:
        message = rule.check(submission.value_of(rule.field))
        if message:
            errors[rule.field.value] = message
    return errors
