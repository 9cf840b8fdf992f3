"""
Esquema canónico de los campos del formulario de contacto.

Única fuente de verdad para las reglas de cada campo: la página (JavaScript),
el cliente Python y los endpoints del servidor consumen estas definiciones.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ContactField(str, Enum):
    """Identificadores de los campos del formulario."""

    NAME = "name"
    EMAIL = "email"
    CONTENT = "content"


# Compatible con `re` de Python y con `RegExp` de JavaScript.
EMAIL_PATTERN = (
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


@dataclass(frozen=True)
class FieldRule:
    """Restricciones de un campo y sus mensajes para el usuario."""

    field: ContactField
    label: str
    input_type: str
    placeholder: str = ""
    required: bool = True
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    message_label: Optional[str] = None

    @property
    def _subject(self) -> str:
        return self.message_label or self.label

    @property
    def required_message(self) -> str:
        return f"{self._subject} is required."

    @property
    def min_length_message(self) -> Optional[str]:
        if self.min_length is None:
            return None
        return f"{self._subject} must have at least {self.min_length} characters."

    @property
    def max_length_message(self) -> Optional[str]:
        if self.max_length is None:
            return None
        return f"{self._subject} must not exceed {self.max_length} characters."

    def check(self, value: Optional[str]) -> Optional[str]:
        """
        Evalúa el valor contra las reglas del campo.

        Returns:
            El mensaje de la primera regla incumplida, o None si es válido.
        """
        if value is None:
            return self.required_message if self.required else None
        if self.min_length is not None and len(value) < self.min_length:
            return self.min_length_message
        if self.max_length is not None and len(value) > self.max_length:
            return self.max_length_message
        if self.pattern is not None and not re.fullmatch(self.pattern, value):
            return self.pattern_message
        return None

    def as_dict(self) -> Dict[str, Any]:
        messages = {
            "required": self.required_message,
            "min_length": self.min_length_message,
            "max_length": self.max_length_message,
            "pattern": self.pattern_message,
        }
        return {
            "name": self.field.value,
            "label": self.label,
            "input_type": self.input_type,
            "placeholder": self.placeholder,
            "required": self.required,
            "min_length": self.min_length,
            "max_length": self.max_length,
            "pattern": self.pattern,
            "messages": {key: msg for key, msg in messages.items() if msg},
        }


CONTACT_SCHEMA: Tuple[FieldRule, ...] = (
    FieldRule(
        field=ContactField.NAME,
        label="Name",
        input_type="text",
        placeholder="Sylvie Brown",
        min_length=2,
        max_length=50,
    ),
    FieldRule(
        field=ContactField.EMAIL,
        label="Email",
        input_type="email",
        placeholder="sylvie@example.com",
        pattern=EMAIL_PATTERN,
        pattern_message="Invalid email.",
    ),
    FieldRule(
        field=ContactField.CONTENT,
        label="Message",
        message_label="Content",
        input_type="textarea",
        placeholder="How can I help you?",
        min_length=12,
        max_length=250,
    ),
)


def schema_as_dict() -> Dict[str, Any]:
    """Serializa el esquema para la página y para `/api/contact/schema`."""
    return {"fields": [rule.as_dict() for rule in CONTACT_SCHEMA]}
