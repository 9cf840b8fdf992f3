"""Contact API - variante JSON del formulario de contacto."""
from flask import jsonify, request

from . import api
from ..services.contact import (
    CONTACT_INVALID_MESSAGE,
    CONTACT_SENT_MESSAGE,
    receive_contact_submission,
)


@api.post("/contact")
def contact_json():
    """API endpoint para formulario de contacto (JSON)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify(success=False, message='Invalid data.', errors={}), 400

    _, errors = receive_contact_submission(data, channel="api")
    if errors:
        return jsonify(
            success=False,
            message=CONTACT_INVALID_MESSAGE,
            errors=errors,
        ), 400

    return jsonify(
        success=True,
        message=CONTACT_SENT_MESSAGE,
        errors={},
    ), 200
