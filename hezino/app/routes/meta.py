"""Meta endpoints - app metadata."""
from flask import jsonify, current_app

from . import api
from ..services.fields import schema_as_dict


@api.get("/meta/env")
def meta_env():
    """Retorna el entorno de ejecución."""
    env = (current_app.config.get("APP_ENV") or current_app.config.get("ENV") or "production").lower()
    return jsonify({"env": env})


@api.get("/contact/schema")
def contact_schema():
    """Retorna el esquema canónico de los campos del formulario de contacto."""
    return jsonify(schema_as_dict())
