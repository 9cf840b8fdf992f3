"""
Routes package - modular organization of endpoints.
"""
from flask import Blueprint

# Blueprint único para la API
api = Blueprint("api", __name__)

# Blueprint para la página
frontend = Blueprint("frontend", __name__)

# Importar módulos de rutas después de crear blueprints para evitar circular imports
from . import (
    frontend_routes,
    contact,
    health,
    meta,
)

__all__ = ["api", "frontend"]
