"""
Services package - reusable business logic and utilities.

Este paquete contiene funciones helper compartidas que no dependen de blueprints,
organizadas por dominio funcional.
"""

__all__ = [
    "contact",
    "fields",
    "request_utils",
    "validate",
]
