"""Health check del servicio."""

import os
from datetime import datetime, timezone
from flask import jsonify

from . import api


def classify_load(load_ratio):
    if load_ratio is None:
        return "unknown"
    if load_ratio <= 0.6:
        return "ok"
    if load_ratio <= 1.5:
        return "warning"
    return "critical"


@api.get("/health")
def health_check():
    """Verifica estado del sistema: carga del servidor por núcleo."""
    load_ratio = None
    load_value = None
    cpu_count = os.cpu_count() or 1
    try:
        load_value = os.getloadavg()[0]
        load_ratio = load_value / max(cpu_count, 1)
    except (AttributeError, OSError):
        load_ratio = None

    indicators = {"system": classify_load(load_ratio)}
    overall = "degraded" if indicators["system"] in {"warning", "critical"} else "ok"

    payload = {
        "status": overall,
        "metrics": {
            "system_load": {
                "ratio": round(load_ratio, 2) if load_ratio is not None else None,
                "cores": cpu_count,
                "raw": round(load_value, 2) if load_value is not None else None,
            },
        },
        "indicators": indicators,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return jsonify(payload), 200
