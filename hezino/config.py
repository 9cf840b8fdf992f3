"""Application configuration values."""
import os
import sys
import json
from typing import List
from pathlib import Path
from dotenv import load_dotenv


# --- Cargar variables de entorno ---
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "stage": "staging",
    "staging": "staging",
    "testing": "test",
    "tests": "test",
    "pytest": "test",
    "test": "test",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

DEFAULT_SUBMIT_TIMEOUT = 10.0


def _normalize_env(value: str) -> str:
    normalized = _ENV_ALIASES.get(value.strip().lower(), value.strip().lower())
    return normalized or "production"


def detect_runtime_env() -> str:
    """Determina el entorno actual (production, staging, development, test)."""
    explicit = (
        os.getenv("APP_ENV")
        or os.getenv("FLASK_ENV")
        or os.getenv("ENV")
        or ""
    ).strip()
    if explicit:
        return _normalize_env(explicit)

    if os.getenv("PYTEST_CURRENT_TEST") or any("pytest" in arg for arg in sys.argv):
        return "test"

    debug_flag = os.getenv("FLASK_DEBUG", "").strip().lower()
    if debug_flag in _TRUTHY:
        return "development"

    return "production"


def parse_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return default


def parse_timeout(value, default: float = DEFAULT_SUBMIT_TIMEOUT) -> float:
    """Convierte un timeout a float positivo; usa el default si es inválido."""
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return default
    return timeout if timeout > 0 else default


def init_app_config(app) -> None:
    """Aplica valores derivados del entorno sin forzar evaluación temprana."""
    runtime_env = _normalize_env(
        str(app.config.get("APP_ENV", "") or app.config.get("ENV", "")).strip()
        or detect_runtime_env()
    )
    app.config["APP_ENV"] = runtime_env
    app.config["ENV"] = runtime_env

    if "TESTING" not in app.config:
        app.config["TESTING"] = runtime_env == "test"
    if "DEBUG" not in app.config:
        app.config["DEBUG"] = runtime_env == "development"

    # La clave secreta firma la sesión donde viaja el resultado del formulario clásico.
    secret_key = app.config.get("SECRET_KEY") or os.getenv("SECRET_KEY")
    if runtime_env == "production":
        if not secret_key or secret_key == "dev-secret-key":
            raise RuntimeError(
                "FATAL: SECRET_KEY no está definida para producción. "
                "Establece SECRET_KEY con un valor aleatorio y seguro antes de iniciar la aplicación."
            )
    if secret_key:
        app.config["SECRET_KEY"] = secret_key

    app.config["CONTACT_SUBMIT_TIMEOUT"] = parse_timeout(
        app.config.get("CONTACT_SUBMIT_TIMEOUT", DEFAULT_SUBMIT_TIMEOUT)
    )
    app.config["CORS_SUPPORTS_CREDENTIALS"] = parse_bool(
        app.config.get("CORS_SUPPORTS_CREDENTIALS"), default=False
    )


def parse_list_env(name: str) -> List[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            return [str(s) for s in json.loads(raw)]
        except ValueError:
            return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    # clave secreta de flask
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    _runtime = detect_runtime_env()
    TESTING = _runtime == "test"
    ENV = _runtime
    DEBUG = _runtime == "development"

    # --- Página ---
    SITE_BRAND = os.getenv("SITE_BRAND", "hezino.")
    SITE_TITLE = os.getenv("SITE_TITLE", "hezino")
    SITE_DESCRIPTION = os.getenv(
        "SITE_DESCRIPTION",
        "Let's create a production-ready application.",
    )

    # CORS para /api/*
    CORS_ORIGINS = parse_list_env('CORS_ORIGINS')
    CORS_SUPPORTS_CREDENTIALS = parse_bool(os.getenv('CORS_SUPPORTS_CREDENTIALS'), default=False)

    # --- Contacto ---
    # Timeout (segundos) del transporte del cliente Python
    CONTACT_SUBMIT_TIMEOUT = parse_timeout(os.getenv('CONTACT_SUBMIT_TIMEOUT'))

    # --- Logging Configuration ---
    LOG_LEVEL = os.getenv('LOG_LEVEL', None)  # None = auto-detect based on APP_ENV
    LOG_JSON_ENABLED = None  # None = auto-detect (True for production, False otherwise)
    _log_json_env = os.getenv('LOG_JSON_ENABLED', '').strip().lower()
    if _log_json_env in _TRUTHY:
        LOG_JSON_ENABLED = True
    elif _log_json_env in _FALSY:
        LOG_JSON_ENABLED = False
    del _log_json_env

    # --- Sentry Configuration ---
    SENTRY_DSN = os.getenv('SENTRY_DSN')
    SENTRY_ENVIRONMENT = os.getenv('SENTRY_ENVIRONMENT')  # None = auto-detect from APP_ENV

    # Sentry traces sample rate (0.0 to 1.0)
    try:
        _traces_sample_rate = float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', '0.1'))
    except ValueError:
        _traces_sample_rate = 0.1
    SENTRY_TRACES_SAMPLE_RATE = max(0.0, min(1.0, _traces_sample_rate))
    del _traces_sample_rate

    # Enable Sentry in development (for testing only)
    SENTRY_ENABLE_IN_DEV = parse_bool(os.getenv('SENTRY_ENABLE_IN_DEV'), default=False)
