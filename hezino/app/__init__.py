"""Application factory for the contact page service."""
from pathlib import Path
from flask import Flask
from hezino.config import Config, init_app_config

from .commands import register_commands
from .extensions import cors
from .logging_config import configure_logging, setup_request_logging

PROJECT_ROOT = Path(__file__).resolve().parents[2]
PUBLIC_DIR = PROJECT_ROOT / "frontend" / "public"
STATIC_DIR = PROJECT_ROOT / "frontend" / "src"


def init_sentry(app: Flask) -> None:
    """
    Inicializa Sentry para monitoreo de errores.

    Solo se activa si:
    - SENTRY_DSN está configurado
    - El entorno es 'production', 'staging', o 'development' con SENTRY_ENABLE_IN_DEV=true
    """
    sentry_dsn = app.config.get('SENTRY_DSN')
    if not sentry_dsn:
        app.logger.info("Sentry no inicializado: SENTRY_DSN no configurado")
        return

    runtime_env = app.config.get('APP_ENV', 'production')
    enable_in_dev = app.config.get('SENTRY_ENABLE_IN_DEV', False)

    if runtime_env not in {'production', 'staging'}:
        if runtime_env == 'development' and enable_in_dev:
            app.logger.info("Sentry habilitado en development (SENTRY_ENABLE_IN_DEV=true)")
        else:
            app.logger.info(f"Sentry no inicializado: entorno '{runtime_env}' no es production/staging")
            return

    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
    except ImportError:
        app.logger.warning("Sentry SDK no está instalado. Ejecuta: pip install 'sentry-sdk[flask]'")
        return

    sentry_environment = app.config.get('SENTRY_ENVIRONMENT') or runtime_env
    traces_sample_rate = app.config.get('SENTRY_TRACES_SAMPLE_RATE', 0.1)

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=sentry_environment,
        integrations=[FlaskIntegration()],
        traces_sample_rate=traces_sample_rate,
        # Los envíos del formulario contienen datos personales
        send_default_pii=False,
        release=app.config.get('APP_VERSION'),
    )
    app.logger.info(
        f"Sentry inicializado correctamente "
        f"[environment={sentry_environment}, traces_sample_rate={traces_sample_rate}]"
    )


def create_app(config_object=Config) -> Flask:
    """
    Fábrica de la aplicación Flask.
    Configura la app
    """
    app = Flask(
        __name__,
        static_folder=str(STATIC_DIR),
        static_url_path="/static",
        template_folder=str(PUBLIC_DIR),
    )

    app.config.from_object(config_object)
    init_app_config(app)

    # Configure structured logging early
    configure_logging(app)
    setup_request_logging(app)

    init_sentry(app)

    runtime_env = app.config.get("APP_ENV", "production")
    cors_origins = app.config.get("CORS_ORIGINS") or []

    if runtime_env == "production":
        if not cors_origins:
            raise RuntimeError(
                "FATAL: CORS_ORIGINS no está configurado para producción. "
                "Define una lista de dominios permitidos antes de iniciar la aplicación."
            )
    if not cors_origins:
        cors_origins = "*"

    cors.init_app(
        app,
        resources={r"/api/*": {"origins": cors_origins}},
        supports_credentials=app.config["CORS_SUPPORTS_CREDENTIALS"],
    )

    # Importar blueprints desde el paquete routes modular
    from .routes import api as api_blueprint
    from .routes import frontend as frontend_blueprint

    app.register_blueprint(frontend_blueprint)
    app.register_blueprint(api_blueprint, url_prefix="/api")

    register_commands(app)

    return app
