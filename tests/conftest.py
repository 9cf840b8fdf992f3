# tests/conftest.py
import os
import sys
import pathlib
import ast
import inspect
import re
import textwrap
from collections import Counter, defaultdict
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import pytest

# ---------- PATH raíz del repo ----------
THIS = pathlib.Path(__file__).resolve()
ROOT = THIS.parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hezino.app import create_app


# ---------- Config de pruebas ----------
class TestConfig:
    TESTING = True
    APP_ENV = "test"
    LOG_LEVEL = None  # Auto-detect per APP_ENV during tests
    SECRET_KEY = "testing-secret"
    SITE_BRAND = "hezino."
    SITE_TITLE = "hezino"
    SITE_DESCRIPTION = "Let's create a production-ready application."
    CORS_ORIGINS = []
    CONTACT_SUBMIT_TIMEOUT = 2.0
    SENTRY_DSN = None


@pytest.fixture(scope="session", autouse=True)
def _clean_env():
    """Fuerza el entorno de pruebas y restaura las variables al terminar."""
    original_app_env = os.environ.get("APP_ENV")
    os.environ["APP_ENV"] = "test"

    yield

    if original_app_env is None:
        os.environ.pop("APP_ENV", None)
    else:
        os.environ["APP_ENV"] = original_app_env


@pytest.fixture(scope="session")
def app():
    return create_app(TestConfig)


@pytest.fixture()
def client(app):
    return app.test_client(use_cookies=True)


@pytest.fixture()
def valid_payload():
    return {
        "name": "Sylvie Brown",
        "email": "sylvie@example.com",
        "content": "How can I help you today?",
    }


class _FlaskResponse:
    """Adapta la respuesta del test client de Flask a la interfaz de requests."""

    def __init__(self, response):
        self.status_code = response.status_code
        self._response = response

    def json(self):
        payload = self._response.get_json(silent=True)
        if payload is None:
            raise ValueError("La respuesta no contiene JSON")
        return payload


class FlaskSession:
    """
    Sesión compatible con requests.Session que despacha al test client.

    Registra cada POST en `calls` para verificar qué se envió.
    """

    def __init__(self, client):
        self.client = client
        self.calls = []
        self.closed = False

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": dict(data or {}), "headers": headers, "timeout": timeout})
        return _FlaskResponse(self.client.post(url, data=data, headers=headers))

    def close(self):
        self.closed = True


@pytest.fixture()
def flask_session(client):
    return FlaskSession(client)


# ---------- Narrativa automática de pruebas ----------
HTTP_METHODS = {"get", "post", "put", "delete", "patch", "options"}
FEATURE_PREFIX = "tests"
_TEST_NARRATIVES = {}
_TERMINAL_REPORTER = None
_SUMMARY_DATA = {
    "total": 0,
    "outcomes": Counter(),
    "features": defaultdict(lambda: {"total": 0, "outcomes": Counter(), "descriptions": []}),
}


@dataclass(frozen=True)
class TestNarrative:
    feature: str
    description: str
    scope: str
    detail: Optional[str] = None


def pytest_runtest_setup(item):
    """Antes de cada prueba, prepara la ficha descriptiva que se imprime en el reporte."""
    global _TERMINAL_REPORTER
    if _TERMINAL_REPORTER is None:
        _TERMINAL_REPORTER = item.config.pluginmanager.get_plugin("terminalreporter")
    _TEST_NARRATIVES[item.nodeid] = _build_test_narrative(item)


def pytest_runtest_logreport(report):
    if report.when != "call":
        return
    info = _TEST_NARRATIVES.pop(report.nodeid, None)
    if info is None:
        return
    outcome = {
        "passed": "PASÓ",
        "failed": "FALLÓ",
        "skipped": "SE OMITIÓ",
    }.get(report.outcome, report.outcome.upper())
    block = [
        f"[Prueba] {report.nodeid}",
        f"  Resultado    : {outcome}",
        f"  Funcionalidad: {info.feature}",
        f"  Descripción  : {info.description}",
        f"  Alcance      : {info.scope}",
    ]
    if info.detail:
        block.append(f"  Cobertura    : {info.detail}")
    if _TERMINAL_REPORTER:
        _TERMINAL_REPORTER.write_line("\n".join(block))

    _SUMMARY_DATA["total"] += 1
    _SUMMARY_DATA["outcomes"][report.outcome] += 1
    bucket = _SUMMARY_DATA["features"][info.feature]
    bucket["total"] += 1
    bucket["outcomes"][report.outcome] += 1
    if len(bucket["descriptions"]) < 3 and info.description not in bucket["descriptions"]:
        bucket["descriptions"].append(info.description)


def _build_test_narrative(item) -> TestNarrative:
    fixtures = set(getattr(item, "fixturenames", []))
    http_calls = _extract_http_calls(item.function)
    feature = _infer_feature_name(item)

    doc = inspect.getdoc(getattr(item, "function", None)) or ""
    if doc:
        description = doc.strip().splitlines()[0]
    else:
        human_name = re.sub(r"[_\s]+", " ", re.sub(r"^test_", "", item.name)).strip()
        description = f"Valida el escenario '{human_name}' dentro de {feature.lower()}."

    if fixtures & {"client", "flask_session"}:
        scope = "Prueba funcional / integración"
    elif "app" in fixtures:
        scope = "Prueba de integración"
    else:
        scope = "Prueba unitaria"

    detail = None
    if http_calls:
        labels = list(dict.fromkeys(f"{method} {path}" for method, path in http_calls))
        detail = "Interacciones HTTP: " + ", ".join(labels)

    return TestNarrative(feature=feature, description=description, scope=scope, detail=detail)


def _infer_feature_name(item):
    try:
        rel = pathlib.Path(str(item.fspath)).resolve().relative_to(ROOT)
    except ValueError:
        rel = pathlib.Path(str(item.fspath)).name
    slug = str(rel)
    if slug.startswith(f"{FEATURE_PREFIX}/"):
        slug = slug[len(FEATURE_PREFIX) + 1 :]
    slug = slug.replace("test_", "").replace(".py", "")
    words = slug.replace("_", " ").split()
    return " ".join(w.upper() if len(w) <= 3 else w.capitalize() for w in words) or "Suite de pruebas"


@lru_cache(maxsize=None)
def _extract_http_calls(func):
    if func is None:
        return ()
    try:
        tree = ast.parse(textwrap.dedent(inspect.getsource(func)))
    except (OSError, TypeError, SyntaxError):
        return ()
    calls = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func_node = node.func
        if (
            isinstance(func_node, ast.Attribute)
            and isinstance(func_node.value, ast.Name)
            and func_node.value.id == "client"
            and func_node.attr.lower() in HTTP_METHODS
            and node.args
            and isinstance(node.args[0], ast.Constant)
            and isinstance(node.args[0].value, str)
        ):
            calls.append((func_node.attr.upper(), node.args[0].value))
    return tuple(calls)


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    if not _SUMMARY_DATA["total"]:
        return
    outcomes = _SUMMARY_DATA["outcomes"]
    terminalreporter.write_sep("-", "Resumen general de pruebas")
    terminalreporter.write_line(
        f"Total: {_SUMMARY_DATA['total']} | Pasaron: {outcomes.get('passed', 0)} | "
        f"Fallaron: {outcomes.get('failed', 0)} | Omitidas: {outcomes.get('skipped', 0)}"
    )
    for feature in sorted(_SUMMARY_DATA["features"]):
        bucket = _SUMMARY_DATA["features"][feature]
        desc = bucket["descriptions"][0] if bucket["descriptions"] else "Escenarios variados."
        terminalreporter.write_line(
            f" - {feature}: {bucket['total']} pruebas "
            f"(P:{bucket['outcomes'].get('passed', 0)} "
            f"F:{bucket['outcomes'].get('failed', 0)} "
            f"S:{bucket['outcomes'].get('skipped', 0)})"
        )
        terminalreporter.write_line(f"   Ejemplo: {desc}")
