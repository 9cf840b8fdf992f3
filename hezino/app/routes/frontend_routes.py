"""Frontend routes - serve the contact page and its form submissions."""
from flask import (
    current_app,
    jsonify,
    request,
    redirect,
    url_for,
    flash,
    get_flashed_messages,
    render_template,
)

# Importar el blueprint desde el paquete routes
from . import frontend
from ..services.contact import (
    CONTACT_INVALID_MESSAGE,
    CONTACT_SENT_MESSAGE,
    receive_contact_submission,
)
from ..services.fields import CONTACT_SCHEMA, schema_as_dict

FEEDBACK_CATEGORY = "contact-feedback"


def _empty_form():
    return {rule.field.value: "" for rule in CONTACT_SCHEMA}


def _page_context():
    return {
        "site_brand": current_app.config.get("SITE_BRAND", "hezino."),
        "site_title": current_app.config.get("SITE_TITLE", "hezino"),
        "site_description": current_app.config.get("SITE_DESCRIPTION", ""),
        "fields": CONTACT_SCHEMA,
        "schema": schema_as_dict(),
    }


@frontend.get("/")
def serve_frontend():
    """Sirve la página principal: hero y formulario de contacto."""
    return render_template("index.html", form=_empty_form(), errors={}, **_page_context())


@frontend.post("/")
def contact_submit():
    """
    Recibe el formulario enviado en segundo plano desde la página.

    400 con {"errors": {...}} si algún campo es inválido; 200 sin cuerpo si no.
    """
    _, errors = receive_contact_submission(request.form, channel="fetch")
    if errors:
        return jsonify(errors=errors), 400
    return "", 200


@frontend.post("/contact")
def contact_form_submit():
    """Procesa el formulario de contacto cuando el usuario no tiene JavaScript."""
    submission, errors = receive_contact_submission(request.form, channel="form")

    if errors:
        # Los valores rechazados nunca pasan por la cookie de sesión.
        return (
            render_template(
                "index.html",
                success=False,
                message=CONTACT_INVALID_MESSAGE,
                errors=errors,
                form={**_empty_form(), **submission.as_form()},
                **_page_context(),
            ),
            400,
        )

    flash({"success": True, "message": CONTACT_SENT_MESSAGE}, FEEDBACK_CATEGORY)
    return redirect(url_for('frontend.contact_feedback', status='ok'))


@frontend.get("/contact/result")
def contact_feedback():
    """Muestra el resultado del envío clásico del formulario de contacto."""
    feedback = get_flashed_messages(category_filter=[FEEDBACK_CATEGORY])
    payload = feedback[-1] if feedback else None
    if not isinstance(payload, dict):
        return redirect(url_for('frontend.serve_frontend'))

    return render_template(
        "index.html",
        success=bool(payload.get("success")),
        message=payload.get("message") or "",
        errors={},
        form=_empty_form(),
        **_page_context(),
    )
