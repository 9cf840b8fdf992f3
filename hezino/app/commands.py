"""Comandos CLI de Flask (`flask --app hezino.run ...`)."""
import json

import click
from flask import Flask

from .services.fields import schema_as_dict


def register_commands(app: Flask) -> None:

    @app.cli.command("contact-schema")
    def contact_schema():
        """Imprime el esquema canónico del formulario de contacto en JSON."""
        click.echo(json.dumps(schema_as_dict(), indent=2, ensure_ascii=False))

    @app.cli.command("contact-send")
    @click.option("--url", default="http://127.0.0.1:5000/", show_default=True, help="URL de la página de contacto.")
    @click.option("--name", default="", help="Nombre del remitente.")
    @click.option("--email", default="", help="Email del remitente.")
    @click.option("--content", default="", help="Mensaje.")
    def contact_send(url: str, name: str, email: str, content: str):
        """Valida y envía un mensaje de contacto como lo haría la página."""
        from hezino.client import ContactForm, SubmissionTransport

        timeout = app.config["CONTACT_SUBMIT_TIMEOUT"]
        with SubmissionTransport(url, timeout=timeout) as transport:
            form = ContactForm(transport, name=name, email=email, content=content)
            future = form.submit()
            if future is None:
                for field_name, message in form.errors.items():
                    click.echo(f"{field_name}: {message}", err=True)
                raise SystemExit(1)

            result = form.wait(future)

        click.echo(f"{result.notification.title}. {result.notification.description}")
        for field_name, message in result.errors.items():
            click.echo(f"{field_name}: {message}", err=True)
        if not result.ok:
            raise SystemExit(1)
