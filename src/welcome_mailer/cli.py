"""CLI commands for the welcome mailer."""

import json
import logging

import click

from .config import load_settings
from .exceptions import WelcomeMailerError
from .logging import setup_logging
from .models import DispatchStatus
from .providers import create_provider
from .sender import WelcomeSender
from .template import TemplateLoader

logger = logging.getLogger(__name__)


def _settings(ctx: click.Context, **overrides):
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = load_settings(ctx.obj.get("env_file"), **overrides)
    except WelcomeMailerError as e:
        raise click.ClickException(str(e))
    setup_logging(settings)
    return settings


def _welcome_sender(settings) -> WelcomeSender:
    try:
        template = TemplateLoader(settings.templates_dir).load_template(settings.template_name)
        provider = create_provider(settings)
    except WelcomeMailerError as e:
        raise click.ClickException(str(e))
    return WelcomeSender(provider, template, escape_html=settings.escape_html)


@click.group()
@click.option("--env-file", type=click.Path(dir_okay=False), help="Path to .env file")
@click.pass_context
def main(ctx, env_file):
    """Welcome email service."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file


@main.command()
@click.option("--host", help="Interface to listen on (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, help="Port to listen on (default: PORT or 3000)")
@click.option("--debug/--no-debug", default=None, help="Enable Flask debug mode")
@click.option(
    "--check/--no-check", default=True, help="Check the provider credentials before starting"
)
@click.pass_context
def serve(ctx, host, port, debug, check):
    """Run the HTTP server."""
    from .app import create_app

    settings = _settings(ctx, host=host, port=port, debug=debug)
    try:
        app = create_app(settings)
    except WelcomeMailerError as e:
        raise click.ClickException(str(e))

    logger.info("Servidor iniciado - Sistema de Boas-Vindas")
    logger.info(f"Acesse: http://localhost:{settings.port}")
    logger.info(f"Status: http://localhost:{settings.port}/api/status")
    logger.info(f"Provedor de email: {settings.email_provider}")
    if check and not app.welcome_sender.provider.validate_connection():
        logger.warning(
            f"Provider {settings.email_provider} rejected the connection check; "
            "sends will fail until its API key is fixed"
        )

    app.run(host=settings.host, port=settings.port, debug=settings.debug)


@main.command()
@click.option("--nome", "name", required=True, help="Recipient name")
@click.option("--template", "template_name", help="Template name (default: TEMPLATE_NAME)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "html", "both"]),
    default="both",
    help="Which body to print",
)
@click.pass_context
def preview(ctx, name, template_name, output_format):
    """Render the template for NAME without sending it."""
    settings = _settings(ctx, template_name=template_name, email_provider="mock")
    rendered = _welcome_sender(settings).preview(name)

    click.echo(f"Subject: {rendered.subject}")
    if output_format in ("text", "both"):
        click.echo("\n--- text ---")
        click.echo(rendered.text_body)
    if output_format in ("html", "both"):
        click.echo("\n--- html ---")
        click.echo(rendered.html_body)


@main.command("send-test")
@click.option("--nome", "name", required=True, help="Recipient name")
@click.option("--email", required=True, help="Recipient address")
@click.option(
    "--provider",
    type=click.Choice(["resend", "sendgrid", "mock"]),
    help="Provider to use (default: EMAIL_PROVIDER)",
)
@click.pass_context
def send_test(ctx, name, email, provider):
    """Send one welcome email and print the outcome."""
    settings = _settings(ctx, email_provider=provider)
    outcome = _welcome_sender(settings).dispatch({"nome": name, "email": email})

    body, status = outcome.to_response()
    click.echo(json.dumps({"status": status, **body}, ensure_ascii=False, indent=2))
    if outcome.status != DispatchStatus.CONFIRMED:
        ctx.exit(1)


@main.command()
@click.pass_context
def templates(ctx):
    """List available templates."""
    settings = _settings(ctx)
    try:
        names = TemplateLoader(settings.templates_dir).list_templates()
    except WelcomeMailerError as e:
        raise click.ClickException(str(e))

    if not names:
        click.echo("No templates found.")
        return
    for name in names:
        marker = "*" if name == settings.template_name else " "
        click.echo(f"{marker} {name}")


if __name__ == "__main__":
    main()
