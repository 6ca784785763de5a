"""Shared test fixtures."""

import pytest
from pathlib import Path
import tempfile

from welcome_mailer.app import create_app
from welcome_mailer.config import Settings
from welcome_mailer.models import EmailTemplate
from welcome_mailer.providers.mock import MockEmailProvider


@pytest.fixture
def temp_template_dir():
    """Create a temporary template directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def sample_template_dir(temp_template_dir):
    """Create a sample template on disk."""
    template_dir = Path(temp_template_dir)

    (template_dir / "hello.yaml").write_text(
        'subject: "Hello {{name}}"\nplaceholder: "{{name}}"\ndescription: "Test"\n',
        encoding="utf-8",
    )
    (template_dir / "hello.txt").write_text("Hi {{name}}, {{name}}!", encoding="utf-8")
    (template_dir / "hello.html").write_text(
        "<p>Hi <b>{{name}}</b></p>", encoding="utf-8"
    )
    return template_dir


@pytest.fixture
def welcome_template():
    """In-memory template using the default placeholder."""
    return EmailTemplate(
        subject="Bem-vindo(a), {{nome}}",
        text_body="Olá, {{nome}}! Tchau, {{nome}}.",
        html_body="<p>Olá, <span>{{nome}}</span>!</p>",
    )


@pytest.fixture
def mock_provider():
    """Provider that always succeeds with id abc123."""
    return MockEmailProvider("sender@example.com", message_id="abc123")


@pytest.fixture
def settings():
    """Settings that never reach a real provider."""
    return Settings(email_provider="mock", from_email="sender@example.com")


@pytest.fixture
def app(settings, mock_provider, welcome_template):
    """Flask app wired to the mock provider."""
    app = create_app(settings, provider=mock_provider, template=welcome_template)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
