"""Tests for the HTTP surface."""

from datetime import datetime
from unittest.mock import Mock, patch

from welcome_mailer.app import create_app
from welcome_mailer.config import Settings
from welcome_mailer.providers.mock import MockEmailProvider
from welcome_mailer.providers.sendgrid import SendGridProvider


class TestSendWelcome:
    """Tests for POST /send-welcome."""

    def test_success(self, client, mock_provider):
        response = client.post("/send-welcome", json={"nome": "Ana", "email": "ana@example.com"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["sucesso"] is True
        assert data["emailId"] == "abc123"
        assert "Ana" in data["mensagem"]
        assert len(mock_provider.sent) == 1

    def test_form_encoded_body(self, client, mock_provider):
        response = client.post("/send-welcome", data={"nome": "Ana", "email": "ana@example.com"})

        assert response.status_code == 200
        assert mock_provider.sent[0].recipient == "ana@example.com"

    def test_name_with_nested_placeholder(self, client, mock_provider):
        response = client.post(
            "/send-welcome", json={"nome": "{{{{nome}}nome}}Ana", "email": "ana@example.com"}
        )

        assert response.status_code == 200
        message = mock_provider.sent[0]
        assert message.text_body == "Olá, Ana! Tchau, Ana."
        for part in (message.subject, message.text_body, message.html_body):
            assert "{{nome}}" not in part

    def test_name_too_short(self, client, mock_provider):
        response = client.post("/send-welcome", json={"nome": "A", "email": "ana@example.com"})

        assert response.status_code == 400
        assert response.get_json() == {
            "sucesso": False,
            "mensagem": "Nome deve ter pelo menos 2 caracteres",
        }
        assert len(mock_provider.sent) == 0

    def test_missing_fields(self, client, mock_provider):
        response = client.post("/send-welcome", json={"nome": "Ana"})

        assert response.status_code == 400
        assert response.get_json()["mensagem"] == "Nome e email são obrigatórios"
        assert len(mock_provider.sent) == 0

    def test_invalid_email(self, client):
        response = client.post("/send-welcome", json={"nome": "Ana", "email": "foo@bar"})

        assert response.status_code == 400
        assert response.get_json()["mensagem"] == "Formato de email inválido"

    def test_malformed_json(self, client):
        response = client.post(
            "/send-welcome", data="{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.get_json()["sucesso"] is False

    def test_json_array_body(self, client):
        response = client.post("/send-welcome", json=["Ana", "ana@example.com"])
        assert response.status_code == 400

    def test_provider_raises(self, settings, welcome_template):
        provider = Mock()
        provider.name = "broken"
        provider.send.side_effect = RuntimeError("provider internals: api key re_123 invalid")
        client = create_app(settings, provider=provider, template=welcome_template).test_client()

        response = client.post("/send-welcome", json={"nome": "Ana", "email": "ana@example.com"})

        assert response.status_code == 500
        data = response.get_json()
        assert data == {"sucesso": False, "mensagem": "Erro interno do servidor ao enviar email"}
        assert "re_123" not in response.get_data(as_text=True)

    def test_provider_failure(self, settings, welcome_template):
        provider = MockEmailProvider("sender@example.com", fail_with="domain not verified")
        client = create_app(settings, provider=provider, template=welcome_template).test_client()

        response = client.post("/send-welcome", json={"nome": "Ana", "email": "ana@example.com"})

        assert response.status_code == 500
        assert "domain" not in response.get_data(as_text=True)


    @patch("welcome_mailer.providers.sendgrid.SendGridAPIClient")
    def test_sendgrid_without_message_id(self, client_cls, settings, welcome_template):
        client_cls.return_value.send.return_value = Mock(status_code=202, headers={})
        provider = SendGridProvider("sender@example.com", "SG.key")
        client = create_app(settings, provider=provider, template=welcome_template).test_client()

        response = client.post("/send-welcome", json={"nome": "Ana", "email": "ana@example.com"})

        assert response.status_code == 500
        assert response.get_json()["sucesso"] is False
        assert "emailId" not in response.get_json()

class TestStatus:
    """Tests for GET /api/status."""

    def test_status(self, client):
        response = client.get("/api/status")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "online"
        assert data["mensagem"] == "Sistema de Boas-Vindas funcionando!"
        assert data["timestamp"].endswith("Z")
        datetime.fromisoformat(data["timestamp"][:-1])


class TestRouting:
    """Tests for static pages, unknown routes and CORS."""

    def test_index(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert b'id="welcomeForm"' in response.data

    def test_static_asset(self, client):
        response = client.get("/script.js")

        assert response.status_code == 200
        assert b"/send-welcome" in response.data

    def test_unknown_route(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.get_json() == {"sucesso": False, "mensagem": "Rota não encontrada"}

    def test_wrong_method_is_not_found(self, client):
        response = client.post("/api/status")

        assert response.status_code == 404
        assert response.get_json()["sucesso"] is False

    def test_cors_headers(self, client):
        response = client.get("/api/status")
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_preflight(self, client):
        response = client.options(
            "/send-welcome",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert "POST" in response.headers["Access-Control-Allow-Methods"]
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"

    def test_configured_cors_origin(self, mock_provider, welcome_template):
        settings = Settings(
            email_provider="mock", from_email="a@b.co", cors_origin="https://example.com"
        )
        client = create_app(settings, provider=mock_provider, template=welcome_template).test_client()

        response = client.get("/api/status")

        assert response.headers["Access-Control-Allow-Origin"] == "https://example.com"


class TestUnhandledErrors:
    """Tests for the global error handler."""

    def test_unhandled_exception(self, app):
        app.config["TESTING"] = False
        app.config["PROPAGATE_EXCEPTIONS"] = False

        @app.route("/boom")
        def boom():
            raise RuntimeError("secret detail")

        response = app.test_client().get("/boom")

        assert response.status_code == 500
        assert response.get_json() == {"sucesso": False, "mensagem": "Erro interno do servidor"}
        assert b"secret" not in response.data


class TestCreateApp:
    """Tests for the application factory."""

    def test_loads_bundled_template(self):
        settings = Settings(email_provider="mock", from_email="a@b.co")
        app = create_app(settings)

        assert app.welcome_sender.template.name == "welcome"
        assert isinstance(app.welcome_sender.provider, MockEmailProvider)
        assert app.settings is settings
