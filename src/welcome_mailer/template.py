"""Email template loading and placeholder rendering."""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from markupsafe import escape

from .exceptions import TemplateError
from .models import EmailTemplate, RenderedMessage

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_PLACEHOLDER = "{{nome}}"


class TemplateLoader:
    """Loads email templates from a directory.

    A template named ``welcome`` is made of ``welcome.yaml`` (subject,
    placeholder, description), ``welcome.txt`` and ``welcome.html``.
    """

    def __init__(self, template_dir: Optional[str] = None):
        """Initialize the template loader.

        Args:
            template_dir: Path to the directory containing templates
        """
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        if not self.template_dir.is_dir():
            raise TemplateError(f"Template directory does not exist: {self.template_dir}")
        self._cache: Dict[str, EmailTemplate] = {}

    def load_template(self, template_name: str) -> EmailTemplate:
        """Load a template and its metadata.

        Args:
            template_name: Name of the template (file stem)

        Returns:
            Immutable EmailTemplate

        Raises:
            TemplateError: If the template cannot be loaded
        """
        if template_name in self._cache:
            return self._cache[template_name]

        metadata = self._load_metadata(template_name)
        text_body = self._read_body(template_name, "txt")
        html_body = self._read_body(template_name, "html")
        if not (text_body or "").strip() and not (html_body or "").strip():
            raise TemplateError(f"Template has no non-empty text or html body: {template_name}")

        subject = metadata.get("subject")
        if not subject:
            raise TemplateError(f"Template metadata has no subject: {template_name}")

        template = EmailTemplate(
            subject=str(subject),
            text_body=text_body or "",
            html_body=html_body or "",
            placeholder=str(metadata.get("placeholder") or DEFAULT_PLACEHOLDER),
            name=template_name,
            description=metadata.get("description"),
        )
        self._cache[template_name] = template
        return template

    def list_templates(self) -> List[str]:
        """List all available templates.

        Returns:
            Sorted list of template names
        """
        return sorted(path.stem for path in self.template_dir.glob("*.yaml"))

    def _load_metadata(self, template_name: str) -> dict:
        metadata_path = self.template_dir / f"{template_name}.yaml"
        if not metadata_path.exists():
            raise TemplateError(f"Template metadata not found: {metadata_path}")

        try:
            with open(metadata_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TemplateError(f"Error parsing metadata {metadata_path}: {e}") from e

        if not isinstance(data, dict):
            raise TemplateError(f"Empty or malformed metadata file: {metadata_path}")
        return data

    def _read_body(self, template_name: str, extension: str) -> Optional[str]:
        path = self.template_dir / f"{template_name}.{extension}"
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateError(f"Error reading {path}: {e}") from e


def render_template(
    template: EmailTemplate, name: str, escape_html: bool = True
) -> RenderedMessage:
    """Substitute every occurrence of the placeholder with ``name``.

    The subject and text body receive the name verbatim. The HTML body
    receives it HTML-escaped unless ``escape_html`` is False.

    Args:
        template: Template to render
        name: Trimmed recipient name
        escape_html: Escape markup-significant characters in the HTML body

    Returns:
        RenderedMessage with no placeholder left
    """
    placeholder = template.placeholder
    # a name that carries the token itself must not leave it behind,
    # including tokens that only appear once an inner one is removed
    while placeholder in name:
        name = name.replace(placeholder, "")
    html_name = str(escape(name)) if escape_html else name

    return RenderedMessage(
        subject=template.subject.replace(placeholder, name),
        text_body=template.text_body.replace(placeholder, name),
        html_body=template.html_body.replace(placeholder, html_name),
    )
