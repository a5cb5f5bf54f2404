"""
Email template management utilities.

This module loads the contact email layout from the email_templates/ directory
shipped inside the services package and renders it with submission values.

Templates are cached in memory for warm Lambda invocations.
"""

import html
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

# Module-level cache: {template_name: template_content}
_template_cache: Dict[str, str] = {}

# Path to templates directory (relative to this file)
# src/services/templates.py -> src/services/email_templates/
# Installed as package data alongside this module
TEMPLATES_DIR = Path(__file__).parent / 'email_templates'


def _load_from_filesystem(template_name: str) -> str:
    """
    Load template from local filesystem.

    Args:
        template_name: Name of the template file

    Returns:
        str: Template content

    Raises:
        FileNotFoundError: If template file doesn't exist
    """
    template_path = TEMPLATES_DIR / template_name
    logger.info(f"Loading template from filesystem: {template_path}")

    with open(template_path, 'r', encoding='utf-8') as f:
        content = f.read()

    logger.info(f"Loaded template from filesystem: {len(content)} characters")
    return content


def load_template(template_name: str, use_cache: bool = True) -> str:
    """
    Load template with caching.

    Args:
        template_name: Template file name (e.g., "contact_email.html")
        use_cache: Use cached version if available (default: True)

    Returns:
        str: Template content

    Raises:
        ValueError: If template not found
    """
    if use_cache and template_name in _template_cache:
        return _template_cache[template_name]

    try:
        content = _load_from_filesystem(template_name)
    except FileNotFoundError:
        logger.error(
            f"Template not found: {template_name}. "
            f"Expected location: {TEMPLATES_DIR / template_name}"
        )
        raise ValueError(f"Template '{template_name}' not found")

    _template_cache[template_name] = content
    return content


def render(template: str, escape_html: bool = True, **variables) -> str:
    """
    Render template with variables.

    Uses str.format() to substitute variables. Values are HTML-escaped
    unless escape_html is False. Substituted values are not re-parsed,
    so braces inside them are kept as-is.

    Args:
        template: The template string (with {variable} placeholders)
        escape_html: HTML-escape values before embedding (default: True)
        **variables: Variables to substitute in the template

    Returns:
        str: Rendered template

    Raises:
        ValueError: If a required variable is missing

    Example:
        >>> render("<p>{name}</p>", name="<b>Alice</b>")
        '<p>&lt;b&gt;Alice&lt;/b&gt;</p>'
    """
    escaped_variables = {}
    for key, value in variables.items():
        text = str(value)
        if escape_html:
            text = html.escape(text, quote=True)
        escaped_variables[key] = text

    try:
        return template.format(**escaped_variables)
    except KeyError as e:
        missing_var = str(e).strip("'")
        logger.error(f"Missing variable in template: {missing_var}")
        raise ValueError(f"Missing required variable in template: {missing_var}")


def clear_cache() -> None:
    """Clear the template cache."""
    _template_cache.clear()
    logger.info("Template cache cleared")
