"""
Tests for email template management service.
"""

import pytest
from pathlib import Path
from unittest.mock import patch, mock_open
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from services import templates


class TestLoadFromFilesystem:
    """Test loading templates from local filesystem."""

    @patch('builtins.open', new_callable=mock_open, read_data='<p>{name}</p>')
    def test_load_from_filesystem_success(self, mock_file):
        """Test successful template load from filesystem."""
        result = templates._load_from_filesystem('contact_email.html')

        assert result == '<p>{name}</p>'
        mock_file.assert_called_once_with(
            templates.TEMPLATES_DIR / 'contact_email.html', 'r', encoding='utf-8'
        )

    def test_templates_dir_inside_services_package(self):
        """Test templates resolve next to the installed services package."""
        package_dir = Path(templates.__file__).resolve().parent

        assert templates.TEMPLATES_DIR.resolve() == package_dir / 'email_templates'
        assert (templates.TEMPLATES_DIR / 'contact_email.html').is_file()
        assert (templates.TEMPLATES_DIR / 'contact_email.txt').is_file()

    def test_templates_declared_as_package_data(self):
        """Test pyproject ships the templates in the services package."""
        pyproject = Path(__file__).resolve().parent.parent / 'pyproject.toml'
        content = pyproject.read_text(encoding='utf-8')

        assert '[tool.setuptools.package-data]' in content
        assert '"email_templates/*.html"' in content
        assert '"email_templates/*.txt"' in content

    def test_packaged_templates_exist(self):
        """Test the packaged templates contain all placeholders."""
        for name in ('contact_email.html', 'contact_email.txt'):
            content = templates._load_from_filesystem(name)
            assert '{name}' in content
            assert '{email}' in content
            assert '{message}' in content


class TestLoadTemplate:
    """Test load_template caching."""

    @patch('services.templates._load_from_filesystem', return_value='cached {name}')
    def test_load_template_caches(self, mock_load):
        """Test second load is served from cache."""
        first = templates.load_template('contact_email.html')
        second = templates.load_template('contact_email.html')

        assert first == second == 'cached {name}'
        mock_load.assert_called_once_with('contact_email.html')

    @patch('services.templates._load_from_filesystem', return_value='fresh')
    def test_load_template_bypass_cache(self, mock_load):
        """Test use_cache=False reloads from disk."""
        templates.load_template('contact_email.html')
        templates.load_template('contact_email.html', use_cache=False)

        assert mock_load.call_count == 2

    @patch('services.templates._load_from_filesystem', side_effect=FileNotFoundError("missing"))
    def test_load_template_not_found(self, mock_load):
        """Test missing template raises ValueError."""
        with pytest.raises(ValueError, match="Template 'missing.html' not found"):
            templates.load_template('missing.html')


class TestRender:
    """Test template rendering."""

    def test_render_escapes_html(self):
        """Test values are HTML-escaped by default."""
        result = templates.render('<p>{name}</p>', name='<b>"Alice" & Bob</b>')

        assert result == '<p>&lt;b&gt;&quot;Alice&quot; &amp; Bob&lt;/b&gt;</p>'

    def test_render_without_escaping(self):
        """Test escape_html=False leaves values untouched."""
        result = templates.render('{name}', escape_html=False, name='<b>Alice</b>')

        assert result == '<b>Alice</b>'

    def test_render_preserves_braces_in_values(self):
        """Test braces in values are substituted literally."""
        result = templates.render('Hi {name}', name='{message}')

        assert result == 'Hi {message}'

    def test_render_missing_variable(self):
        """Test missing variable raises ValueError."""
        with pytest.raises(ValueError, match="Missing required variable in template: email"):
            templates.render('{name} {email}', name='Alice')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
