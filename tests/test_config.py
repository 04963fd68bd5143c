"""
Unit tests for configuration
"""
import pytest
from unittest.mock import patch
from agents.config import Config


class TestConfig:
    """Test cases for Config."""

    def setup_method(self):
        self.config = Config()

    def test_defaults(self):
        """Unset variables fall back to documented defaults."""
        with patch.dict('os.environ', {}, clear=True):
            assert self.config.get('LLM_PROVIDER') == 'gemini'
            assert self.config.get_int('PORT') == 3001
            assert self.config.get_float('LLM_TIMEOUT') == 60.0
            assert self.config.is_development is True

    def test_environment_overrides(self):
        with patch.dict('os.environ', {'PORT': '8080', 'LLM_PROVIDER': ' Ollama '}):
            assert self.config.get_int('PORT') == 8080
            assert self.config.llm_provider == 'ollama'

    def test_bad_number_uses_default(self):
        with patch.dict('os.environ', {'PORT': 'eighty'}):
            assert self.config.get_int('PORT', 3001) == 3001

    def test_validate_missing_key(self):
        """Gemini without a key fails with a helpful message."""
        with patch.dict('os.environ', {'LLM_PROVIDER': 'gemini'}, clear=True):
            with pytest.raises(ValueError, match="GEMINI_API_KEY"):
                self.config.validate_config()

    def test_validate_unknown_provider(self):
        with patch.dict('os.environ', {'LLM_PROVIDER': 'openai'}):
            with pytest.raises(ValueError, match="Unsupported LLM_PROVIDER"):
                self.config.validate_config()

    def test_validate_ok(self):
        with patch.dict('os.environ', {'LLM_PROVIDER': 'groq', 'GROQ_API_KEY': 'gsk-test'}):
            self.config.validate_config()

    def test_all_config_masks_secrets(self):
        with patch.dict('os.environ', {'GEMINI_API_KEY': 'secret'}, clear=True):
            values = self.config.get_all_config()

        assert values['GEMINI_API_KEY'] == '******'
        assert values['GROQ_API_KEY'] == 'Not set'
        assert values['DATABASE_URL'] == 'sqlite:///insightboard.db'

    def test_create_env_template(self, tmp_path):
        target = tmp_path / '.env.example'
        self.config.create_env_template(str(target))

        content = target.read_text()
        assert 'LLM_PROVIDER=gemini' in content
        assert 'API_BASE_URL=http://localhost:3001' in content
