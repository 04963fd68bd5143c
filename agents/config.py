# agents/config.py
import os
import logging
from typing import Dict, Any, List
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _configure_logging() -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    log_file = os.getenv('LOG_FILE', 'insightboard.log')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


_configure_logging()

logger = logging.getLogger(__name__)


class Config:
    """Configuration management with validation and error handling."""

    def __init__(self):
        # Variables each LLM provider cannot run without
        self.provider_env_vars = {
            'gemini': ['GEMINI_API_KEY'],
            'groq': ['GROQ_API_KEY'],
            'ollama': ['OLLAMA_HOST'],
        }

        self.optional_env_vars = {
            'LLM_PROVIDER': 'gemini',
            'GEMINI_MODEL': 'gemini-2.0-flash',
            'OLLAMA_HOST': 'http://localhost:11434',
            'OLLAMA_MODEL': 'llama3.1',
            'GROQ_MODEL': 'llama-3.1-8b-instant',
            'LLM_TIMEOUT': '60',
            'DATABASE_URL': 'sqlite:///insightboard.db',
            'PORT': '3001',
            'CORS_ORIGIN': 'http://localhost:8501',
            'API_BASE_URL': 'http://localhost:3001',
            'APP_ENV': 'development',
            'LOG_LEVEL': 'INFO',
            'LOG_FILE': 'insightboard.log',
        }

        self.secret_env_vars = ['GEMINI_API_KEY', 'GROQ_API_KEY']

    @property
    def llm_provider(self) -> str:
        return self.get('LLM_PROVIDER').strip().lower()

    def validate_config(self) -> None:
        """Validate configuration and provide helpful error messages."""
        provider = self.llm_provider
        if provider not in self.provider_env_vars:
            raise ValueError(
                f"Unsupported LLM_PROVIDER '{provider}'. "
                f"Choose one of: {', '.join(sorted(self.provider_env_vars))}"
            )

        missing_vars = [var for var in self.provider_env_vars[provider] if not self.get(var)]

        if missing_vars:
            error_msg = f"""
Missing required environment variables for provider '{provider}': {', '.join(missing_vars)}

Please set these in your .env file or environment:

Required variables:
"""
            for var in missing_vars:
                error_msg += f"  {var}=your-{var.lower()}\n"

            error_msg += """
Optional variables (with defaults):
"""
            for var, default in self.optional_env_vars.items():
                error_msg += f"  {var}={default}  # Optional\n"

            raise ValueError(error_msg)

        if provider == 'ollama':
            self._validate_ollama_config()

    def _validate_ollama_config(self) -> None:
        """Probe the Ollama server. Only warns, the server may not be running yet."""
        import requests

        ollama_host = self.get('OLLAMA_HOST')
        ollama_model = self.get('OLLAMA_MODEL')

        try:
            response = requests.get(f"{ollama_host}/api/tags", timeout=5)
            if response.status_code == 200:
                models = response.json().get('models', [])
                model_names = [model['name'] for model in models]

                if ollama_model not in model_names:
                    logger.warning(f"Ollama model '{ollama_model}' not found. Available models: {model_names}")
                else:
                    logger.info(f"Ollama model '{ollama_model}' validated")
            else:
                logger.warning("Could not connect to Ollama API")

        except requests.exceptions.RequestException:
            logger.warning("Could not connect to Ollama (may not be running yet)")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return os.getenv(key, self.optional_env_vars.get(key, default))

    def get_int(self, key: str, default: int = 0) -> int:
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning(f"{key} is not an integer, using {default}")
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        try:
            return float(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning(f"{key} is not a number, using {default}")
            return default

    @property
    def is_development(self) -> bool:
        return self.get('APP_ENV').lower() == 'development'

    def get_all_config(self) -> Dict[str, Any]:
        """Get all configuration as dictionary, with secrets masked."""
        config = {}

        for var in self.secret_env_vars:
            value = os.getenv(var)
            config[var] = '*' * len(value) if value else 'Not set'

        for var, default in self.optional_env_vars.items():
            config[var] = os.getenv(var, default)

        return config

    def create_env_template(self, file_path: str = '.env.example') -> None:
        """Create an environment template file."""
        template_content = """# InsightBoard Configuration Template
# Copy this to .env and fill in your values

# LLM provider: gemini | ollama | groq
LLM_PROVIDER=gemini
GEMINI_API_KEY=your-gemini-api-key-here
GEMINI_MODEL=gemini-2.0-flash

# Ollama (LLM_PROVIDER=ollama)
OLLAMA_HOST=http://localhost:11434
OLLAMA_MODEL=llama3.1

# Groq (LLM_PROVIDER=groq)
GROQ_API_KEY=your-groq-api-key-here
GROQ_MODEL=llama-3.1-8b-instant

# Seconds before falling back to the built-in task set
LLM_TIMEOUT=60

# API server
DATABASE_URL=sqlite:///insightboard.db
PORT=3001
CORS_ORIGIN=http://localhost:8501
APP_ENV=development

# Dashboard
API_BASE_URL=http://localhost:3001

# Logging
LOG_LEVEL=INFO
LOG_FILE=insightboard.log
"""

        try:
            Path(file_path).write_text(template_content)
            logger.info(f"Created environment template: {file_path}")
        except OSError as e:
            logger.error(f"Failed to create environment template: {str(e)}")


# Global configuration instance
config = Config()
