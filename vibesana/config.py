import os
import re
import yaml
import logging
from typing import Dict, Any, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_OPIK_HOST = "https://www.comet.com/opik/api"
DEFAULT_OPIK_PROJECT = "Vibesana"
DEFAULT_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


class Config:
    """Configuration manager for the task breakdown service"""

    def __init__(self, config_path: Optional[str] = None):
        load_dotenv()
        self.config_path = config_path or os.getenv("VIBESANA_CONFIG", DEFAULT_CONFIG_PATH)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file with environment variable substitution"""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r') as file:
            config_content = file.read()

        config_content = self._substitute_env_vars(config_content)

        return yaml.safe_load(config_content) or {}

    def _substitute_env_vars(self, content: str) -> str:
        """Replace ${VAR_NAME} and ${VAR_NAME:default} with environment variables"""
        def replace_var(match):
            var_expr = match.group(1)
            if ':' in var_expr:
                var_name, default_value = var_expr.split(':', 1)
                return os.getenv(var_name, default_value)
            else:
                return os.getenv(var_expr, '')

        return re.sub(r'\$\{([^}]+)\}', replace_var, content)

    @property
    def llm(self) -> Dict[str, Any]:
        return self._config.get('llm') or {}

    @property
    def tracing(self) -> Dict[str, Any]:
        return self._config.get('tracing') or {}

    @property
    def server(self) -> Dict[str, Any]:
        return self._config.get('server') or {}

    @property
    def logging(self) -> Dict[str, Any]:
        return self._config.get('logging') or {}

    def _get_number(self, section: Dict[str, Any], key: str, default, cast):
        """Read a numeric setting, falling back to the default on empty or invalid values"""
        raw = section.get(key)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return default
        try:
            return cast(raw)
        except (ValueError, TypeError) as e:
            logger.warning(f"Invalid {key} config value: {raw!r}, using default {default}. Error: {e}")
            return default

    def get_llm_config(self) -> Dict[str, Any]:
        """Get configuration for the completion client"""
        llm = self.llm
        return {
            'api_key': llm.get('openai_api_key') or None,
            'model': llm.get('model') or DEFAULT_MODEL,
            'temperature': self._get_number(llm, 'temperature', DEFAULT_TEMPERATURE, float),
            'max_tokens': self._get_number(llm, 'max_tokens', DEFAULT_MAX_TOKENS, int),
            'timeout': self._get_number(llm, 'timeout', DEFAULT_TIMEOUT_SECONDS, float),
            'base_url': llm.get('base_url') or None,
        }

    def get_tracing_config(self) -> Dict[str, Any]:
        """Get configuration for the trace recorder. A missing API key disables tracing."""
        tracing = self.tracing
        return {
            'api_key': tracing.get('opik_api_key') or None,
            'host': tracing.get('host') or DEFAULT_OPIK_HOST,
            'project_name': tracing.get('project_name') or DEFAULT_OPIK_PROJECT,
            'workspace': tracing.get('workspace') or None,
        }

    def is_tracing_enabled(self) -> bool:
        return bool(self.get_tracing_config()['api_key'])

    def get_cors_headers(self) -> Dict[str, str]:
        """Get the CORS headers attached to every response"""
        cors = self.server.get('cors') or {}
        headers = dict(DEFAULT_CORS_HEADERS)
        if cors.get('allow_origin'):
            headers["Access-Control-Allow-Origin"] = cors['allow_origin']
        if cors.get('allow_headers'):
            headers["Access-Control-Allow-Headers"] = cors['allow_headers']
        if cors.get('allow_methods'):
            headers["Access-Control-Allow-Methods"] = cors['allow_methods']
        return headers

    def get_log_level(self) -> str:
        return str(self.logging.get('level') or 'INFO').upper()

    def validate(self) -> bool:
        """Validate that all required configuration is present"""
        errors = []

        if not self.get_llm_config()['api_key']:
            errors.append("Missing LLM configuration: openai_api_key (set OPENAI_API_KEY)")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
