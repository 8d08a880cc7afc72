"""
Tests for the command line interface
"""
import json
import logging
import pytest
from unittest.mock import Mock, AsyncMock, patch
from click.testing import CliRunner

from main import cli
from vibesana.exceptions import ProviderError
from vibesana.models import BreakdownResult, ParseStatus, TokenUsage
from vibesana.response_parser import get_fallback_tasks


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Drop handlers bound to the runner's captured stdout after each test"""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_vibesana", False):
            root.removeHandler(handler)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("llm:\n  openai_api_key: sk-test\nlogging:\n  level: WARNING\n")
    return str(path)


@pytest.fixture
def mock_service():
    service = Mock()
    service.breakdown = AsyncMock(return_value=BreakdownResult(
        request_id="req-1",
        tasks=get_fallback_tasks(),
        parse_status=ParseStatus.FALLBACK,
        duration_ms=42,
        model="gpt-4o-mini",
        usage=TokenUsage(prompt_tokens=10, completion_tokens=20)
    ))
    return service


class TestBreakdownCommand:
    """Test cases for `breakdown`"""

    def test_breakdown_json(self, runner, config_file, mock_service):
        """Test --json prints the same body the API returns"""
        with patch('main.TaskBreakdownService.from_config', return_value=mock_service):
            result = runner.invoke(cli, ['--config', config_file, 'breakdown', 'Build a login page', '--json'])

        assert result.exit_code == 0
        body = json.loads(result.output[result.output.index('{'):])
        assert [t["title"] for t in body["tasks"]] == [
            "Review and plan project requirements",
            "Set up development environment"
        ]
        mock_service.breakdown.assert_awaited_once_with('Build a login page')
        mock_service.trace_recorder.flush.assert_called_once()

    def test_breakdown_text(self, runner, config_file, mock_service):
        """Test the numbered task listing"""
        with patch('main.TaskBreakdownService.from_config', return_value=mock_service):
            result = runner.invoke(cli, ['--config', config_file, 'breakdown', 'Build a login page'])

        assert result.exit_code == 0
        assert "2 tasks (fallback, 42ms)" in result.output
        assert "[HIGH  ] Review and plan project requirements" in result.output

    def test_breakdown_provider_error(self, runner, config_file, mock_service):
        """Test a provider failure exits non-zero"""
        mock_service.breakdown.side_effect = ProviderError(status_code=429)

        with patch('main.TaskBreakdownService.from_config', return_value=mock_service):
            result = runner.invoke(cli, ['--config', config_file, 'breakdown', 'Build a login page', '--json'])

        assert result.exit_code == 1
        assert '"error": "OpenAI API error: 429"' in result.output

    def test_breakdown_without_key(self, runner, tmp_path):
        """Test the command refuses to run without an OpenAI key"""
        path = tmp_path / "config.yaml"
        path.write_text("llm: {}\n")

        result = runner.invoke(cli, ['--config', str(path), 'breakdown', 'Build a login page'])

        assert result.exit_code == 1


class TestCheckConfigCommand:
    """Test cases for `check-config`"""

    def test_valid_config(self, runner, config_file):
        result = runner.invoke(cli, ['--config', config_file, 'check-config'])

        assert result.exit_code == 0
        assert "Model: gpt-4o-mini" in result.output
        assert "Tracing: disabled" in result.output
        assert "Configuration is valid" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ['--config', str(tmp_path / "missing.yaml"), 'check-config'])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
