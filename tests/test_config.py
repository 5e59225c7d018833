"""
Unit tests for configuration loading and validation.

Tests strict validation and error handling for client configs.
"""

import os
import tempfile

import pytest
import yaml

from llm_session.config.loader import (
    AppConfig,
    DisplayConfig,
    load_config,
    parse_config,
)
from llm_session.core.errors import OptionProcessingError
from llm_session.sdk import CHATGPT, CLAUDE


class TestConfigLoading:
    """Test configuration loading and validation."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, config_data, filename: str = "config.yaml") -> str:
        """Write configuration data to temporary file."""
        config_path = os.path.join(self.temp_dir, filename)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f)
        return config_path

    def test_valid_config_loads_correctly(self):
        """Test that a valid configuration loads correctly."""
        config_data = {
            "clients": [
                {"provider": "claude", "options": {"model": "opus", "max_tokens": 2048}},
                {"provider": "chatgpt", "options": {"model": "4o"}},
            ],
            "display": {"width": 100},
        }

        config = load_config(self._write_config(config_data))

        assert isinstance(config, AppConfig)
        assert len(config.clients) == 2

        claude = config.clients[0]
        assert claude.adapter is CLAUDE
        assert claude.model == "claude-3-opus-20240229"
        assert claude.options["max_tokens"] == 2048

        chatgpt = config.clients[1]
        assert chatgpt.adapter is CHATGPT
        assert chatgpt.options["max_completion_tokens"] == 1024

        assert config.display.width == 100

    def test_provider_shorthand(self):
        """Test that a bare provider name is accepted."""
        config = load_config(self._write_config({"clients": ["claude"]}))
        assert config.clients[0].model == "claude-3-haiku-20240307"

    def test_display_defaults(self):
        """Test display section is optional."""
        config = load_config(self._write_config({"clients": ["openai"]}))
        assert config.display == DisplayConfig(width=80)

    def test_client_order_preserved(self):
        config = load_config(self._write_config({"clients": ["chatgpt", "claude", "chatgpt"]}))
        assert [c.adapter for c in config.clients] == [CHATGPT, CLAUDE, CHATGPT]

    def test_missing_file_raises_error(self):
        """Test that missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(os.path.join(self.temp_dir, "missing.yaml"))

    def test_invalid_yaml_raises_error(self):
        """Test that invalid YAML raises YAMLError."""
        config_path = os.path.join(self.temp_dir, "invalid.yaml")
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write("clients: [claude\n  - : :")

        with pytest.raises(yaml.YAMLError, match="Invalid YAML"):
            load_config(config_path)

    def test_empty_file_raises_error(self):
        """Test that empty config file raises ValueError."""
        config_path = os.path.join(self.temp_dir, "empty.yaml")
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write("")

        with pytest.raises(ValueError, match="Configuration file is empty"):
            load_config(config_path)

    def test_non_mapping_raises_error(self):
        with pytest.raises(ValueError, match="must be a dictionary"):
            load_config(self._write_config(["claude"]))


class TestConfigValidation:
    """Test strict validation of parsed configuration."""

    def test_unknown_top_level_key(self):
        with pytest.raises(ValueError, match="Unknown configuration keys"):
            parse_config({"clients": ["claude"], "budget": {}})

    def test_missing_clients(self):
        with pytest.raises(ValueError, match="Missing required 'clients' section"):
            parse_config({"display": {"width": 80}})

    @pytest.mark.parametrize("clients", [[], {}, "claude", None])
    def test_clients_must_be_non_empty_list(self, clients):
        with pytest.raises(ValueError, match="'clients' must be a non-empty list"):
            parse_config({"clients": clients})

    def test_unknown_client_key(self):
        with pytest.raises(ValueError, match=r"Unknown keys in clients\[0\]"):
            parse_config({"clients": [{"provider": "claude", "model": "opus"}]})

    def test_missing_provider(self):
        with pytest.raises(ValueError, match=r"Missing required 'provider' in clients\[1\]"):
            parse_config({"clients": ["claude", {"options": {}}]})

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider: gemini"):
            parse_config({"clients": [{"provider": "gemini"}]})

    def test_client_entry_must_be_mapping(self):
        with pytest.raises(ValueError, match="must be a provider name or a dictionary"):
            parse_config({"clients": [42]})

    def test_options_must_be_mapping(self):
        with pytest.raises(ValueError, match="'options' in clients\\[0\\] must be a dictionary"):
            parse_config({"clients": [{"provider": "claude", "options": ["model"]}]})

    def test_option_names_must_be_strings(self):
        with pytest.raises(ValueError, match="Option names"):
            parse_config({"clients": [{"provider": "claude", "options": {1: "x"}}]})

    def test_bad_option_value_rejected(self):
        with pytest.raises(OptionProcessingError):
            parse_config({"clients": [{"provider": "claude", "options": {"model": 3}}]})

    def test_unknown_display_key(self):
        with pytest.raises(ValueError, match="Unknown display keys"):
            parse_config({"clients": ["claude"], "display": {"color": "red"}})

    @pytest.mark.parametrize("width", [0, -5, "wide", True])
    def test_invalid_width(self, width):
        with pytest.raises(ValueError, match="display width must be a positive integer"):
            parse_config({"clients": ["claude"], "display": {"width": width}})
