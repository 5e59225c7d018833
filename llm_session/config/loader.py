"""
Configuration management and loading.

Reads the YAML file that lists the clients to chat with and how to display
their answers.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..sdk import get_adapter
from ..sdk.client import ClientConfig

DEFAULT_WIDTH = 80


@dataclass(frozen=True)
class DisplayConfig:
    """Console display settings."""
    width: int = DEFAULT_WIDTH

    def __post_init__(self):
        """Validate width is a positive integer."""
        if isinstance(self.width, bool) or not isinstance(self.width, int) or self.width <= 0:
            raise ValueError("display width must be a positive integer")


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    clients: List[ClientConfig]
    display: DisplayConfig = field(default_factory=DisplayConfig)


def load_config(path: str) -> AppConfig:
    """Load and validate client configuration from a YAML file.

    Validation is strict: unknown keys and wrong types are rejected rather
    than ignored, so a typo never silently talks to the wrong model.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
        OptionProcessingError: If a client option is rejected by its adapter
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    return parse_config(raw_config)


def parse_config(raw_config: Dict[str, Any]) -> AppConfig:
    """Validate an already-decoded configuration mapping."""
    allowed_top_keys = {'clients', 'display'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    if 'clients' not in raw_config:
        raise ValueError("Missing required 'clients' section")

    clients_data = raw_config['clients']
    if not isinstance(clients_data, list) or not clients_data:
        raise ValueError("'clients' must be a non-empty list")

    clients = [
        _parse_client(client_data, f"clients[{index}]")
        for index, client_data in enumerate(clients_data)
    ]

    display_data = raw_config.get('display') or {}
    if not isinstance(display_data, dict):
        raise ValueError("'display' must be a dictionary")

    unknown_display_keys = set(display_data.keys()) - {'width'}
    if unknown_display_keys:
        raise ValueError(f"Unknown display keys: {unknown_display_keys}")

    display = DisplayConfig(width=display_data.get('width', DEFAULT_WIDTH))

    return AppConfig(clients=clients, display=display)


def _parse_client(data: Any, path: str) -> ClientConfig:
    """Parse and validate one client entry.

    Args:
        data: Client entry, either a provider name or a mapping
        path: Path for error messages

    Returns:
        ClientConfig with resolved options
    """
    if isinstance(data, str):
        data = {'provider': data}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must be a provider name or a dictionary")

    allowed_keys = {'provider', 'options'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

    provider = data.get('provider')
    if not isinstance(provider, str) or not provider.strip():
        raise ValueError(f"Missing required 'provider' in {path}")

    try:
        adapter = get_adapter(provider)
    except ValueError as e:
        raise ValueError(f"{path}: {e}")

    options = data.get('options') or {}
    if not isinstance(options, dict):
        raise ValueError(f"'options' in {path} must be a dictionary")
    non_string_keys = [key for key in options if not isinstance(key, str)]
    if non_string_keys:
        raise ValueError(f"Option names in {path} must be strings: {non_string_keys}")

    return ClientConfig.create(adapter, **options)
