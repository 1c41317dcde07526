"""
Pipeline configuration
Loads menu.json and applies environment overrides
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


DEFAULT_CONFIG_FILE = Path(__file__).parent.parent / "menu.json"
DEFAULT_STORAGE_KEY = "daily:meals:v2"

# Environment variable -> config field
ENV_OVERRIDES = {
    'MENU_SOURCE_URL': 'source_url',
    'MENU_DATA_DIR': 'data_dir',
    'MENU_STORAGE_KEY': 'storage_key',
}


@dataclass
class MenuConfig:
    """Everything a pipeline run needs to know about its source and storage"""
    source_url: str
    name: str = "Menu"
    payload_call: str = "renderJidelnicek"
    ignore: List[str] = field(default_factory=list)
    data_dir: Path = Path("output")
    storage_key: str = DEFAULT_STORAGE_KEY
    timeout: float = 10


def load_config(path: Optional[Union[str, Path]] = None) -> MenuConfig:
    """
    Load menu configuration from a JSON file

    Args:
        path: Config file path (default: menu.json at the repository root)

    Returns:
        MenuConfig instance

    Raises:
        ValueError: If the file is not a JSON object or no source URL is configured
    """
    config_file = Path(path) if path else DEFAULT_CONFIG_FILE

    data = {}
    if config_file.exists():
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_file} must contain a JSON object")
    elif path:
        raise ValueError(f"Config file not found: {config_file}")

    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[key] = value

    source_url = data.get('source_url')
    if not source_url:
        raise ValueError(
            "source_url is required. "
            "Set it in menu.json or with: export MENU_SOURCE_URL='https://...'"
        )

    ignore = data.get('ignore', [])
    if isinstance(ignore, str) or not all(isinstance(term, str) for term in ignore):
        raise ValueError("ignore must be a list of strings")

    return MenuConfig(
        source_url=source_url,
        name=data.get('name', "Menu"),
        payload_call=data.get('payload_call', "renderJidelnicek"),
        ignore=list(ignore),
        data_dir=Path(data.get('data_dir', "output")),
        storage_key=data.get('storage_key', DEFAULT_STORAGE_KEY),
        timeout=float(data.get('timeout', 10)),
    )
