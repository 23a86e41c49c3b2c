import os
from pathlib import Path
from typing import Optional

import yaml

from auditview_core.errors import ConfigError
from auditview_core.models import PAGE_SIZE

DEFAULT_CONFIG: dict = {
    "reports_dir": "reports",
    "map_file": "map.json",
    "page_size": PAGE_SIZE,
    "global_sort": False,  # False = sort only the requested page, after chunking
    "recursive": False,  # also look for report files in subdirectories
    "strict": False,  # surface unknown categories and sort fields as warnings
}

REPORTS_DIR_ENV = "AUDITVIEW_REPORTS_DIR"


def load_config(config_path: str = ".auditview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .auditview.yml in the current directory
      3. AUDITVIEW_REPORTS_DIR environment variable
      4. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            try:
                file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"invalid YAML: {e}", path=str(path)) from e
        if not isinstance(file_config, dict):
            raise ConfigError("expected a mapping at the top level", path=str(path))
        config.update(file_config)

    env_dir = os.environ.get(REPORTS_DIR_ENV)
    if env_dir:
        config["reports_dir"] = env_dir

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    validate_config(config)
    return config


def validate_config(config: dict) -> None:
    page_size = config.get("page_size")
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ConfigError(f"page_size must be a positive integer, got {page_size!r}")
    if not config.get("reports_dir"):
        raise ConfigError("reports_dir must be set")
    if not config.get("map_file"):
        raise ConfigError("map_file must be set")
