"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ─────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Field defaults       -- declared on Settings
#   2. config/config.yaml   -- static values checked into the deployment
#   3. .env file            -- local developer overrides (not committed)
#   4. Environment vars     -- set by the process manager at deploy time
#
# Keys in the YAML file are Settings field names, e.g.:
#
#     port: 8080
#     submissions_file: data/submissions.json
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from feedback_collector.config.settings import Settings
from feedback_collector.utils.errors import FeedbackCollectorError


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Load YAML settings and layer .env / environment values on top.

    Args:
        path: Path to the YAML configuration file.  A missing file is
              treated as empty.

    Returns:
        The fully resolved, frozen Settings.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    if not isinstance(yaml_config, dict):
        raise FeedbackCollectorError("Configuration file must contain a mapping", path=str(config_path))

    known_fields = Settings.model_fields.keys()
    yaml_values = {k: v for k, v in yaml_config.items() if k in known_fields}

    # Values found in .env / the environment end up in model_fields_set;
    # passing them back as init kwargs lets them win over the YAML layer.
    env_settings = Settings()
    env_values = env_settings.model_dump(include=env_settings.model_fields_set)

    return Settings(**{**yaml_values, **env_values})
