"""
Layered YAML configuration with environment overrides.
"""

from .config import Config, default_config_file
from .constants import DEFAULTS, ENV_CONFIG_FILE, ENV_OVERRIDE_PREFIX

__all__ = [
    "Config",
    "DEFAULTS",
    "ENV_CONFIG_FILE",
    "ENV_OVERRIDE_PREFIX",
    "default_config_file",
]
