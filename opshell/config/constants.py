"""
Configuration constants and built-in defaults.
"""

from typing import Any

MAX_CONFIG_SIZE_BYTES = 1024 * 1024

# Prefix of environment variables overriding configuration keys,
# e.g. OPSHELL_CONF_LOGGING_LEVEL=debug -> logging.level
ENV_OVERRIDE_PREFIX = "OPSHELL_CONF_"

# Environment variable naming the configuration file
ENV_CONFIG_FILE = "OPSHELL_CONFIG"

DEFAULT_CONFIG_PATH = "~/.config/opshell/opshell.yaml"

DEFAULTS: dict[str, Any] = {
    "logging": {
        "level": "warning",
        "location": False,
        "micros": False,
        "colors": True,
    },
    "shell": {
        "prompt": "opshell:>",
    },
    "db": {
        "format": "table",
        "env": {
            "url": "OPSHELL_DB_URL",
            "username": "OPSHELL_DB_USERNAME",
            "password": "OPSHELL_DB_PASSWORD",
        },
    },
    "jasypt": {
        "iterations": 1000,
        "env": {
            "password": "OPSHELL_JASYPT_PASSWORD",
        },
    },
    "sts": {
        "duration": 1000,
        "timeout": 10.0,
        "env": {
            "region": "OPSHELL_STS_REGION",
            "keyid": "OPSHELL_STS_KEY_ID",
            "secret": "OPSHELL_STS_KEY_SECRET",
            "arn": "OPSHELL_STS_ROLE_ARN",
        },
    },
}
