"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Repository settings
    "repository_type": "sqlite",
    "database_path": "data/security.db",

    # Image service settings
    "image_service_type": "fake",
    "image_service_seed": None,
    "max_image_size_mb": 16,

    # Logging settings
    "log_level": "INFO",
    "log_dir": "logs",

    # Web API settings
    "web_host": "0.0.0.0",
    "web_port": 5000
}

# System constants
SYSTEM_CONSTANTS = {
    "CAT_CONFIDENCE_THRESHOLD": 50.0,  # Percent
    "CAT_LABEL": "cat",
    "REPOSITORY_RETRY_ATTEMPTS": 3,
    "REPOSITORY_RETRY_DELAY_SECONDS": 0.1,
    "MAX_ERROR_HISTORY": 1000,
    "LOG_ROTATION_SIZE_MB": 10
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json",
    "database_file": "data/security.db"
}

REPOSITORY_TYPES = ("memory", "sqlite")
IMAGE_SERVICE_TYPES = ("fake",)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
