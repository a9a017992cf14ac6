"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SecurityConfig:
    """System configuration settings."""
    # Repository settings
    repository_type: str = "sqlite"  # memory, sqlite
    database_path: str = "data/security.db"

    # Image service settings
    image_service_type: str = "fake"
    image_service_seed: Optional[int] = None
    max_image_size_mb: int = 16

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Web API settings
    web_host: str = "0.0.0.0"
    web_port: int = 5000
