"""
Catpoint Security System

Home-security alarm controller: door, window and motion sensors plus a
camera feed checked for cats, combined into a three-level alarm state
governed by the arming mode.
"""

__version__ = "1.0.0"
__author__ = "Catpoint Security"

# Import core components
from .config_manager import ConfigManager
from .models import (
    Sensor,
    SensorType,
    AlarmStatus,
    ArmingStatus,
    SecurityConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener,
    SecurityService,
    InMemorySecurityRepository,
    SqliteSecurityRepository,
    FakeImageService,
    LabelImageService
)
from .exceptions import (
    CatpointError,
    RepositoryError,
    ImageServiceError,
    ConfigurationError
)

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',

    # Data models
    'Sensor',
    'SensorType',
    'AlarmStatus',
    'ArmingStatus',
    'SecurityConfig',

    # Collaborator interfaces and implementations
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'InMemorySecurityRepository',
    'SqliteSecurityRepository',
    'FakeImageService',
    'LabelImageService',

    # Errors
    'CatpointError',
    'RepositoryError',
    'ImageServiceError',
    'ConfigurationError'
]
