"""Services for the catpoint security system."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .security_service import SecurityService
from .repository import InMemorySecurityRepository, create_repository
from .sqlite_repository import SqliteSecurityRepository
from .image_service import FakeImageService, LabelImageService, create_image_service

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'SecurityService',
    'InMemorySecurityRepository',
    'create_repository',
    'SqliteSecurityRepository',
    'FakeImageService',
    'LabelImageService',
    'create_image_service'
]
