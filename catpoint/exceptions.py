"""Exception types raised by catpoint collaborators."""


class CatpointError(Exception):
    """Base class for catpoint errors."""


class RepositoryError(CatpointError):
    """The security repository could not read or write its state."""


class ImageServiceError(CatpointError):
    """The image service failed to classify an image."""


class ConfigurationError(CatpointError):
    """Configuration is missing, malformed or names an unknown backend."""
