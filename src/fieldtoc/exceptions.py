"""Custom exceptions for fieldtoc."""


class FieldTocError(Exception):
    """Base exception for all fieldtoc errors."""

    pass


class ConfigurationError(FieldTocError):
    """Raised when generator settings or the root entity are unusable."""

    pass


class CollaboratorError(FieldTocError):
    """Raised when a field value cannot be rendered or its markup parsed."""

    pass


class ParseError(FieldTocError):
    """Raised when a content or config file cannot be loaded."""

    pass
