"""Service-level exceptions surfaced to the routes."""


class TagMapperError(RuntimeError):
    """Base class for distinguishable service failures."""


class TemplateNotFoundError(TagMapperError):
    """Raised when a template id does not exist."""


class ContentUnavailableError(TagMapperError):
    """Raised when template text cannot be derived from metadata or storage."""


class TagStorageError(TagMapperError):
    """Raised when extracted tags could not be written."""


class UnknownTagError(TagMapperError):
    """Raised when a mapping references a tag not extracted for the template."""
