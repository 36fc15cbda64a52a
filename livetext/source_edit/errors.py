# FILE: livetext/source_edit/errors.py
class SourceEditError(Exception):
    """Base class for source edit errors."""
    kind = "internal"


class InvalidInputError(SourceEditError):
    """Malformed or missing request fields. Raised before any I/O."""
    kind = "invalid_input"


class ProjectNotFoundError(SourceEditError):
    kind = "project_not_found"


class PathOutsideProjectError(SourceEditError):
    """A relative path resolved outside the project root."""
    kind = "invalid_input"
