"""
Domain exceptions shared by the application and API layers.
"""


class NotFoundError(Exception):
    """Base class for lookups of unknown identifiers."""
    pass


class SessionNotFoundError(NotFoundError):
    """No measurement session with the given id."""
    pass


class FieldNotFoundError(NotFoundError):
    """No saved field with the given id."""
    pass
