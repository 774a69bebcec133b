class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Entity not found."""


class DuplicateError(DatabaseError):
    """Unique constraint violation."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation."""


class MalformedRowError(DatabaseError):
    """A stored row cannot be turned into a valid model (e.g. a par array not 9 long)."""
