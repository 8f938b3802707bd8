"""Domain exceptions.

Services raise these; the web layer maps them to HTTP status codes:
- ValidationError -> 400
- AuthError -> 401
- NotFoundError -> 404
- ConflictError -> 409
"""


class ClassroomError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ClassroomError):
    """Raised when input is malformed or out of range."""

    pass


class NotFoundError(ClassroomError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: int | str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} '{entity_id}' not found"
        super().__init__(message)


class AuthError(ClassroomError):
    """Raised on bad credentials."""

    pass


class ConflictError(ClassroomError):
    """Raised when a unique field is already taken."""

    pass
