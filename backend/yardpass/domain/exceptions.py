"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class PassValidationError(Exception):
    """Raised when fan pass form data is missing or malformed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(Exception):
    """Raised when an admin password or session is wrong or missing."""


class UploadRejectedError(Exception):
    """Raised when an uploaded file fails type or size checks."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StorageError(Exception):
    """Raised by a key-value backend that cannot serve a request.

    Backend-agnostic — works for SQL, REST and any future store.
    """

    def __init__(self, backend: str, message: str):
        self.backend = backend
        self.message = message
        super().__init__(f"[{backend}] {message}")


class PassSaveError(Exception):
    """Raised when the pass gateway fails to persist a generated pass."""


class InvalidTransitionError(Exception):
    """Raised when the pass view receives an event its current state does not accept."""

    def __init__(self, state: object, event: object):
        self.state = state
        self.event = event
        super().__init__(f"Event {event!s} is not allowed in state {state!s}")
