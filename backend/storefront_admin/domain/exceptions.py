"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ConfigurationError(Exception):
    """Raised when a required backend endpoint or credential is missing.

    Never retryable — the operator has to fix the environment first.
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        self.message = message
        super().__init__(message)


class BackendRequestError(Exception):
    """Raised when a backend (Firestore, ERPNext) rejects or fails a request.

    Backend-agnostic — ``retryable`` separates network failures, timeouts and
    5xx responses from requests the backend refused outright.
    """

    def __init__(
        self,
        backend: str,
        message: str,
        *,
        status_code: int | None = None,
        retryable: bool = False,
    ):
        self.backend = backend
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        prefix = f"[{backend}] {status_code}: " if status_code else f"[{backend}] "
        super().__init__(prefix + message)


class TableNotFoundError(Exception):
    """Raised when no table definition is registered under a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Table '{name}' is not registered")


class TableSessionNotFoundError(Exception):
    """Raised when a table session id is unknown or already closed."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Table session '{session_id}' not found")
