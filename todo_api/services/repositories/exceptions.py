"""Errors raised by the data access layer.

Services catch these and translate them into client-facing ``ServiceError``
subclasses; they never reach a route handler.
"""


class RepositoryError(Exception):
    """Base for repository failures that callers are expected to handle."""


class NotFoundError(RepositoryError):
    """No row matched the lookup, or an update affected zero rows."""

    def __init__(self, entity_type: str, identifier: str | int):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(f"No {entity_type.lower()} matches {identifier!r}")


class DuplicateError(RepositoryError):
    """Insert rejected by a unique index."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} {field} {value!r} is already taken")
