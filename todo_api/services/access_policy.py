"""Todo ownership rules.

A request's principal gets exactly one policy, picked from its role when the
bearer token is verified:

- ``OwnerPolicy``: may touch only todos whose ``user_id`` is its own.
- ``AdminPolicy``: may touch every todo.
"""

from dataclasses import dataclass, field

from todo_api.models import Todo, UserRole
from todo_api.services.exceptions import ForbiddenError


class AccessPolicy:
    """Base policy; subclasses decide visibility of a todo."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id

    @property
    def owner_filter(self) -> int | None:
        """Owner id to restrict listings to, or None for every row."""
        raise NotImplementedError

    def can_access(self, todo: Todo) -> bool:
        raise NotImplementedError

    def authorize(self, todo: Todo) -> None:
        """Raise ForbiddenError unless the todo is accessible."""
        if not self.can_access(todo):
            raise ForbiddenError()


class OwnerPolicy(AccessPolicy):
    @property
    def owner_filter(self) -> int | None:
        return self.user_id

    def can_access(self, todo: Todo) -> bool:
        return todo.user_id == self.user_id


class AdminPolicy(AccessPolicy):
    @property
    def owner_filter(self) -> int | None:
        return None

    def can_access(self, todo: Todo) -> bool:
        return True


def policy_for(user_id: int, role: str) -> AccessPolicy:
    if role == UserRole.ADMIN:
        return AdminPolicy(user_id)
    return OwnerPolicy(user_id)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request."""

    user_id: int
    email: str
    role: str
    policy: AccessPolicy = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "policy", policy_for(self.user_id, self.role))
