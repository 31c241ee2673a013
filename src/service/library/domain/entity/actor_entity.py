from enum import Enum

import attrs


class ActorRole(str, Enum):
    STUDENT = 'STUDENT'
    ADMIN = 'ADMIN'


@attrs.define(frozen=True)
class ActorEntity:
    """The authenticated caller, as supplied by the upstream identity provider."""

    id: int
    role: ActorRole

    @property
    def is_student(self) -> bool:
        return self.role == ActorRole.STUDENT

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN
