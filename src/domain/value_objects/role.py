from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"

    def can_create_animals(self) -> bool:
        return self is Role.OWNER

    def can_update_animals(self) -> bool:
        return self in {Role.OWNER, Role.MANAGER}
