from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass(slots=True)
class AuthContext:
    profile_id: UUID
    external_user_id: str
    claims: dict[str, Any]
