from __future__ import annotations

from enum import Enum


class AnimalStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SOLD = "SOLD"
    DECEASED = "DECEASED"
    TRANSFERRED = "TRANSFERRED"


class Sex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
