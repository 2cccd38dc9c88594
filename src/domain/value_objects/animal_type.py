from __future__ import annotations

from enum import Enum


class AnimalType(str, Enum):
    BUFFALO = "BUFFALO"
    CHICKEN = "CHICKEN"
    COW = "COW"
    PIG = "PIG"
    HORSE = "HORSE"

    @property
    def code(self) -> str:
        return ANIMAL_TYPE_CODES[self]


ANIMAL_TYPE_CODES: dict[AnimalType, str] = {
    AnimalType.BUFFALO: "BF",
    AnimalType.CHICKEN: "CK",
    AnimalType.COW: "CW",
    AnimalType.PIG: "PG",
    AnimalType.HORSE: "HR",
}
