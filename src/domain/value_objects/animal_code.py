"""Farm-scoped animal codes.

Format: ``{TYPE_CODE}{YYYYMMDD}{SEQ}``, e.g. ``BF20250110001``.
The sequence is a 1-based, zero-padded counter per farm, type and day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable

from src.domain.value_objects.animal_type import ANIMAL_TYPE_CODES, AnimalType

TYPE_CODE_LENGTH = 2
DATE_LENGTH = 8
SEQUENCE_LENGTH = 3
CODE_LENGTH = TYPE_CODE_LENGTH + DATE_LENGTH + SEQUENCE_LENGTH
MAX_SEQUENCE = 10**SEQUENCE_LENGTH - 1


class InvalidAnimalCode(ValueError):
    def __init__(self, segment: str, message: str) -> None:
        super().__init__(message)
        self.segment = segment
        self.message = message


class SequenceExhausted(ValueError):
    def __init__(self, prefix: str) -> None:
        super().__init__(f"No animal IDs left for prefix {prefix}")
        self.prefix = prefix


@dataclass(slots=True, frozen=True)
class AnimalCodeParts:
    type_code: str
    date: str
    sequence: str


def _as_date(value: date | datetime | None) -> date:
    if value is None:
        return datetime.now(timezone.utc).date()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def code_prefix(animal_type: AnimalType, as_of: date | datetime | None = None) -> str:
    return f"{ANIMAL_TYPE_CODES[animal_type]}{_as_date(as_of):%Y%m%d}"


def _sequence_of(code: str) -> int:
    tail = code[-SEQUENCE_LENGTH:]
    if len(tail) != SEQUENCE_LENGTH or not (tail.isascii() and tail.isdigit()):
        return 0
    return int(tail)


def generate(
    animal_type: AnimalType,
    existing_ids: Iterable[str] = (),
    as_of: date | datetime | None = None,
) -> str:
    """Return the next code for ``animal_type`` on ``as_of`` (UTC date, default today).

    Only ids sharing the exact type+date prefix count towards the sequence.
    Malformed suffixes are treated as 0.
    Raises SequenceExhausted once the three-digit sequence for the day is used up.
    """
    prefix = code_prefix(animal_type, as_of)
    highest = 0
    for existing in existing_ids:
        if existing and existing.startswith(prefix):
            highest = max(highest, _sequence_of(existing))
    if highest >= MAX_SEQUENCE:
        raise SequenceExhausted(prefix)
    return f"{prefix}{highest + 1:0{SEQUENCE_LENGTH}d}"


def validate(code: str, animal_type: AnimalType) -> None:
    """Raise InvalidAnimalCode naming the first segment that fails."""
    if len(code) != CODE_LENGTH:
        raise InvalidAnimalCode("length", f"Animal ID must be {CODE_LENGTH} characters long")
    expected = ANIMAL_TYPE_CODES[animal_type]
    actual = code[:TYPE_CODE_LENGTH]
    if actual != expected:
        raise InvalidAnimalCode(
            "type_code", f"Expected type code {expected} but got {actual}"
        )
    date_part = code[TYPE_CODE_LENGTH : TYPE_CODE_LENGTH + DATE_LENGTH]
    if not (date_part.isascii() and date_part.isdigit()):
        raise InvalidAnimalCode("date", "Invalid date format in animal ID")
    sequence_part = code[TYPE_CODE_LENGTH + DATE_LENGTH :]
    if not (sequence_part.isascii() and sequence_part.isdigit()):
        raise InvalidAnimalCode("sequence", "Invalid sequence format in animal ID")


def is_valid(code: str, animal_type: AnimalType) -> bool:
    try:
        validate(code, animal_type)
    except InvalidAnimalCode:
        return False
    return True


def parse(code: str) -> AnimalCodeParts | None:
    if len(code) != CODE_LENGTH:
        return None
    return AnimalCodeParts(
        type_code=code[:TYPE_CODE_LENGTH],
        date=code[TYPE_CODE_LENGTH : TYPE_CODE_LENGTH + DATE_LENGTH],
        sequence=code[TYPE_CODE_LENGTH + DATE_LENGTH :],
    )


def animal_type_from_code(code: str) -> AnimalType | None:
    type_code = code[:TYPE_CODE_LENGTH]
    for animal_type, candidate in ANIMAL_TYPE_CODES.items():
        if candidate == type_code:
            return animal_type
    return None
