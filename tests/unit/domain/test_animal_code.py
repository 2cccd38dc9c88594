from datetime import date, datetime, timedelta, timezone

import pytest

from src.domain.value_objects import animal_code as codes
from src.domain.value_objects.animal_type import AnimalType

DAY = date(2025, 1, 10)


def test_generate_first_code_of_the_day():
    assert codes.generate(AnimalType.BUFFALO, [], DAY) == "BF20250110001"


def test_generate_continues_from_highest_sequence_with_same_prefix():
    existing = ["BF20250110001", "BF20250110007", "BF20250109042", "CW20250110050"]
    assert codes.generate(AnimalType.BUFFALO, existing, DAY) == "BF20250110008"


def test_generate_treats_malformed_suffix_as_zero():
    assert codes.generate(AnimalType.PIG, ["PG20250110abc"], DAY) == "PG20250110001"


def test_generate_uses_utc_date_of_aware_datetime():
    # 01:00 in Bangkok on the 11th is still the 10th in UTC
    bangkok = timezone(timedelta(hours=7))
    as_of = datetime(2025, 1, 11, 1, 0, tzinfo=bangkok)
    assert codes.generate(AnimalType.COW, [], as_of) == "CW20250110001"


@pytest.mark.parametrize(
    "code,segment",
    [
        ("BF2025011000", "length"),
        ("CW20250110001", "type_code"),
        ("BF2025O110001", "date"),
        ("BF2025011000x", "sequence"),
    ],
)
def test_validate_names_failing_segment(code, segment):
    with pytest.raises(codes.InvalidAnimalCode) as exc_info:
        codes.validate(code, AnimalType.BUFFALO)
    assert exc_info.value.segment == segment


def test_validate_accepts_well_formed_code():
    codes.validate("HR20241231999", AnimalType.HORSE)
    assert codes.is_valid("CK20250110001", AnimalType.CHICKEN)
    assert not codes.is_valid("CK20250110001", AnimalType.PIG)


def test_parse_and_type_lookup():
    parts = codes.parse("BF20250110003")
    assert parts == codes.AnimalCodeParts(type_code="BF", date="20250110", sequence="003")
    assert codes.parse("BF2025") is None
    assert codes.animal_type_from_code("PG20250110001") is AnimalType.PIG
    assert codes.animal_type_from_code("XX20250110001") is None


def test_generate_refuses_to_overflow_the_sequence():
    existing = ["BF20250110998", "BF20250110999"]

    with pytest.raises(codes.SequenceExhausted) as exc_info:
        codes.generate(AnimalType.BUFFALO, existing, DAY)

    assert exc_info.value.prefix == "BF20250110"


def test_generate_hands_out_the_last_sequence_of_the_day():
    code = codes.generate(AnimalType.BUFFALO, ["BF20250110998"], DAY)

    assert code == "BF20250110999"
    codes.validate(code, AnimalType.BUFFALO)


@pytest.mark.parametrize("animal_type", list(AnimalType))
def test_generated_codes_validate_and_count_up_by_one(animal_type):
    existing: list[str] = []
    for expected in range(1, 21):
        code = codes.generate(animal_type, existing, DAY)
        codes.validate(code, animal_type)
        assert len(code) == codes.CODE_LENGTH
        assert int(code[-codes.SEQUENCE_LENGTH :]) == expected
        assert codes.animal_type_from_code(code) is animal_type
        existing.append(code)
