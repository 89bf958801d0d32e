"""Tests for request coercion and the shared field types."""

import pytest

from worldbuilder.api.dependencies import parse
from worldbuilder.errors import ValidationError
from worldbuilder.schemas import CreateEra, EraPatch, SkillCreate, SkillSlotList
from worldbuilder.schemas.base import to_bool, to_float_or_none, to_int_or_none, to_text_or_none
from worldbuilder.schemas.skills import clean_tier


@pytest.mark.parametrize("raw, expected", [
    ("", None),
    ("   ", None),
    (None, None),
    ("abc", None),
    ("nan", None),
    ("inf", None),
    (True, None),
    ([], None),
    ("12", 12.0),
    (" 2.5 ", 2.5),
    (7, 7.0),
])
def test_to_float_or_none(raw, expected):
    assert to_float_or_none(raw) == expected


def test_to_int_truncates():
    assert to_int_or_none("3.9") == 3
    assert to_int_or_none("-2") == -2
    assert to_int_or_none("") is None
    assert to_int_or_none(1e30) is None
    assert to_int_or_none("-1e19") is None


def test_text_is_trimmed_and_blank_is_null():
    assert to_text_or_none("  hi  ") == "hi"
    assert to_text_or_none("   ") is None
    assert to_text_or_none(5) == "5"


def test_to_bool_accepts_form_values():
    assert to_bool("true") and to_bool("1") and to_bool("on") and to_bool(1)
    assert not to_bool("false") and not to_bool("") and not to_bool(None) and not to_bool(0)


def test_clean_tier():
    assert [clean_tier(v) for v in (1, "2", 3.0, 0, 4, 1.5, "x", None)] == [1, 2, 3, None, None, None, None, None]


# ── models ──────────────────────────────────────────────────


def test_create_era_accepts_camel_and_snake_case():
    camel = parse(CreateEra, {"worldId": "4", "name": "Dawn", "startYear": "", "endYear": "12"})
    snake = parse(CreateEra, {"world_id": 4, "name": "Dawn", "end_year": 12})

    assert (camel.world_id, camel.start_year, camel.end_year) == (4, None, 12)
    assert (snake.world_id, snake.end_year) == (4, 12)


def test_missing_required_field_message():
    with pytest.raises(ValidationError) as info:
        parse(CreateEra, {"name": "Dawn"})
    assert "is required" in info.value.message


def test_bad_id_message():
    with pytest.raises(ValidationError) as info:
        parse(CreateEra, {"worldId": "abc", "name": "Dawn"})
    assert info.value.message.endswith("must be a valid id")


def test_era_patch_keeps_only_known_fields_that_were_sent():
    patch = parse(EraPatch, {"id": 1, "icon": "sun", "order_index": 3, "world_id": 2, "travel_safety": ""})

    assert patch.changes() == {"icon": "sun", "travel_safety": None}


def test_skill_create_defaults_for_blank_values():
    skill = parse(SkillCreate, {"name": "", "definition": None, "type": None})

    assert skill.name == "(unnamed)"
    assert skill.definition == ""
    assert skill.type == "standard"


def test_skill_slots_clamp_points():
    slots = parse(SkillSlotList, {"items": [{"skill_id": "3", "points": "-2"}, {"skill_id": 4}]}).items

    assert [(slot.skill_id, slot.clamped_points) for slot in slots] == [(3, 0), (4, 0)]


def test_skill_slot_without_id_is_rejected():
    with pytest.raises(ValidationError):
        parse(SkillSlotList, {"items": [{"points": 2}]})
