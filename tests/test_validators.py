from dataclasses import replace

import pytest

from src.database.models import GeneratedPlan
from src.utils.errors import ValidationError
from src.utils.validators import DataValidator

from tests.conftest import plan_dict


@pytest.mark.parametrize("raw, expected", [
    ("80", 80.0),
    ("80, 81", 80.5),
    ("79.8, 80.6, 80", 80.13),
    (" 75 ,", 75.0),
])
def test_parse_numeric_averages_values(raw, expected):
    valid, value, error = DataValidator.parse_numeric(raw)
    assert valid is True
    assert value == expected
    assert error == ""


@pytest.mark.parametrize("raw", ["", "   ", "abc", "80, x", "0", "80, -1", ","])
def test_parse_numeric_rejects(raw):
    valid, value, error = DataValidator.parse_numeric(raw)
    assert valid is False
    assert value is None
    assert error


def test_age_and_timeframe_are_rounded():
    assert DataValidator.validate_age("30, 32") == (True, 31, "")
    assert DataValidator.validate_timeframe("11.6") == (True, 12, "")
    assert DataValidator.validate_age("5")[0] is False
    assert DataValidator.validate_timeframe("200")[0] is False


def test_weight_height_water_ranges():
    assert DataValidator.validate_weight("80")[1] == 80.0
    assert DataValidator.validate_weight("10")[0] is False
    assert DataValidator.validate_height("180")[1] == 180.0
    assert DataValidator.validate_height("50")[0] is False
    assert DataValidator.validate_water("2.5")[1] == 2.5
    assert DataValidator.validate_water("25")[0] is False


@pytest.mark.parametrize("raw, valid", [("45", True), ("0", False), ("12.5", False), ("abc", False), ("", False)])
def test_validate_duration(raw, valid):
    assert DataValidator.validate_duration(raw)[0] is valid


def test_validate_profile_accepts_valid(profile):
    assert DataValidator.validate_profile(profile) is profile


@pytest.mark.parametrize("changes", [
    {"age": 0},
    {"age": 30.5},
    {"timeframe": 0},
    {"weight": 0},
    {"height": -180},
    {"water_intake": "3"},
    {"goal": "Get Rich"},
    {"preferred_foods": 42},
])
def test_validate_profile_rejects(profile, changes):
    with pytest.raises(ValidationError):
        DataValidator.validate_profile(replace(profile, **changes))


def test_generated_plan_requires_all_weekdays():
    data = plan_dict()
    del data["workout_plan"]["Friday"]
    with pytest.raises(ValueError):
        GeneratedPlan.from_dict(data)


def test_generated_plan_rejects_bad_meal():
    data = plan_dict()
    data["diet_plan"]["Monday"]["Lunch"] = [{"description": "Soup", "calories": "many", "protein": 5}]
    with pytest.raises(ValueError):
        GeneratedPlan.from_dict(data)


def test_generated_plan_missing_meal_slot_is_empty():
    data = plan_dict()
    del data["diet_plan"]["Monday"]["Snacks"]
    plan = GeneratedPlan.from_dict(data)
    assert plan.diet_plan["Monday"]["Snacks"] == []


def test_generated_plan_rest_day():
    plan = GeneratedPlan.from_dict(plan_dict(workouts={"Sunday": []}))
    assert plan.is_rest_day("Sunday") is True
    assert plan.is_rest_day("Monday") is False
