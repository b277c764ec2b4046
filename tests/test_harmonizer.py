import pytest

from temporal_cache.core.harmonization.config import HarmonizationConfig, format_slot, parse_slot
from temporal_cache.core.harmonization.errors import ConfigurationDisabled, InvalidConfiguration
from temporal_cache.core.harmonization.harmonizer import (
    distance_to_slot,
    harmonize,
    is_within_tolerance,
    suggest_for_record,
)
from temporal_cache.core.temporal.models import TemporalRecord

# 2021-01-01T00:00:00Z
MIDNIGHT = 1609459200

DAY = 86400


def test_harmonize_rounds_to_midnight(harmonization_config):
    # 2021-01-01 00:30:00 -> 00:00:00
    assert harmonize(1609461000, harmonization_config) == 1609459200


def test_harmonize_exact_slot_unchanged(harmonization_config):
    for offset in (0, 6 * 3600, 12 * 3600, 18 * 3600):
        assert harmonize(MIDNIGHT + offset, harmonization_config) == MIDNIGHT + offset


@pytest.mark.parametrize("offset", [1, 599, 3 * 3600 - 1, 3 * 3600 + 1, 7 * 3600 + 17, 23 * 3600 + 59 * 60])
def test_harmonize_is_idempotent(harmonization_config, offset):
    once = harmonize(MIDNIGHT + offset, harmonization_config)
    assert harmonize(once, harmonization_config) == once


def test_harmonize_wraps_to_next_midnight(harmonization_config):
    # 23:40 is closer to the next day's 00:00 than to 18:00
    assert harmonize(MIDNIGHT + 23 * 3600 + 40 * 60, harmonization_config) == MIDNIGHT + DAY


def test_harmonize_wraps_to_previous_day_slot():
    config = HarmonizationConfig.from_slot_strings(["23:00"])
    # 00:30 is 90 minutes after the previous day's 23:00
    assert harmonize(MIDNIGHT + 1800, config) == MIDNIGHT - 3600


def test_harmonize_tie_prefers_earlier_candidate(harmonization_config):
    # 03:00 is exactly between 00:00 and 06:00
    assert harmonize(MIDNIGHT + 3 * 3600, harmonization_config) == MIDNIGHT


def test_harmonize_ignores_tolerance_for_rounding():
    config = HarmonizationConfig.from_slot_strings(["00:00", "12:00"], tolerance_seconds=60)
    assert harmonize(MIDNIGHT + 5 * 3600, config) == MIDNIGHT


def test_harmonize_disabled_raises():
    config = HarmonizationConfig(enabled=False)
    with pytest.raises(ConfigurationDisabled):
        harmonize(MIDNIGHT, config)


def test_harmonize_empty_slots_rejected():
    with pytest.raises(InvalidConfiguration):
        harmonize(MIDNIGHT, HarmonizationConfig(enabled=True, slots=()))


def test_harmonize_negative_tolerance_rejected():
    with pytest.raises(InvalidConfiguration):
        harmonize(MIDNIGHT, HarmonizationConfig(enabled=True, tolerance_seconds=-1))


def test_harmonize_unordered_slots_rejected():
    with pytest.raises(InvalidConfiguration):
        harmonize(MIDNIGHT, HarmonizationConfig(enabled=True, slots=(3600, 0)))


def test_parse_and_format_slot():
    assert parse_slot("06:30") == 6 * 3600 + 1800
    assert parse_slot(" 18:00 ") == 18 * 3600
    assert parse_slot("00:00:30") == 30
    assert format_slot(6 * 3600 + 1800) == "06:30"
    for bad in ("24:00", "12", "ab:cd", "12:60"):
        with pytest.raises(InvalidConfiguration):
            parse_slot(bad)


def test_distance_and_tolerance(harmonization_config):
    assert distance_to_slot(MIDNIGHT + 1800, harmonization_config) == 1800
    assert is_within_tolerance(MIDNIGHT + 1800, harmonization_config) is True
    assert is_within_tolerance(MIDNIGHT + 2 * 3600, harmonization_config) is False


def test_suggest_for_record(harmonization_config):
    r = TemporalRecord(uid=7, table_name="pages", visible_from=MIDNIGHT + 600, visible_until=MIDNIGHT + 12 * 3600)
    s = suggest_for_record(r, harmonization_config)

    assert s.harmonized_from == MIDNIGHT
    assert s.harmonized_until == MIDNIGHT + 12 * 3600
    assert s.changed is True
    assert s.within_tolerance is True
    assert s.to_dict()["uid"] == 7


def test_suggest_for_record_keeps_absent_bounds(harmonization_config):
    r = TemporalRecord(uid=8, table_name="pages", visible_until=MIDNIGHT + 6 * 3600)
    s = suggest_for_record(r, harmonization_config)

    assert s.harmonized_from is None
    assert s.changed is False


def test_suggest_for_record_flags_far_bounds(harmonization_config):
    r = TemporalRecord(uid=9, table_name="pages", visible_from=MIDNIGHT + 2 * 3600)
    s = suggest_for_record(r, harmonization_config)

    assert s.harmonized_from == MIDNIGHT
    assert s.within_tolerance is False


def test_harmonize_tie_across_days_prefers_previous_day():
    config = HarmonizationConfig.from_slot_strings(["12:00"])
    # midnight is 12h from both yesterday's and today's noon
    assert harmonize(MIDNIGHT, config) == MIDNIGHT - 12 * 3600
