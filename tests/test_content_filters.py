import pytest

from temporal_cache.core.content.filters import ContentFilter, filter_records, is_harmonizable
from temporal_cache.core.content.statistics import content_statistics
from temporal_cache.core.harmonization.config import HarmonizationConfig
from temporal_cache.core.temporal.models import TemporalRecord

MIDNIGHT = 1609459200
NOW = MIDNIGHT + 12 * 3600

RECORDS = [
    TemporalRecord(uid=1, table_name="pages"),
    TemporalRecord(uid=2, table_name="pages", visible_from=NOW + 600),
    TemporalRecord(uid=3, table_name="tt_content", visible_until=NOW - 60),
    TemporalRecord(uid=4, table_name="tt_content", visible_from=NOW - 60, visible_until=NOW + 7200, hidden=True),
]


@pytest.mark.parametrize(
    "name,expected",
    [
        ("all", [1, 2, 3, 4]),
        ("pages", [1, 2]),
        ("content", [3, 4]),
        ("active", [1]),
        ("scheduled", [2]),
        ("expired", [3]),
        ("harmonizable", [2]),
    ],
)
def test_filter_records(harmonization_config, name, expected):
    out = filter_records(RECORDS, ContentFilter.parse(name), NOW, harmonization_config)
    assert [r.uid for r in out] == expected


def test_unknown_filter_lists_everything():
    assert ContentFilter.parse("invalid_filter") == ContentFilter.ALL
    assert ContentFilter.parse(None) == ContentFilter.ALL
    assert ContentFilter.parse(" Pages ") == ContentFilter.PAGES


def test_harmonizable_false_when_disabled():
    config = HarmonizationConfig(enabled=False)
    assert is_harmonizable(RECORDS[1], config) is False


def test_harmonizable_false_for_bounds_on_slots(harmonization_config):
    r = TemporalRecord(uid=5, table_name="pages", visible_from=MIDNIGHT + 6 * 3600)
    assert is_harmonizable(r, harmonization_config) is False


def test_content_statistics(harmonization_config):
    stats = content_statistics(RECORDS, NOW, harmonization_config)

    assert stats.total == 4
    assert (stats.pages, stats.content) == (2, 2)
    assert (stats.active, stats.scheduled, stats.expired) == (1, 1, 1)
    assert stats.with_bounds == 3
    assert stats.harmonizable == 1
    assert stats.next_transition == NOW + 600
    assert stats.transitions_in_horizon == 2
    assert stats.to_dict()["timeline"][0]["uid"] == 2


def test_content_statistics_empty(harmonization_config):
    out = content_statistics([], NOW, harmonization_config).to_dict()
    assert out["total"] == 0
    assert out["next_transition"] is None
    assert out["timeline"] == []
