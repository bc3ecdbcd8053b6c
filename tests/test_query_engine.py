"""Tests for tab views and search."""

from datetime import datetime, timezone

import pytest

from rfp_desk.models.records import RFPStatus
from rfp_desk.query.engine import QueryEngine, Tab, by_tab, is_completed, search
from rfp_desk.query.seeds import seed_records

from tests.conftest import NOW, make_record


def ids(records):
    return [r.id for r in records]


class TestTab:
    """Tests for tab name parsing."""

    @pytest.mark.parametrize("value", ["recent", "OPEN", " extended ", "completed"])
    def test_known_tabs(self, value):
        assert Tab.parse(value).value == value.strip().lower()

    @pytest.mark.parametrize("value", ["archived", "", None])
    def test_unknown_tab_falls_back_to_recent(self, value):
        assert Tab.parse(value) is Tab.RECENT


class TestByTab:
    """Tests for by_tab."""

    def test_recent_sorted_by_upload_desc(self, sample_records):
        result = by_tab("recent", sample_records, NOW)
        assert ids(result) == ["1002", "1003", "1001"]

    def test_open(self, sample_records):
        assert ids(by_tab("open", sample_records, NOW)) == ["1001"]

    def test_extended(self, sample_records):
        assert ids(by_tab("extended", sample_records, NOW)) == ["1002"]

    def test_completed_by_deadline_desc(self, sample_records):
        result = by_tab("completed", sample_records, NOW)
        assert ids(result) == ["1003", "1001"]

    def test_completed_is_strictly_before_now(self):
        now = datetime(2026, 3, 1, tzinfo=timezone.utc)
        on_the_dot = make_record("a", deadline="2026-03-01")
        just_before = make_record("b", deadline="2026-02-28")
        result = by_tab("completed", [on_the_dot, just_before], now)
        assert ids(result) == ["b"]

    def test_completed_matches_predicate_for_any_clock(self, sample_records):
        for now in (
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 12, 1, tzinfo=timezone.utc),
            datetime(2027, 1, 1, tzinfo=timezone.utc),
        ):
            expected = {r.id for r in sample_records if is_completed(r, now)}
            assert set(ids(by_tab("completed", sample_records, now))) == expected

    def test_naive_now_is_treated_as_utc(self, sample_records):
        naive = datetime(2026, 1, 1)
        assert ids(by_tab("completed", sample_records, naive)) == ["1003", "1001"]
        assert is_completed(sample_records[0], naive)

    def test_unknown_tab_behaves_like_recent(self, sample_records):
        assert ids(by_tab("bogus", sample_records, NOW)) == ids(by_tab("recent", sample_records, NOW))

    def test_bad_upload_time_sorts_oldest(self, sample_records):
        broken = make_record("9999", uploaded_at="garbage")
        missing = make_record("9998", uploaded_at=None)
        result = by_tab("recent", [broken, *sample_records, missing], NOW)
        assert ids(result)[:3] == ["1002", "1003", "1001"]
        assert set(ids(result)[3:]) == {"9999", "9998"}

    def test_does_not_mutate_input(self, sample_records):
        before = list(sample_records)
        by_tab("completed", sample_records, NOW)
        assert sample_records == before


class TestSeedFallback:
    """Tests for the seed records shown on an empty store."""

    def test_recent_on_empty_collection(self):
        result = by_tab("recent", [], NOW)
        assert ids(result) == ["default-dmrc", "default-drl", "default-dmrc-phase4"]
        assert [r.status for r in result] == [RFPStatus.OPEN, RFPStatus.OPEN, RFPStatus.EXTENDED]

    def test_seed_tabs_use_same_predicates(self):
        assert ids(by_tab("open", [], NOW)) == ["default-dmrc", "default-drl"]
        assert ids(by_tab("extended", [], NOW)) == ["default-dmrc-phase4"]
        assert by_tab("completed", [], NOW) == []

    def test_seed_completed_later_in_year(self):
        now = datetime(2026, 5, 25, tzinfo=timezone.utc)
        assert ids(by_tab("completed", [], now)) == ["default-dmrc-phase4", "default-dmrc"]

    def test_seed_durations_follow_clock(self):
        seeds = {r.id: r for r in seed_records(NOW)}
        assert seeds["default-dmrc"].duration_days == 119
        assert seeds["default-dmrc"].file_url == "/REQUEST%20FOR%20PROPOSAL%20(RFP)%20(2).pdf"

    def test_stored_records_hide_seeds(self, sample_records):
        assert not any(r.is_seed for r in by_tab("recent", sample_records, NOW))


class TestSearch:
    """Tests for free-text search."""

    def test_metro_over_seeds(self):
        result = search(seed_records(NOW), "metro")
        assert ids(result) == ["default-dmrc", "default-dmrc-phase4"]

    def test_case_insensitive(self, sample_records):
        assert ids(search(sample_records, "CHENNAI")) == ["1002"]

    def test_matches_summary(self, sample_records):
        assert ids(search(sample_records, "water meters")) == ["1003"]

    def test_matches_status(self, sample_records):
        assert ids(search(sample_records, "extended")) == ["1002"]

    def test_matches_formatted_deadline(self, sample_records):
        assert ids(search(sample_records, "Feb 10")) == ["1002"]

    def test_blank_term_matches_everything(self, sample_records):
        assert search(sample_records, "   ") == sample_records
        assert search(sample_records, None) == sample_records


class TestQueryEngine:
    """Tests for the composed browse view."""

    def test_search_applies_after_tab(self, sample_records):
        engine = QueryEngine(clock=lambda: NOW)
        assert ids(engine.view(sample_records, tab="completed", term="metro")) == ["1001"]
        assert engine.view(sample_records, tab="extended", term="metro") == []

    def test_empty_store_search_over_seeds(self):
        engine = QueryEngine(clock=lambda: NOW)
        assert ids(engine.view([], tab="open", term="rail limited")) == ["default-drl"]

    def test_naive_clock(self, sample_records):
        engine = QueryEngine(clock=lambda: datetime(2026, 1, 1))
        assert ids(engine.view(sample_records, tab="completed")) == ["1003", "1001"]
