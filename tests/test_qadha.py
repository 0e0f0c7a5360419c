from datetime import date

import pytest

from wardaty.qadha import (
    QadhaKind,
    QadhaLogEntry,
    QadhaSummary,
    made_up_dates,
    recalculate,
    summarize,
)


# -- summarize --

class TestSummarize:
    def test_counts(self, make_qadha_entries):
        summary = summarize(make_qadha_entries(missed=10, made_up=3))
        assert summary == QadhaSummary(total_missed=10, total_made_up=3, remaining=7)

    def test_one_more_made_up(self, make_qadha_entries):
        entries = make_qadha_entries(missed=10, made_up=3)
        entries.append(QadhaLogEntry(date(2024, 3, 1), QadhaKind.MADE_UP))
        assert summarize(entries).remaining == 6

    def test_empty(self):
        assert summarize([]) == QadhaSummary(total_missed=0, total_made_up=0, remaining=0)

    def test_remaining_never_negative(self, make_qadha_entries):
        summary = summarize(make_qadha_entries(missed=2, made_up=5))
        assert summary.remaining == 0

    def test_order_does_not_matter(self, make_qadha_entries):
        entries = make_qadha_entries(missed=4, made_up=2)
        assert summarize(entries) == summarize(list(reversed(entries)))

    def test_idempotent(self, make_qadha_entries):
        entries = make_qadha_entries(missed=4, made_up=1)
        assert summarize(entries) == summarize(entries)

    def test_accepts_generator(self, make_qadha_entries):
        entries = make_qadha_entries(missed=3, made_up=1)
        assert summarize(e for e in entries).remaining == 2

    def test_override_replaces_missed_count(self, make_qadha_entries):
        summary = summarize(make_qadha_entries(missed=2, made_up=3), total_missed_override=30)
        assert summary == QadhaSummary(total_missed=30, total_made_up=3, remaining=27)

    def test_zero_override(self, make_qadha_entries):
        summary = summarize(make_qadha_entries(missed=2), total_missed_override=0)
        assert summary.total_missed == 0

    def test_negative_override_clamped(self, make_qadha_entries):
        summary = summarize(make_qadha_entries(made_up=1), total_missed_override=-4)
        assert summary.total_missed == 0
        assert summary.remaining == 0


class TestQadhaSummary:
    def test_progress(self):
        assert QadhaSummary(total_missed=10, total_made_up=3, remaining=7).progress == pytest.approx(0.3)

    def test_progress_nothing_owed(self):
        assert QadhaSummary(total_missed=0, total_made_up=0, remaining=0).progress == 0.0

    def test_progress_capped(self):
        assert QadhaSummary(total_missed=2, total_made_up=5, remaining=0).progress == 1.0

    def test_total_logged(self):
        assert QadhaSummary(total_missed=10, total_made_up=3, remaining=7).total_logged == 10

    def test_to_dict(self):
        assert QadhaSummary(total_missed=4, total_made_up=1, remaining=3).to_dict() == {
            "total_missed": 4,
            "total_made_up": 1,
            "remaining": 3,
            "progress": 0.25,
        }


# -- recalculate --

class TestRecalculate:
    def test_base_plus_logged_missed(self, make_qadha_entries):
        summary = recalculate(make_qadha_entries(missed=2, made_up=1), base_total_missed=5)
        assert summary == QadhaSummary(total_missed=7, total_made_up=1, remaining=6)

    def test_default_base(self, make_qadha_entries):
        assert recalculate(make_qadha_entries(missed=2)).total_missed == 2


# -- made_up_dates --

class TestMadeUpDates:
    def test_filters_month_and_kind(self, make_qadha_entries):
        entries = make_qadha_entries(missed=3, made_up=2)
        assert made_up_dates(entries, 2024, 2) == [date(2024, 2, 1), date(2024, 2, 2)]
        assert made_up_dates(entries, 2024, 1) == []


# -- QadhaLogEntry.from_record --

class TestFromRecord:
    def test_missed(self):
        entry = QadhaLogEntry.from_record({"date": "2024-01-05", "type": "missed", "notes": "travel"})
        assert entry == QadhaLogEntry(date(2024, 1, 5), QadhaKind.MISSED, "travel")

    def test_completed_alias(self):
        entry = QadhaLogEntry.from_record({"date": "2024-01-05", "type": "completed"})
        assert entry.kind == QadhaKind.MADE_UP

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            QadhaLogEntry.from_record({"date": "2024-01-05", "type": "skipped"})

    def test_malformed_date_raises(self):
        with pytest.raises(ValueError):
            QadhaLogEntry.from_record({"date": "05/01/2024", "type": "missed"})

    def test_missing_date_raises(self):
        with pytest.raises(ValueError):
            QadhaLogEntry.from_record({"type": "missed"})
