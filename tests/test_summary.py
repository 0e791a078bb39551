#!/usr/bin/env python3
"""Tests for summary counters and report payloads."""
from datetime import date

import pytest

from expiry import AlertSummary, build_all, build_report, report_rows, summarize
from expiry.summary import vehicles_by_tier

CLOCK = lambda: date(2025, 7, 1)  # noqa: E731


@pytest.fixture
def alerts():
    fleet = [
        # expired insurance + critical license on the same vehicle
        {"id": "a", "vehicleNumber": "A-1", "insuranceExpiry": "2025-06-25", "licenseExpiry": "2025-07-04"},
        {"id": "b", "vehicleNumber": "B-2", "insuranceExpiry": "2025-07-12"},
        {"id": "c", "insuranceExpiry": "2025-07-20", "licenseExpiry": "2025-06-01"},
        {"id": "d", "insuranceExpiry": "2026-01-01"},
    ]
    return build_all(fleet, clock=CLOCK)


class TestSummarize:
    """Tests for summarize."""

    def test_counts_by_tier(self, alerts):
        summary = summarize(alerts)
        assert summary.count_by_tier("insurance") == {"expired": 1, "critical": 0, "warning": 1, "info": 1}
        assert summary.count_by_tier("license") == {"expired": 1, "critical": 1, "warning": 0, "info": 0}

    def test_fields_without_alerts_have_zero_counts(self, alerts):
        summary = summarize(alerts)
        assert summary.count_by_tier("emission") == {"expired": 0, "critical": 0, "warning": 0, "info": 0}

    def test_unknown_field_type_is_all_zero(self, alerts):
        assert sum(summarize(alerts).count_by_tier("boat").values()) == 0

    def test_totals_do_not_deduplicate_records(self, alerts):
        summary = summarize(alerts)
        assert summary.total_expired == 2
        assert summary.total_expiring == 3
        assert summary.total == 5

    def test_to_dict_shape(self, alerts):
        data = summarize(alerts).to_dict()
        assert set(data) == {"byField", "totalExpiring", "totalExpired"}
        assert data["byField"]["license"]["critical"] == 1

    def test_empty(self):
        summary = summarize({})
        assert summary == AlertSummary()
        assert summary.to_dict() == {"byField": {}, "totalExpiring": 0, "totalExpired": 0}

    def test_count_by_tier_returns_copy(self, alerts):
        summary = summarize(alerts)
        summary.count_by_tier("insurance")["expired"] = 99
        assert summary.count_by_tier("insurance")["expired"] == 1


class TestReportRows:
    """Tests for report_rows."""

    def test_rows_are_flat_and_sorted(self, alerts):
        rows = report_rows(alerts)
        assert [r["daysRemaining"] for r in rows] == [-30, -6, 3, 11, 19]
        assert rows[1] == {
            "recordId": "a",
            "displayId": "A-1",
            "fieldType": "insurance",
            "label": "Insurance",
            "expiryDate": "2025-06-25",
            "daysRemaining": -6,
            "urgencyLevel": "expired",
        }

    def test_display_id_falls_back_to_record_id(self, alerts):
        row = next(r for r in report_rows(alerts) if r["recordId"] == "c")
        assert row["displayId"] == "c"


class TestBuildReport:
    """Tests for vehicles_by_tier and build_report."""

    def test_vehicles_by_tier_counts_distinct_vehicles(self, alerts):
        assert vehicles_by_tier(alerts) == {"expired": 2, "critical": 1, "warning": 1, "info": 1}

    def test_report_payload(self, alerts):
        report = build_report(alerts, "weekly", date(2025, 7, 1))
        assert report["title"] == "Document Expiry Alerts Report (Weekly)"
        assert report["period"] == "weekly"
        assert report["generatedOn"] == "2025-07-01"
        assert report["vehicleCount"] == 3
        assert report["summary"]["totalExpired"] == 2
        assert len(report["rows"]) == 5

    def test_unknown_period(self, alerts):
        with pytest.raises(ValueError, match="Unknown report period"):
            build_report(alerts, "hourly")
