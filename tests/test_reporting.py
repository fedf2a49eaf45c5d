"""
Tests for response envelope shaping.
"""

from datetime import datetime

from budget_api.aggregation import BudgetRecord, EnvelopeBuilder, build_report


def _record(amount, record_id):
    return BudgetRecord(
        id=record_id, item="Coffee", amount=amount, date=datetime(2024, 3, 1, 8, 30),
        user="u1", tag="Food",
    )


class TestEnvelopeBuilder:
    """Envelopes keep stable field names and carry the injected version."""

    def test_report_envelope(self):
        builder = EnvelopeBuilder(version="2.3.4")
        report = build_report([_record("4", "a"), _record(6, "b")])

        envelope = builder.report(report)

        assert envelope["version"] == "2.3.4"
        assert envelope["items"] == 2
        assert envelope["total"] == 10
        assert [e["_id"] for e in envelope["expenses"]] == ["a", "b"]
        assert envelope["expenses"][0] == {
            "_id": "a",
            "item": "Coffee",
            "amount": "4",
            "event": None,
            "date": "2024-03-01T08:30:00",
            "tag": "Food",
            "user": "u1",
        }

    def test_empty_report_envelope(self):
        envelope = EnvelopeBuilder("1").report(build_report([]))

        assert envelope == {"version": "1", "items": 0, "expenses": [], "total": 0}

    def test_listing_envelope(self):
        envelope = EnvelopeBuilder("1").listing([_record(1, "a")])

        assert set(envelope) == {"version", "items", "budget"}
        assert envelope["items"] == 1

    def test_action_envelope(self):
        envelope = EnvelopeBuilder("9").action("Delete Budget: x", id="x")

        assert envelope == {"version": "9", "goal": "Delete Budget: x", "id": "x"}

    def test_version_fixed_per_builder(self):
        first, second = EnvelopeBuilder("a"), EnvelopeBuilder("b")

        assert first.envelope()["version"] == "a"
        assert second.envelope()["version"] == "b"
