"""Tests for audit change descriptions."""

from datetime import date


class TestFormatValue:
    """Tests for display formatting."""

    def test_empty_values(self):
        from src.analysis.audit import format_value

        assert format_value(None) == "(empty)"
        assert format_value("") == "(empty)"

    def test_numbers(self):
        from src.analysis.audit import format_value

        assert format_value(100) == "100"
        assert format_value(100.0) == "100"
        assert format_value(1234.5) == "1,234.50"

    def test_booleans_and_dates(self):
        from src.analysis.audit import format_value

        assert format_value(True) == "Yes"
        assert format_value(False) == "No"
        assert format_value(date(2024, 1, 5)) == "2024-01-05"


class TestDiffRecords:
    """Tests for record comparison."""

    def test_changed_fields(self):
        from src.analysis.audit import diff_records

        before = {"gallons_delivered": 100, "payment_method": "cash", "notes": None}
        after = {"gallons_delivered": 150, "payment_method": "cash", "notes": "Gate code 42"}
        changes = diff_records(before, after)

        assert [c.field for c in changes] == ["gallons_delivered", "notes"]
        assert changes[0].describe() == "Gallons Delivered changed from 100 to 150"
        assert changes[1].describe() == "Notes changed from (empty) to Gate code 42"

    def test_equivalent_values_are_unchanged(self):
        from src.analysis.audit import diff_records

        before = {"amount": 100, "notes": None, "delivery_date": date(2024, 1, 5)}
        after = {"amount": 100.0, "notes": "", "delivery_date": date(2024, 1, 5)}
        assert diff_records(before, after) == []

    def test_missing_key_is_empty(self):
        from src.analysis.audit import diff_records

        changes = diff_records({"a": 1}, {"b": 2})
        assert [(c.field, c.previous, c.new) for c in changes] == [("a", 1, None), ("b", None, 2)]

    def test_labels_and_field_subset(self):
        from src.analysis.audit import diff_records

        changes = diff_records(
            {"total_amount": 10, "status": "pending"},
            {"total_amount": 20, "status": "completed"},
            labels={"total_amount": "Total"},
            fields=["total_amount"],
        )
        assert len(changes) == 1
        assert changes[0].describe() == "Total changed from 10 to 20"

    def test_describe_changes(self):
        from src.analysis.audit import describe_changes

        assert describe_changes({"status": "pending"}, {"status": "completed"}) == [
            "Status changed from pending to completed"
        ]
