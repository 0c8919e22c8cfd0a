"""Tests for per-entity list view setup."""

import pytest
from datetime import date


class TestDefaultStatisticsConfig:
    """Tests for default statistics per entity."""

    def test_deliveries(self, view_context):
        from src.views.registry import default_statistics_config

        config = default_statistics_config("deliveries", view_context)

        assert config.sum_fields == ("gallons_delivered", "total_amount")
        assert config.series_field == "gallons_delivered"
        assert config.comparison == "year"
        assert config.comparison_field == "gallons_delivered"
        assert config.bucket_count == 12

    def test_count_only_views_have_no_comparison(self, view_context):
        from src.views.registry import default_statistics_config

        assert default_statistics_config("team", view_context).comparison is None
        assert default_statistics_config("customers", view_context).sum_fields == ()

    def test_overrides(self, view_context):
        from src.views.registry import default_statistics_config

        config = default_statistics_config(
            "payments", view_context, bucket_period="week", bucket_count=8, comparison="month"
        )
        assert config.bucket_period == "week"
        assert config.bucket_count == 8
        assert config.comparison == "month"

    def test_unknown_entity(self, view_context):
        from src.exceptions import UnknownEntityError
        from src.views.registry import default_statistics_config

        with pytest.raises(UnknownEntityError):
            default_statistics_config("spaceships", view_context)


class TestCreateController:
    """Tests for the controller factory."""

    def test_delivery_history(self, sample_deliveries, view_context):
        """Customer delivery history: totals, gap and year over year."""
        from src.views.registry import create_controller

        controller = create_controller("deliveries", sample_deliveries, view_context)
        controller.set_filter_field("customer_id", ["c-1"])
        stats = controller.statistics

        assert stats.count == 3
        assert stats.sums["gallons_delivered"] == 4500.0
        assert stats.sums["total_amount"] == 900.0
        assert stats.average_days_between == pytest.approx(130.0)
        assert stats.comparison.change_percent == pytest.approx(25.0)
        assert stats.series[-1].value == 1500.0

    def test_statistics_overrides(self, sample_deliveries, view_context):
        from src.views.registry import create_controller

        controller = create_controller(
            "deliveries", sample_deliveries, view_context, bucket_count=6, comparison=None
        )
        assert len(controller.statistics.series) == 6
        assert controller.statistics.comparison is None

    def test_uses_context_clock(self, sample_payments):
        from config.settings import Config
        from src.views.context import ViewContext
        from src.views.registry import create_controller

        context = ViewContext(config=Config(), today_provider=lambda: date(2025, 2, 1))
        controller = create_controller("payments", sample_payments, context)
        assert controller.statistics.series[-1].label == "Feb 2025"
