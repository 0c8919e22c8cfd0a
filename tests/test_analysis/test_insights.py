"""Tests for inventory and team insights."""

import pytest


class TestInventoryStats:
    """Tests for headline stock figures."""

    def test_stock_counts(self, sample_inventory):
        from src.analysis.insights import compute_inventory_stats

        stats = compute_inventory_stats(sample_inventory)

        assert stats.total_items == 5
        # 40 * 8.5 + 4 * 65 + 0 * 310 + 2 * 1250
        assert stats.total_value == pytest.approx(3100.0)
        assert stats.low_stock_count == 1
        # Alternator at 0 and the item with no quantity
        assert stats.out_of_stock_count == 2

    def test_empty_inventory(self):
        from src.analysis.insights import InventoryStats, compute_inventory_stats

        assert compute_inventory_stats([]) == InventoryStats()


class TestInventoryInsights:
    """Tests for derived inventory insights."""

    def test_top_categories_by_value(self, sample_inventory):
        from src.analysis.insights import compute_inventory_insights

        insights = compute_inventory_insights(sample_inventory)
        names = [c.category for c in insights.top_categories]

        assert names[:3] == ["Tools", "Filters", "Brakes"]
        assert "Uncategorized" in names
        brakes = next(c for c in insights.top_categories if c.category == "Brakes")
        assert brakes.count == 1
        assert brakes.low_stock == 1

    def test_reorder_candidates_lowest_first(self, sample_inventory):
        from src.analysis.insights import compute_inventory_insights

        insights = compute_inventory_insights(sample_inventory)
        assert [i.id for i in insights.reorder_candidates] == ["i-3", "i-5", "i-2"]

    def test_high_value_items(self, sample_inventory):
        from src.analysis.insights import compute_inventory_insights

        insights = compute_inventory_insights(sample_inventory)
        assert [i.id for i in insights.high_value_items] == ["i-4"]

    def test_stock_health_score(self, sample_inventory):
        from src.analysis.insights import compute_inventory_insights

        insights = compute_inventory_insights(sample_inventory)
        # 2 healthy items out of 5
        assert insights.stock_health_score == pytest.approx(40.0)
        assert insights.average_value == pytest.approx(620.0)

    def test_top_n(self, sample_inventory):
        from src.analysis.insights import compute_inventory_insights

        insights = compute_inventory_insights(sample_inventory, top_n=1)
        assert len(insights.top_categories) == 1
        assert len(insights.reorder_candidates) == 1

    def test_empty_inventory(self):
        from src.analysis.insights import compute_inventory_insights

        insights = compute_inventory_insights([])
        assert insights.top_categories == []
        assert insights.stock_health_score == 0.0
        assert insights.average_value == 0.0


class TestTeamStats:
    """Tests for team stats."""

    def test_team_counts(self, sample_team):
        from src.analysis.insights import compute_team_stats

        stats = compute_team_stats(sample_team)

        assert stats.total_members == 4
        assert stats.active_members == 2
        assert stats.on_leave_members == 1
        assert stats.departments == 2
        assert stats.roles == 2
