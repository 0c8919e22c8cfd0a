"""Tests for data export module."""

import pytest
import pandas as pd
import io


@pytest.fixture
def exporter(tmp_path):
    from src.analysis.export import DataExporter

    return DataExporter(tmp_path / "exports")


class TestRecordsToDataFrame:
    """Tests for tabulating records."""

    def test_all_schema_fields(self, sample_deliveries):
        from src.analysis.export import records_to_dataframe
        from src.records.schemas import DELIVERY_SCHEMA

        df = records_to_dataframe(sample_deliveries, DELIVERY_SCHEMA)

        assert list(df.columns) == list(DELIVERY_SCHEMA.names())
        assert len(df) == 4
        assert pd.api.types.is_datetime64_any_dtype(df["delivery_date"])
        assert pd.isna(df.loc[3, "delivery_date"])

    def test_selected_columns_with_labels(self, sample_deliveries):
        from src.analysis.export import records_to_dataframe
        from src.records.schemas import DELIVERY_SCHEMA

        df = records_to_dataframe(
            sample_deliveries, DELIVERY_SCHEMA, ["order_number", "gallons_delivered"], use_labels=True
        )
        assert list(df.columns) == ["Order #", "Gallons"]

    def test_unknown_column(self, sample_deliveries):
        from src.analysis.export import records_to_dataframe
        from src.exceptions import UnknownFieldError
        from src.records.schemas import DELIVERY_SCHEMA

        with pytest.raises(UnknownFieldError):
            records_to_dataframe(sample_deliveries, DELIVERY_SCHEMA, ["litres"])

    def test_empty_records(self):
        from src.analysis.export import records_to_dataframe
        from src.records.schemas import PAYMENT_SCHEMA

        df = records_to_dataframe([], PAYMENT_SCHEMA)
        assert df.empty
        assert "amount" in df.columns


class TestDataExporter:
    """Tests for DataExporter class."""

    def test_exporter_creates_directory(self, tmp_path):
        from src.analysis.export import DataExporter

        exporter = DataExporter(tmp_path / "nested" / "exports")
        assert exporter.output_dir.exists()

    def test_generate_filename(self, exporter):
        assert exporter.generate_filename("deliveries", "xlsx", include_timestamp=False) == "deliveries.xlsx"
        name = exporter.generate_filename("deliveries")
        assert name.startswith("deliveries_") and name.endswith(".csv")

    def test_export_to_csv_file(self, exporter, sample_work_orders):
        from src.records.schemas import WORK_ORDER_SCHEMA

        path = exporter.export_to_csv(sample_work_orders, WORK_ORDER_SCHEMA, filename="orders.csv")

        assert path == exporter.output_dir / "orders.csv"
        df = pd.read_csv(path)
        assert len(df) == 4
        assert "WO-1001" in df["work_order_number"].tolist()

    def test_export_to_csv_buffer(self, exporter, sample_work_orders):
        """Test CSV export to buffer."""
        from src.records.schemas import WORK_ORDER_SCHEMA

        buffer = exporter.export_to_csv_buffer(sample_work_orders, WORK_ORDER_SCHEMA)

        assert isinstance(buffer, io.StringIO)
        content = buffer.read()
        assert "work_order_number" in content
        assert "WO-1003" in content

    def test_export_to_csv_buffer_with_columns(self, exporter, sample_work_orders):
        """Test CSV export with specific columns."""
        from src.records.schemas import WORK_ORDER_SCHEMA

        buffer = exporter.export_to_csv_buffer(
            sample_work_orders, WORK_ORDER_SCHEMA, columns=["work_order_number", "status"]
        )
        lines = buffer.read().strip().split("\n")
        assert lines[0].strip() == "work_order_number,status"

    def test_export_to_excel_buffer(self, exporter, sample_payments):
        """Test Excel export to buffer."""
        from src.records.schemas import PAYMENT_SCHEMA

        buffer = exporter.export_to_excel_buffer(sample_payments, PAYMENT_SCHEMA)

        assert isinstance(buffer, io.BytesIO)
        assert buffer.getbuffer().nbytes > 0
        sheets = pd.read_excel(buffer, sheet_name=None)
        assert list(sheets) == ["Records", "Summary"]
        assert len(sheets["Records"]) == 3
        assert "Invoice #" in sheets["Records"].columns

    def test_export_to_excel_with_statistics(self, exporter, sample_payments, today):
        """Statistics add summary rows and a series sheet."""
        from src.analysis.statistics import StatisticsConfig, aggregate
        from src.filtering.filter_state import FilterState
        from src.records.schemas import PAYMENT_SCHEMA

        config = StatisticsConfig(schema=PAYMENT_SCHEMA, sum_fields=("amount",), bucket_count=3)
        statistics = aggregate(sample_payments, config, today=today)
        state = FilterState().with_selection("status", ["paid"])

        buffer = exporter.export_to_excel_buffer(
            sample_payments, PAYMENT_SCHEMA, statistics=statistics, filter_state=state
        )
        sheets = pd.read_excel(buffer, sheet_name=None)

        assert list(sheets) == ["Records", "Summary", "Series"]
        metrics = dict(zip(sheets["Summary"]["Metric"], sheets["Summary"]["Value"]))
        assert metrics["Filters"] == "Status: paid"
        assert float(metrics["amount_total"]) == pytest.approx(665.5)
        assert sheets["Series"]["Period"].tolist() == ["Apr 2024", "May 2024", "Jun 2024"]

    def test_export_without_summary(self, exporter, sample_payments):
        from src.records.schemas import PAYMENT_SCHEMA

        buffer = exporter.export_to_excel_buffer(
            sample_payments, PAYMENT_SCHEMA, include_summary_sheet=False
        )
        assert list(pd.read_excel(buffer, sheet_name=None)) == ["Records"]


class TestStatisticsFrames:
    """Tests for statistics tables."""

    def test_statistics_to_dataframe(self, sample_payments, today):
        from src.analysis.export import statistics_to_dataframe
        from src.analysis.statistics import StatisticsConfig, aggregate
        from src.records.schemas import PAYMENT_SCHEMA

        config = StatisticsConfig(schema=PAYMENT_SCHEMA, sum_fields=("amount",))
        df = statistics_to_dataframe(aggregate(sample_payments, config, today=today))

        assert list(df.columns) == ["Metric", "Value"]
        assert "amount_average" in df["Metric"].tolist()
