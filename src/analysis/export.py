"""Export list view contents and statistics."""

import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from datetime import datetime
import io
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.logging_config import get_logger
from config.settings import load_config
from src.analysis.statistics import StatisticsResult
from src.filtering.filter_state import FilterState
from src.records.fields import FieldKind, RecordSchema

logger = get_logger("export")


def records_to_dataframe(
    records: Sequence[Any],
    schema: RecordSchema,
    columns: Optional[List[str]] = None,
    use_labels: bool = False,
) -> pd.DataFrame:
    """
    Tabulate records through their schema.

    Args:
        records: Records to tabulate.
        schema: Field catalogue of the records.
        columns: Fields to include (all schema fields if None).
        use_labels: Use display labels as column headers.

    Returns:
        DataFrame with one row per record; date fields as datetimes.

    Raises:
        UnknownFieldError: If a requested column is not in the schema.
    """
    names = list(columns) if columns else list(schema.names())
    data: Dict[str, List[Any]] = {}
    for name in names:
        spec = schema.field(name)
        if spec.kind is FieldKind.DATE:
            data[name] = [schema.date(r, name) for r in records]
        else:
            data[name] = [spec.accessor(r) for r in records]

    df = pd.DataFrame(data, columns=names)
    for name in names:
        if schema.field(name).kind is FieldKind.DATE:
            df[name] = pd.to_datetime(df[name], errors="coerce")
    if use_labels:
        df = df.rename(columns=schema.labels(names))
    return df


def statistics_to_dataframe(statistics: StatisticsResult) -> pd.DataFrame:
    """Two-column Metric / Value table of a statistics result."""
    rows = [{"Metric": key, "Value": value} for key, value in statistics.to_dict().items()]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def series_to_dataframe(statistics: StatisticsResult) -> pd.DataFrame:
    """Chart series as a Period / Start / End / Value table."""
    return pd.DataFrame(
        [
            {"Period": b.label, "Start": b.start, "End": b.end, "Value": b.value}
            for b in statistics.series
        ],
        columns=["Period", "Start", "End", "Value"],
    )


class DataExporter:
    """Export list view data to CSV and Excel."""

    def __init__(self, output_dir: Optional[Path] = None):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for file exports (configured exports path if None).
        """
        self.output_dir = Path(output_dir) if output_dir else load_config().data.exports_path
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate_filename(
        self,
        base_name: str = "shop_export",
        extension: str = "csv",
        include_timestamp: bool = True,
    ) -> str:
        """Generate export filename."""
        if include_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            return f"{base_name}_{timestamp}.{extension}"
        return f"{base_name}.{extension}"

    def export_to_csv(
        self,
        records: Sequence[Any],
        schema: RecordSchema,
        filename: Optional[str] = None,
        columns: Optional[List[str]] = None,
    ) -> Path:
        """
        Export records to a CSV file.

        Returns:
            Path to exported file.
        """
        if filename is None:
            filename = self.generate_filename(f"{schema.entity}_export", "csv")

        df = records_to_dataframe(records, schema, columns)
        filepath = self.output_dir / filename
        df.to_csv(filepath, index=False, encoding="utf-8")

        logger.info(f"Exported {len(df)} {schema.entity} records to {filepath}")
        return filepath

    def export_to_csv_buffer(
        self,
        records: Sequence[Any],
        schema: RecordSchema,
        columns: Optional[List[str]] = None,
    ) -> io.StringIO:
        """
        Export records to an in-memory CSV buffer (for downloads).

        Returns:
            StringIO buffer with CSV data.
        """
        df = records_to_dataframe(records, schema, columns)
        buffer = io.StringIO()
        df.to_csv(buffer, index=False, encoding="utf-8")
        buffer.seek(0)
        return buffer

    def export_to_excel_buffer(
        self,
        records: Sequence[Any],
        schema: RecordSchema,
        statistics: Optional[StatisticsResult] = None,
        filter_state: Optional[FilterState] = None,
        include_summary_sheet: bool = True,
    ) -> io.BytesIO:
        """
        Export records to an in-memory Excel workbook.

        Args:
            records: Records to export (usually the visible subset).
            schema: Field catalogue of the records.
            statistics: Statistics to add as Summary and Series sheets.
            filter_state: Active filters, noted on the Summary sheet.
            include_summary_sheet: Add the Summary sheet.

        Returns:
            BytesIO buffer with Excel data.
        """
        buffer = io.BytesIO()
        df = records_to_dataframe(records, schema, use_labels=True)

        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Records", index=False)
            self._format_sheet(writer.sheets["Records"])

            if include_summary_sheet:
                summary = self._create_summary_df(records, schema, statistics, filter_state)
                summary.to_excel(writer, sheet_name="Summary", index=False)
                self._format_sheet(writer.sheets["Summary"], {"Metric": 30, "Value": 40})

            if statistics is not None and statistics.series:
                series_to_dataframe(statistics).to_excel(writer, sheet_name="Series", index=False)
                self._format_sheet(writer.sheets["Series"])

        buffer.seek(0)
        logger.info(f"Exported {len(df)} {schema.entity} records to Excel buffer")
        return buffer

    def _create_summary_df(
        self,
        records: Sequence[Any],
        schema: RecordSchema,
        statistics: Optional[StatisticsResult],
        filter_state: Optional[FilterState],
    ) -> pd.DataFrame:
        rows = [{"Metric": "Total Records", "Value": len(records)}]
        if filter_state is not None:
            rows.append({
                "Metric": "Filters",
                "Value": filter_state.get_summary(schema.labels()),
            })
        if statistics is not None:
            rows.extend(statistics_to_dataframe(statistics).to_dict("records"))
        rows.append({
            "Metric": "Export Date",
            "Value": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        })
        return pd.DataFrame(rows, columns=["Metric", "Value"])

    def _format_sheet(
        self,
        worksheet,
        column_widths: Optional[Dict[str, int]] = None,
    ) -> None:
        """Apply header styling, column widths and a frozen header row."""
        from openpyxl.styles import Alignment, Font, PatternFill

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")

        for cell in worksheet[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for cell in worksheet[1]:
            width = (column_widths or {}).get(cell.value)
            if width is None:
                width = max(12, len(str(cell.value or "")) + 4)
            worksheet.column_dimensions[cell.column_letter].width = width

        worksheet.freeze_panes = "A2"
