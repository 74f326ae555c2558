"""
Excel export helper wrapping xlsxwriter.

Provides ``ExcelExporter`` — a stateful builder that constructs a styled
workbook in memory and returns its bytes for streaming via FastAPI's
``StreamingResponse``.

Usage example::

    exporter = ExcelExporter(title="Proveedores", filters={"Estado": "Activos"})
    exporter.add_header()
    exporter.add_kpi_row({"Proveedores": 120, "Autorretenedores": 7})
    exporter.add_data_table(headers, rows, money_cols={6})
    exporter.add_sheet("Conceptos")
    exporter.add_data_table(concept_headers, concept_rows, money_cols={2}, rate_cols={3})
    file_bytes = exporter.finalize()

Design notes
------------
- Uses ``xlsxwriter`` in in-memory mode (``BytesIO``).
- Column widths are auto-sized from the longest value in each column
  (capped at 60 characters).
- Money columns use the Colombian peso format ``#,##0`` (no decimals);
  rate columns use ``0.00``.
- Alternating row shading uses light grey every other data row.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import Any, Sequence

import xlsxwriter
from xlsxwriter.worksheet import Worksheet

from app.config import get_settings

_COLOR_PRIMARY = "#0F766E"
_COLOR_SUBHEADER_BG = "#134E4A"
_COLOR_WHITE = "#FFFFFF"
_COLOR_LIGHT_GREY = "#F3F4F6"
_COLOR_BORDER = "#E5E7EB"

_FORMAT_PESOS = "#,##0"
_FORMAT_RATE = "0.00"

_MAX_COL_WIDTH = 60
_MIN_COL_WIDTH = 8


class ExcelExporter:
    """Workbook builder for the ERP exports.

    Each sheet gets an optional header block, an optional KPI row and a
    styled data table.

    Args:
        title: Title written in the header, e.g. ``"Proveedores"``.
        filters: Applied filter labels shown under the title.
        sheet_name: Name of the first worksheet tab.
    """

    def __init__(
        self,
        title: str,
        filters: dict[str, str] | None = None,
        sheet_name: str = "Datos",
    ) -> None:
        self._title = title
        self._filters = filters or {}

        self._buffer = io.BytesIO()
        self._workbook = xlsxwriter.Workbook(self._buffer, {"in_memory": True})
        self._worksheet: Worksheet = self._workbook.add_worksheet(sheet_name)
        self._current_row: int = 0
        self._num_cols: int = 1

        self._formats: dict[str, Any] = self._build_formats()

    # -----------------------------------------------------------------------
    # Format factory
    # -----------------------------------------------------------------------

    def _build_formats(self) -> dict[str, Any]:
        wb = self._workbook
        cell = {
            "font_size": 9,
            "font_color": "#111827",
            "valign": "vcenter",
            "border": 1,
            "border_color": _COLOR_BORDER,
        }
        formats: dict[str, Any] = {
            "header_main": wb.add_format({
                "bold": True,
                "font_size": 16,
                "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_PRIMARY,
                "align": "center",
                "valign": "vcenter",
            }),
            "header_sub": wb.add_format({
                "font_size": 10,
                "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_SUBHEADER_BG,
                "align": "center",
                "valign": "vcenter",
            }),
            "filter_key": wb.add_format({
                "bold": True,
                "font_size": 9,
                "bg_color": "#E5E7EB",
                "align": "right",
            }),
            "filter_value": wb.add_format({"font_size": 9, "bg_color": "#F9FAFB"}),
            "kpi_label": wb.add_format({
                "bold": True,
                "font_size": 10,
                "bg_color": "#ECFDF5",
                "align": "center",
                "border": 1,
                "border_color": "#A7F3D0",
            }),
            "kpi_value": wb.add_format({
                "bold": True,
                "font_size": 12,
                "font_color": _COLOR_PRIMARY,
                "bg_color": "#ECFDF5",
                "align": "center",
                "num_format": _FORMAT_PESOS,
                "border": 1,
                "border_color": "#A7F3D0",
            }),
            "col_header": wb.add_format({
                "bold": True,
                "font_size": 10,
                "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_SUBHEADER_BG,
                "align": "center",
                "valign": "vcenter",
                "border": 1,
                "border_color": "#CBD5E1",
                "text_wrap": True,
            }),
        }

        # Data cells: (kind, shaded) → format
        for kind, extra in (
            ("text", {"align": "left"}),
            ("money", {"align": "right", "num_format": _FORMAT_PESOS}),
            ("rate", {"align": "right", "num_format": _FORMAT_RATE}),
        ):
            formats[f"data_{kind}"] = wb.add_format({**cell, **extra, "bg_color": _COLOR_WHITE})
            formats[f"data_{kind}_alt"] = wb.add_format(
                {**cell, **extra, "bg_color": _COLOR_LIGHT_GREY}
            )
        return formats

    # -----------------------------------------------------------------------
    # Public builder methods
    # -----------------------------------------------------------------------

    def add_sheet(self, sheet_name: str) -> "ExcelExporter":
        """Start a new worksheet; following calls write to it."""
        self._worksheet = self._workbook.add_worksheet(sheet_name)
        self._current_row = 0
        self._num_cols = 1
        return self

    def add_header(self) -> "ExcelExporter":
        """Write the title, generation timestamp and filter rows."""
        ws = self._worksheet
        num_cols = max(self._num_cols, 6)

        ws.set_row(self._current_row, 32)
        ws.merge_range(
            self._current_row, 0, self._current_row, num_cols - 1,
            f"{get_settings().APP_NAME} — {self._title}",
            self._formats["header_main"],
        )
        self._current_row += 1

        gen_ts = datetime.now(timezone.utc).strftime("%d/%m/%Y %H:%M UTC")
        ws.merge_range(
            self._current_row, 0, self._current_row, num_cols - 1,
            f"Generado: {gen_ts}",
            self._formats["header_sub"],
        )
        self._current_row += 1

        for key, value in self._filters.items():
            ws.write(self._current_row, 0, key, self._formats["filter_key"])
            ws.merge_range(
                self._current_row, 1, self._current_row, num_cols - 1,
                value,
                self._formats["filter_value"],
            )
            self._current_row += 1

        self._current_row += 1
        return self

    def add_kpi_row(self, kpis: dict[str, Any]) -> "ExcelExporter":
        """Write label cells above value cells, one column per KPI."""
        ws = self._worksheet
        for col, (label, value) in enumerate(kpis.items()):
            ws.write(self._current_row, col, label, self._formats["kpi_label"])
            ws.write(self._current_row + 1, col, value, self._formats["kpi_value"])
        self._current_row += 3  # label row + value row + blank separator
        return self

    def add_data_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        money_cols: set[int] | None = None,
        rate_cols: set[int] | None = None,
    ) -> "ExcelExporter":
        """Write a styled table with alternating shading.

        Args:
            headers: Column header strings.
            rows: Data rows, each as long as ``headers``.
            money_cols: Zero-based columns written with the peso format.
            rate_cols: Zero-based columns written with the rate format.
        """
        ws = self._worksheet
        money_cols = money_cols or set()
        rate_cols = rate_cols or set()
        self._num_cols = len(headers)

        col_widths: list[int] = [len(str(h)) for h in headers]

        ws.set_row(self._current_row, 20)
        for ci, hdr in enumerate(headers):
            ws.write(self._current_row, ci, hdr, self._formats["col_header"])
        self._current_row += 1

        for ri, data_row in enumerate(rows):
            suffix = "_alt" if ri % 2 == 1 else ""
            for ci, cell_val in enumerate(data_row):
                if ci in money_cols:
                    kind = "money"
                elif ci in rate_cols:
                    kind = "rate"
                else:
                    kind = "text"
                ws.write(self._current_row, ci, cell_val, self._formats[f"data_{kind}{suffix}"])

                cell_str = str(cell_val) if cell_val is not None else ""
                col_widths[ci] = min(_MAX_COL_WIDTH, max(col_widths[ci], len(cell_str)))
            self._current_row += 1

        for ci, width in enumerate(col_widths):
            ws.set_column(ci, ci, max(width + 2, _MIN_COL_WIDTH))
        return self

    def finalize(self) -> bytes:
        """Close the workbook and return the ``.xlsx`` bytes."""
        self._workbook.close()
        self._buffer.seek(0)
        return self._buffer.read()
