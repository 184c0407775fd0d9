"""
PDF adapters built on fpdf2's table API.

The generic adapter renders the caller's columns with a configurable style;
the FMCSA adapter ignores the caller's columns and always renders the fixed
five-column driver report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Literal, Optional, Sequence, Tuple

from fpdf import FPDF
from fpdf.fonts import FontFace
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from driver_roster.domain.models import Record
from driver_roster.exporters.abstract import AbstractExporter, cell_text, cell_value, tabulate

Color = Tuple[int, int, int]

PAGE_MARGIN_X = 14
TITLE_Y = 15
TABLE_Y = 15
TITLE_GAP = 7
DEFAULT_STRIPE: Color = (245, 245, 245)

_BORDERS = {
    "grid": "ALL",
    "striped": "HORIZONTAL_LINES",
    "plain": "NONE",
}


class PdfStyle(BaseModel):
    title: Optional[str] = "Driver Report"
    title_font_size: int = 16
    font_size: int = 10
    theme: Literal["grid", "striped", "plain"] = "grid"
    header_color: Color = (66, 135, 245)
    header_text_color: Color = (255, 255, 255)
    alt_row_color: Optional[Color] = None
    table_start_y: Optional[float] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @property
    def start_y(self) -> float:
        """Table top; shifted down below the title when there is one."""
        if self.table_start_y is not None:
            return self.table_start_y
        return TITLE_Y + TITLE_GAP if self.title else TABLE_Y

    @property
    def stripe_color(self) -> Optional[Color]:
        if self.alt_row_color is not None:
            return self.alt_row_color
        return DEFAULT_STRIPE if self.theme == "striped" else None


def _pdf_safe_text(text: Any) -> str:
    if text is None:
        return ""
    return cell_text(text).encode("latin-1", "replace").decode("latin-1")


def render_table_pdf(
    path: Path,
    header: Sequence[str],
    body: Sequence[Sequence[Any]],
    style: PdfStyle,
    col_widths: Optional[Sequence[int]] = None,
) -> None:
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_margins(PAGE_MARGIN_X, TABLE_Y, PAGE_MARGIN_X)
    pdf.set_auto_page_break(True, margin=15)
    pdf.add_page()

    if style.title:
        pdf.set_font("Helvetica", "", style.title_font_size)
        pdf.text(PAGE_MARGIN_X, TITLE_Y, _pdf_safe_text(style.title))

    pdf.set_y(style.start_y)
    pdf.set_font("Helvetica", "", style.font_size)
    stripe = style.stripe_color
    table_kwargs: dict[str, Any] = {
        "borders_layout": _BORDERS[style.theme],
        "headings_style": FontFace(
            emphasis="BOLD", color=style.header_text_color, fill_color=style.header_color
        ),
        "text_align": "LEFT",
    }
    if stripe is not None:
        table_kwargs["cell_fill_color"] = stripe
        table_kwargs["cell_fill_mode"] = "ROWS"
    if col_widths:
        table_kwargs["col_widths"] = tuple(col_widths)

    with pdf.table(**table_kwargs) as table:
        heading = table.row()
        for label in header:
            heading.cell(_pdf_safe_text(label))
        for values in body:
            row = table.row()
            for value in values:
                row.cell(_pdf_safe_text(value))

    pdf.output(str(path))


def _column_widths(columns: Sequence[Any]) -> Optional[List[int]]:
    widths = [getattr(c, "size", None) or getattr(c, "width", None) for c in columns]
    if not widths or any(w is None for w in widths):
        return None
    return widths


class PdfExporter(AbstractExporter):
    """Styled table of the caller's columns."""

    name: str = "pdf"
    description: str = "PDF table with optional title and configurable theme."
    extension: str = "pdf"

    def __init__(self, output_dir: Path | str = "exports", style: Optional[PdfStyle] = None) -> None:
        super().__init__(output_dir)
        self.style = style or PdfStyle()

    def _write(self, path: Path, rows: Sequence[Record], columns: Sequence[Any]) -> None:
        header, body = tabulate(rows, columns)
        render_table_pdf(path, header, body, self.style, col_widths=_column_widths(columns))


FMCSA_TITLE = "FMCSA Driver Report"
FMCSA_HEADERS = ["Driver ID", "Name", "Status", "Location", "Hire Date"]
FMCSA_FIELDS = ["id", "name", "status", "location", "hireDate"]

FMCSA_STYLE = PdfStyle(
    title=FMCSA_TITLE,
    title_font_size=18,
    theme="striped",
    header_color=(0, 51, 102),
    header_text_color=(255, 255, 255),
    table_start_y=25,
)


def fmcsa_table(rows: Sequence[Record]) -> Tuple[List[str], List[List[Any]]]:
    """The fixed FMCSA schema, independent of any column spec."""
    return list(FMCSA_HEADERS), [[cell_value(r, key) for key in FMCSA_FIELDS] for r in rows]


class FmcsaExporter(AbstractExporter):
    name: str = "fmcsa"
    description: str = "FMCSA driver report (fixed five-column schema)."
    extension: str = "pdf"
    suffix: str = "-FMCSA"

    def _write(self, path: Path, rows: Sequence[Record], columns: Sequence[Any]) -> None:
        header, body = fmcsa_table(rows)
        render_table_pdf(path, header, body, FMCSA_STYLE)


__all__ = [
    "FMCSA_HEADERS",
    "FMCSA_STYLE",
    "FmcsaExporter",
    "PdfExporter",
    "PdfStyle",
    "fmcsa_table",
    "render_table_pdf",
]
