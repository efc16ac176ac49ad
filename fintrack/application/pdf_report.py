"""
PDF rendering for ExportReport (fpdf2, A4 portrait, core Helvetica font)
"""
from fpdf import FPDF

from fintrack.application.export import ExportReport, ReportRow
from fintrack.utils.money import format_money

# Column widths in mm (sum = 190, the printable width of A4 with 10mm margins)
_COLUMNS = [("Date", 30), ("Category", 40), ("Amount", 30), ("Description", 90)]
_MAX_DESCRIPTION_CHARS = 60


def _latin1(text: str) -> str:
    """Core PDF fonts only cover latin-1; replace anything else with '?'"""
    return text.encode("latin-1", "replace").decode("latin-1")


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def render_pdf(report: ExportReport, currency: str = "USD") -> bytes:
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(190, 10, "Income & Expense Report")
    pdf.ln(8)

    pdf.set_font("Helvetica", "", 10)
    pdf.cell(
        190, 6,
        f"Period: {report.start_date.isoformat()} to {report.end_date.isoformat()}",
    )
    pdf.ln(10)

    # Summary block
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(190, 8, "Summary")
    pdf.ln(6)
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(95, 6, _latin1(f"Total Income: {format_money(report.total_income, currency)}"))
    pdf.cell(95, 6, _latin1(f"Total Expense: {format_money(report.total_expense, currency)}"))
    pdf.ln(6)
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(190, 6, _latin1(f"Balance: {format_money(report.balance, currency)}"))
    pdf.ln(10)

    _section(pdf, "Income Details", report.income, currency)
    pdf.ln(5)
    _section(pdf, "Expense Details", report.expense, currency)

    return bytes(pdf.output())


def _section(pdf: FPDF, title: str, rows: list[ReportRow], currency: str) -> None:
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(190, 8, title)
    pdf.ln(6)

    pdf.set_font("Helvetica", "B", 9)
    for name, width in _COLUMNS:
        pdf.cell(width, 6, name)
    pdf.ln(6)

    pdf.set_font("Helvetica", "", 9)
    if not rows:
        pdf.cell(190, 6, "No records")
        pdf.ln(6)
        return

    for row in rows:
        values = [
            row.date.isoformat(),
            _truncate(row.category_name, 24),
            format_money(row.amount, currency),
            _truncate(row.description, _MAX_DESCRIPTION_CHARS),
        ]
        for (_, width), value in zip(_COLUMNS, values):
            pdf.cell(width, 6, _latin1(value))
        pdf.ln(6)
