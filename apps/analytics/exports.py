"""
CSV and PDF renderings of reports.

CSV writers take any file-like object, so a Django ``HttpResponse`` can be
passed directly. PDFs are drawn with the reportlab canvas and returned as
bytes.

Example:
    Sales report download::

        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="sales_report.csv"'
        write_sales_report_csv(report, response)
"""

import csv
import io

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .periods import Period


def describe_period(period, start_date, end_date):
    """Human readable period, e.g. "This Week (2026-10-18 to 2026-10-24)"."""
    label = Period(period).label
    if start_date is None or end_date is None:
        return f"{label} (all dates)"
    if start_date == end_date:
        return f"{label} ({start_date.isoformat()})"
    return f"{label} ({start_date.isoformat()} to {end_date.isoformat()})"


class PdfReport:
    """
    Minimal report writer on top of a reportlab canvas.

    Keeps track of the vertical position and starts a new page when the
    bottom margin is reached. Base-14 fonts have no rupee glyph, amounts
    are printed with the currency code instead.
    """

    MARGIN = 48
    LINE_HEIGHT = 14
    ROW_HEIGHT = 18

    def __init__(self, title):
        self.buffer = io.BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=A4)
        self.canvas.setTitle(title)
        self.width, self.height = A4
        self.y = self.height - self.MARGIN

    def _ensure_space(self, needed):
        if self.y - needed < self.MARGIN:
            self.canvas.showPage()
            self.y = self.height - self.MARGIN

    def heading(self, text, size=16):
        self._ensure_space(size + 8)
        self.canvas.setFont("Helvetica-Bold", size)
        self.canvas.drawString(self.MARGIN, self.y, text)
        self.y -= size + 8

    def text(self, text, bold=False, size=10):
        self._ensure_space(self.LINE_HEIGHT)
        self.canvas.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self.canvas.drawString(self.MARGIN, self.y, text)
        self.y -= self.LINE_HEIGHT

    def spacer(self, height=None):
        self.y -= height or self.LINE_HEIGHT

    def table(self, headers, rows, col_widths):
        """Boxed table; the header row is repeated on every new page."""

        def draw_row(cells, bold=False):
            self.canvas.setFont("Helvetica-Bold" if bold else "Helvetica", 9)
            x = self.MARGIN
            for cell, width in zip(cells, col_widths):
                self.canvas.rect(x, self.y - self.ROW_HEIGHT, width, self.ROW_HEIGHT)
                # Clip long cells to the column
                text = str(cell)
                max_chars = int(width / 5)
                if len(text) > max_chars:
                    text = text[:max_chars - 1] + '…'
                self.canvas.drawString(x + 3, self.y - self.ROW_HEIGHT + 5, text)
                x += width
            self.y -= self.ROW_HEIGHT

        self._ensure_space(self.ROW_HEIGHT * 2)
        draw_row(headers, bold=True)
        for row in rows:
            if self.y - self.ROW_HEIGHT < self.MARGIN:
                self.canvas.showPage()
                self.y = self.height - self.MARGIN
                draw_row(headers, bold=True)
            draw_row(row)
        self.y -= self.LINE_HEIGHT

    def finish(self) -> bytes:
        self.canvas.showPage()
        self.canvas.save()
        return self.buffer.getvalue()


# =============================================================================
# Sales report
# =============================================================================

def write_sales_report_csv(report, out):
    writer = csv.writer(out)

    writer.writerow(['Item', 'Quantity Sold', 'Amount'])
    for item in report['items']:
        writer.writerow([item['name'], item['quantity'], item['amount']])
    writer.writerow([])

    writer.writerow(['Expenditure', 'Category', 'Amount', 'Expense Date', 'Payment Mode'])
    for expense in report['expenditures']:
        writer.writerow([
            expense['item'],
            expense['category'],
            expense['amount'],
            expense['date'].isoformat(),
            expense['payment_mode'],
        ])
    writer.writerow([])

    writer.writerow(['Revenue', report['revenue']])
    writer.writerow(['Sales (Cash)', report['sales_cash']])
    writer.writerow(['Sales (UPI)', report['sales_upi']])
    writer.writerow(['Expenses', report['expenses']])
    writer.writerow(['Expenses (Cash)', report['expenses_cash']])
    writer.writerow(['Expenses (UPI)', report['expenses_upi']])
    writer.writerow(['Profit', report['profit']])


def render_sales_report_pdf(report, cafe_name, currency='INR') -> bytes:
    pdf = PdfReport(title='Sales Report')

    pdf.heading(cafe_name)
    pdf.heading('Sales Report', size=13)
    pdf.text(describe_period(report['period'], report['start_date'], report['end_date']))
    pdf.spacer()

    pdf.text('Items Sold', bold=True, size=12)
    pdf.table(
        ['Item', 'Quantity Sold', f'Amount ({currency})'],
        [[item['name'], item['quantity'], item['amount']] for item in report['items']],
        col_widths=[260, 110, 110],
    )

    pdf.text('Expenditures', bold=True, size=12)
    pdf.table(
        ['Item', f'Amount ({currency})', 'Date', 'Mode'],
        [
            [expense['item'], expense['amount'], expense['date'].isoformat(), expense['payment_mode']]
            for expense in report['expenditures']
        ],
        col_widths=[220, 100, 90, 70],
    )

    pdf.text(f"Revenue: {currency} {report['revenue']}", bold=True, size=12)
    pdf.text(f"Cash: {currency} {report['sales_cash']}")
    pdf.text(f"UPI: {currency} {report['sales_upi']}")
    pdf.text(f"Expenses (Cash): {currency} {report['expenses_cash']}")
    pdf.text(f"Expenses (UPI): {currency} {report['expenses_upi']}")
    pdf.text(f"Total Expenses: {currency} {report['expenses']}", bold=True, size=12)
    pdf.text(f"Net Profit: {currency} {report['profit']}", bold=True, size=12)

    return pdf.finish()
