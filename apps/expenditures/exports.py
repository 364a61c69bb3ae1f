import csv

from apps.analytics.exports import PdfReport, describe_period


def write_expenditures_csv(expenditures, out):
    writer = csv.writer(out)
    writer.writerow(['date', 'item', 'category', 'amount', 'payment_mode', 'notes'])
    for expenditure in expenditures:
        writer.writerow([
            expenditure.date.isoformat(),
            expenditure.item,
            expenditure.category,
            expenditure.amount,
            expenditure.payment_mode,
            expenditure.notes,
        ])


def render_expenditures_pdf(expenditures, total, cafe_name, period, start_date, end_date,
                            generated_on, currency='INR') -> bytes:
    pdf = PdfReport(title='Expenditure Report')

    pdf.heading(cafe_name)
    pdf.heading('Expenditure Report', size=13)
    pdf.text(describe_period(period, start_date, end_date))
    pdf.text(f"Generated on: {generated_on.isoformat()}")
    pdf.spacer()

    pdf.table(
        ['Date', 'Item', 'Category', f'Amount ({currency})', 'Mode', 'Notes'],
        [
            [
                expenditure.date.isoformat(),
                expenditure.item,
                expenditure.category,
                expenditure.amount,
                expenditure.payment_mode,
                expenditure.notes,
            ]
            for expenditure in expenditures
        ],
        col_widths=[65, 120, 80, 75, 45, 115],
    )

    pdf.text(f"TOTAL: {currency} {total}", bold=True, size=12)
    return pdf.finish()
